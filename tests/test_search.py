import pytest

from demosdk_docs_mcp.docs.models import ClassDoc, DocIndex, EnumDoc, InterfaceDoc, MethodDoc, PropertyDoc
from demosdk_docs_mcp.docs.search import DocumentationSearch, score_entry


@pytest.fixture
def engine(sample_index):
    return DocumentationSearch(sample_index)


def test_method_name_match_scores_eighty():
    index = DocIndex()
    index.add(ClassDoc(name="Demos", methods=(MethodDoc(name="connect"),)))
    results = DocumentationSearch(index).search("connect")
    assert [(r.entry.name, r.score) for r in results] == [("Demos", 80)]


def test_scores_are_additive(engine):
    results = engine.search("demos")
    # Demos: exact name + description + content; DemosWebAuth: prefix only.
    assert [(r.entry.name, r.score) for r in results] == [("Demos", 130), ("DemosWebAuth", 75)]


def test_method_description_adds_points(engine):
    (result,) = engine.search("connect")
    assert result.entry.name == "Demos"
    assert result.score == 80 + 15


def test_name_tiers_are_exclusive():
    exact = ClassDoc(name="Wallet", full_name="Wallet")
    prefix = ClassDoc(name="WalletFactory", full_name="WalletFactory")
    partial = ClassDoc(name="HDWallet", full_name="HDWallet")
    assert score_entry(exact, "wallet") == 100
    assert score_entry(prefix, "wallet") == 75
    assert score_entry(partial, "wallet") == 50


def test_property_scores():
    entry = InterfaceDoc(
        name="IConfig",
        properties=(PropertyDoc(name="rpc"), PropertyDoc(name="rpcUrl"), PropertyDoc(name="timeout")),
    )
    assert score_entry(entry, "rpc") == 70 + 35


def test_exact_match_ranks_first():
    index = DocIndex()
    index.add(ClassDoc(name="TransactionBuilder"))
    index.add(ClassDoc(name="RawTransaction"))
    index.add(ClassDoc(name="Transaction"))
    results = DocumentationSearch(index).search("Transaction")
    assert [r.entry.name for r in results] == ["Transaction", "TransactionBuilder", "RawTransaction"]


def test_ties_keep_traversal_order():
    index = DocIndex()
    index.add(EnumDoc(name="ChainA", description="chain"))
    index.add(ClassDoc(name="ChainB", description="chain"))
    index.add(ClassDoc(name="ChainC", description="chain"))
    results = DocumentationSearch(index).search("chain")
    assert [r.entry.name for r in results] == ["ChainB", "ChainC", "ChainA"]


def test_limit_and_ordering(engine):
    results = engine.search("e", limit=3)
    assert len(results) <= 3
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


@pytest.mark.parametrize("query", [None, "", "   ", 42, ["demos"]])
def test_invalid_queries_return_nothing(engine, query):
    assert engine.search(query) == []


def test_non_positive_limit_returns_nothing(engine):
    assert engine.search("demos", limit=0) == []
    assert engine.search("demos", limit=-5) == []


def test_limit_none_uses_default(engine):
    assert len(engine.search("demos", limit=None)) == 2


def test_doc_type_filter(engine):
    assert [(r.entry.name, r.score) for r in engine.search("wallet")] == [("IWallet", 70), ("DemosWebAuth", 20)]
    assert [r.entry.name for r in engine.search("wallet", doc_type="interface")] == ["IWallet"]
    assert engine.search("demos", doc_type="interface") == []
    assert engine.search("demos", doc_type="module") == []


def test_doc_type_filter_applies_before_limit(engine):
    assert [r.entry.name for r in engine.search("wallet", doc_type="class", limit=1)] == ["DemosWebAuth"]


def test_filter_by_type(engine):
    results = engine.search("wallet")
    assert [r.kind for r in DocumentationSearch.filter_by_type(results, "class")] == ["class"]
    assert DocumentationSearch.filter_by_type(results, None) == results


def test_result_to_dict(engine):
    data = engine.search("demos")[0].to_dict()
    assert data["type"] == "class"
    assert data["category"] == "class"
    assert data["score"] == 130


def test_format_results(engine):
    results = engine.search("demos")
    formatted = DocumentationSearch.format_results(results, "demos", limit=1)
    assert formatted["query"] == "demos"
    assert formatted["total"] == 2
    assert formatted["showing"] == 1
    (item,) = formatted["results"]
    assert item["name"] == "Demos"
    assert item["methods"] == ["connect", "confirm", "broadcast"]
    assert item["properties"] == ["rpc_url"]


def test_get_class_docs(engine):
    assert engine.get_class_docs("demos").name == "Demos"
    assert engine.get_class_docs("websdk.Demos").name == "Demos"
    assert engine.get_class_docs("Missing") is None
    assert engine.get_class_docs(None) is None
    assert engine.get_class_docs("IWallet") is None


def test_get_interface_docs(engine):
    assert engine.get_interface_docs("iwallet").full_name == "websdk.IWallet"
    assert engine.get_interface_docs("Demos") is None


def test_get_method_docs(engine):
    found = engine.get_method_docs("Demos", "CONNECT")
    assert found.class_name == "Demos"
    assert found.method.name == "connect"
    assert found.to_dict()["method"]["signature"].startswith("connect(")
    assert engine.get_method_docs("Demos", "missing") is None
    assert engine.get_method_docs("Nope", "connect") is None
    assert engine.get_method_docs("Demos", None) is None


def test_listings_and_stats(engine):
    assert engine.list_classes() == [
        {"name": "Demos", "fullName": "websdk.Demos", "description": "Main entry point for the Demos network."},
        {"name": "DemosWebAuth", "fullName": "websdk.DemosWebAuth", "description": "Keypair management for browser wallets."},
    ]
    assert [item["name"] for item in engine.list_interfaces()] == ["IWallet"]
    assert [item["name"] for item in engine.list_functions()] == ["prepareTransfer"]
    assert engine.get_stats()["total"] == 5
