import pytest

from conftest import StaticBuilder

from demosdk_docs_mcp.docs.context import DocsContext
from demosdk_docs_mcp.docs.models import ClassDoc, DocIndex, InterfaceDoc, MethodDoc
from demosdk_docs_mcp.metrics import default_metrics
from demosdk_docs_mcp.tools.docs import (
    get_class_docs,
    get_docs_stats,
    get_interface_docs,
    get_method_docs,
    list_classes,
    list_functions,
    list_interfaces,
    search_docs,
)


def test_search_requires_query(sample_context):
    assert search_docs(None, context=sample_context) == {"error": "Query parameter is required."}
    assert search_docs("   ", context=sample_context) == {"error": "Query parameter is required."}


def test_search_rejects_unknown_type(sample_context):
    result = search_docs("demos", doc_type="module", context=sample_context)
    assert result == {"error": "Invalid type. Use class, interface, function or enum."}


def test_search_renders_markdown(sample_context):
    text = search_docs("demos", doc_type="Classes", context=sample_context)
    assert text.startswith('# Search Results for "demos"')
    assert "Found 2 result(s):" in text
    assert "## Demos (class)" in text
    assert "**Methods:** connect, confirm, broadcast" in text
    assert "**Properties:** rpc_url" in text
    assert "*Relevance Score: 130*" in text
    assert text.index("## Demos (class)") < text.index("## DemosWebAuth (class)")
    assert default_metrics.snapshot()["searches"] == 1


def test_search_empty_type_means_no_filter(sample_context):
    text = search_docs("wallet", doc_type="", context=sample_context)
    assert "## IWallet (interface)" in text
    assert "## DemosWebAuth (class)" in text


def test_search_structured_summary(sample_context):
    summary = search_docs("demos", doc_type="class", limit=1, structured=True, context=sample_context)
    assert summary["query"] == "demos"
    assert summary["total"] == 2
    assert summary["showing"] == 1
    (top,) = summary["results"]
    assert top["type"] == "class"
    assert top["name"] == "Demos"
    assert top["score"] == 130
    assert top["methods"] == ["connect", "confirm", "broadcast"]
    assert top["properties"] == ["rpc_url"]
    assert default_metrics.snapshot()["searches"] == 1


def test_search_structured_total_counts_past_limit(make_config):
    index = DocIndex()
    for i in range(60):
        index.add(ClassDoc(name=f"Chain{i}"))
    context = DocsContext(make_config(), builder=StaticBuilder(index))

    summary = search_docs("chain", limit=3, structured=True, context=context)
    assert (summary["total"], summary["showing"]) == (50, 3)
    assert search_docs("zzz", structured=True, context=context)["results"] == []


def test_search_no_results(sample_context):
    text = search_docs("zzz", context=sample_context)
    assert text.startswith('No results found for "zzz".')
    snapshot = default_metrics.snapshot()
    assert snapshot["searches"] == 1
    assert snapshot["empty_searches"] == 1


def test_search_limit_is_clamped(make_config):
    index = DocIndex()
    for i in range(60):
        index.add(ClassDoc(name=f"Chain{i}"))
    context = DocsContext(make_config(), builder=StaticBuilder(index))

    assert search_docs("chain", limit=500, context=context).count("## Chain") == 50
    assert search_docs("chain", limit=3, context=context).count("## Chain") == 3
    assert search_docs("chain", context=context).count("## Chain") == 10


def test_search_previews_long_member_lists(make_config):
    methods = tuple(MethodDoc(name=f"m{i}") for i in range(7))
    index = DocIndex()
    index.add(ClassDoc(name="Wide", methods=methods))
    context = DocsContext(make_config(), builder=StaticBuilder(index))
    text = search_docs("wide", context=context)
    assert "**Methods:** m0, m1, m2, m3, m4 (and 2 more)" in text


def test_get_class_docs(sample_context):
    text = get_class_docs("demos", context=sample_context)
    assert text.startswith("# Demos\n")
    assert "## Methods" in text
    assert "### connect" in text
    assert "```typescript\nconnect(rpc: string): Promise<boolean>\n```" in text
    assert "## Properties" in text
    assert "- **rpc_url**: `string`" in text


@pytest.mark.parametrize("value", [None, "", "  "])
def test_get_class_docs_requires_name(sample_context, value):
    assert get_class_docs(value, context=sample_context) == {"error": "className parameter is required."}


def test_get_class_docs_not_found(sample_context):
    text = get_class_docs("Nope", context=sample_context)
    assert text.startswith('Class "Nope" not found.')


def test_get_interface_docs(sample_context):
    text = get_interface_docs("IWallet", context=sample_context)
    assert text.startswith("# IWallet")
    assert "- **address**: `string`" in text
    assert "## Definition" not in text
    assert get_interface_docs(None, context=sample_context) == {"error": "interfaceName parameter is required."}
    assert get_interface_docs("Missing", context=sample_context).startswith('Interface "Missing" not found.')


def test_get_interface_docs_shows_definition_without_members(make_config):
    index = DocIndex()
    index.add(InterfaceDoc(name="TransferOptions", description="Interface TransferOptions", content="\n  to: string;\n"))
    context = DocsContext(make_config(), builder=StaticBuilder(index))
    text = get_interface_docs("TransferOptions", context=context)
    assert "## Definition" in text
    assert "```typescript\nto: string;\n```" in text


def test_get_method_docs(sample_context):
    text = get_method_docs("Demos", "connect", context=sample_context)
    assert text.startswith("# Demos.connect")
    assert "## Signature" in text
    assert "## Description\n\nConnects to an RPC node." in text


def test_get_method_docs_errors(sample_context):
    expected = {"error": "className and methodName parameters are required."}
    assert get_method_docs("Demos", None, context=sample_context) == expected
    assert get_method_docs(None, "connect", context=sample_context) == expected
    text = get_method_docs("Demos", "teleport", context=sample_context)
    assert text.startswith('Method "teleport" not found in class "Demos".')


def test_listings(sample_context):
    classes = list_classes(context=sample_context)
    assert classes.startswith("# DemoSDK Classes (2)")
    assert "## DemosWebAuth\nKeypair management for browser wallets." in classes
    assert list_interfaces(context=sample_context).startswith("# DemoSDK Interfaces (1)")
    assert list_functions(context=sample_context).startswith("# DemoSDK Functions (1)")


def test_listings_on_empty_index(empty_context):
    assert list_classes(context=empty_context) == (
        "No classes found. Run `demosdk-docs-update` to generate documentation."
    )
    assert list_interfaces(context=empty_context).startswith("No interfaces found.")
    assert list_functions(context=empty_context).startswith("No functions found.")


def test_get_docs_stats(sample_context, empty_context):
    stats = get_docs_stats(context=sample_context)
    assert stats["total"] == 5
    assert stats["classes"] == 2
    assert stats["source"] == "cache"
    assert stats["available"] is True

    empty = get_docs_stats(context=empty_context)
    assert empty["total"] == 0
    assert empty["available"] is False
    assert empty["source"] == "empty"
