import threading

from conftest import StaticBuilder, build_sample_index

from demosdk_docs_mcp.docs.context import DocsContext
from demosdk_docs_mcp.docs.models import DocIndex


def test_ensure_initialized_builds_once(make_config):
    builder = StaticBuilder(build_sample_index())
    context = DocsContext(make_config(), builder=builder)
    assert not context.is_initialized
    assert context.source == "empty"

    assert context.ensure_initialized() is True
    assert context.ensure_initialized() is True
    assert builder.calls == 1
    assert context.is_initialized
    assert context.source == "cache"
    assert context.index.stats()["classes"] == 2
    assert context.search_engine.get_class_docs("Demos") is not None


def test_concurrent_initialization_builds_once(make_config):
    builder = StaticBuilder(build_sample_index())
    context = DocsContext(make_config(), builder=builder)
    threads = [threading.Thread(target=context.ensure_initialized) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert builder.calls == 1


def test_empty_index_reports_unavailable(empty_context):
    assert empty_context.ensure_initialized() is False
    assert empty_context.is_initialized
    assert empty_context.search_engine.search("demos") == []


def test_build_errors_leave_empty_index(make_config, caplog):
    class FailingBuilder:
        def build(self):
            raise RuntimeError("parser exploded")

    context = DocsContext(make_config(), builder=FailingBuilder())
    assert context.ensure_initialized() is False
    assert context.index.is_empty()
    assert context.source == "empty"
    assert "Error initializing documentation" in caplog.text


def test_rebuild_replaces_index(make_config):
    builder = StaticBuilder(DocIndex(), source="empty")
    context = DocsContext(make_config(), builder=builder)
    assert context.ensure_initialized() is False

    builder.index = build_sample_index()
    builder.source = "html"
    assert context.rebuild() is True
    assert context.source == "html"
    assert [r.entry.name for r in context.search_engine.search("IWallet")] == ["IWallet"]
    assert builder.calls == 2


def test_default_builder_uses_config(make_config, api_ref_dir):
    context = DocsContext(make_config(api_ref_dir=api_ref_dir))
    assert context.ensure_initialized() is True
    assert context.source == "html"
