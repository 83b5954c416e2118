"""Documentation tools rendered as markdown for LLM clients."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from demosdk_docs_mcp.config import DocsConfig, default_config
from demosdk_docs_mcp.docs.context import DocsContext, default_context
from demosdk_docs_mcp.docs.models import ClassDoc, InterfaceDoc, MemberDoc
from demosdk_docs_mcp.docs.search import DocumentationSearch
from demosdk_docs_mcp.metrics import default_metrics
from demosdk_docs_mcp.tools.validators import clamp_limit, is_present, normalize_doc_type

logger = logging.getLogger(__name__)

PREVIEW_COUNT = 5
UPDATE_HINT = "Run `demosdk-docs-update` to generate documentation."


def _preview_names(names: Sequence[str]) -> str:
    text = ", ".join(names[:PREVIEW_COUNT])
    if len(names) > PREVIEW_COUNT:
        text += f" (and {len(names) - PREVIEW_COUNT} more)"
    return text


def _render_members(doc: MemberDoc, heading: str) -> List[str]:
    lines = [f"# {heading}", ""]
    if doc.description:
        lines += [doc.description, ""]

    if doc.methods:
        lines += ["## Methods", ""]
        for method in doc.methods:
            lines.append(f"### {method.name}")
            if method.signature:
                lines += ["```typescript", method.signature, "```", ""]
            if method.description:
                lines += [method.description, ""]
            lines += ["---", ""]

    if doc.properties:
        lines += ["## Properties", ""]
        for prop in doc.properties:
            line = f"- **{prop.name}**"
            if prop.type:
                line += f": `{prop.type}`"
            lines.append(line)
        lines.append("")
    return lines


def search_docs(
    query: Optional[str] = None,
    doc_type: Optional[str] = None,
    limit: Optional[int] = None,
    *,
    structured: bool = False,
    context: DocsContext = default_context,
    config: DocsConfig = default_config,
) -> Any:
    """
    Search the DemoSDK documentation.

    Args:
        query: Free-text query (class, method or property name, keyword).
        doc_type: Optional kind filter (class, interface, function, enum).
        limit: Maximum results, clamped to ``config.max_search_limit``.
        structured: Return a JSON summary (query, total, showing, results)
            instead of markdown. ``total`` counts matches up to the clamp.
        context: Documentation context (override for testing).

    Returns:
        Markdown text, the structured summary, or an error dict for
        missing/invalid arguments.
    """
    if not is_present(query):
        return {"error": "Query parameter is required."}

    kind = None
    if doc_type is not None and doc_type != "":
        kind = normalize_doc_type(doc_type)
        if kind is None:
            return {"error": "Invalid type. Use class, interface, function or enum."}

    effective_limit = clamp_limit(limit, default=config.default_search_limit, max_value=config.max_search_limit)
    context.ensure_initialized()
    if structured:
        matches = context.search_engine.search(query, doc_type=kind, limit=config.max_search_limit)
        summary = DocumentationSearch.format_results(matches, query=query, limit=effective_limit)
        default_metrics.record_search(hits=summary["showing"])
        return summary

    results = context.search_engine.search(query, doc_type=kind, limit=effective_limit)
    default_metrics.record_search(hits=len(results))

    if not results:
        return (
            f'No results found for "{query}".\n\n'
            "Try:\n"
            '- Searching for a class name (e.g., "Demos")\n'
            '- Searching for a method (e.g., "connect")\n'
            "- Using broader terms\n\n"
            "Run `list_classes` to see all available classes."
        )

    lines = [f'# Search Results for "{query}"', "", f"Found {len(results)} result(s):", ""]
    for result in results:
        entry = result.entry
        lines.append(f"## {entry.name} ({result.kind})")
        if entry.description:
            lines += [entry.description, ""]
        if isinstance(entry, MemberDoc):
            if entry.methods:
                lines += [f"**Methods:** {_preview_names([m.name for m in entry.methods])}", ""]
            if entry.properties:
                lines += [f"**Properties:** {_preview_names([p.name for p in entry.properties])}", ""]
        lines += [f"*Relevance Score: {result.score}*", "", "---", ""]
    lines.append("Use `get_class_docs` with a class name to see full documentation.")
    return "\n".join(lines)


def get_class_docs(class_name: Optional[str] = None, *, context: DocsContext = default_context) -> Any:
    """Full documentation for one class."""
    if not is_present(class_name):
        return {"error": "className parameter is required."}

    context.ensure_initialized()
    doc: Optional[ClassDoc] = context.search_engine.get_class_docs(class_name)
    if doc is None:
        return f'Class "{class_name}" not found.\n\nRun `list_classes` to see all available classes.'
    return "\n".join(_render_members(doc, doc.name))


def get_interface_docs(interface_name: Optional[str] = None, *, context: DocsContext = default_context) -> Any:
    """Full documentation for one interface."""
    if not is_present(interface_name):
        return {"error": "interfaceName parameter is required."}

    context.ensure_initialized()
    doc: Optional[InterfaceDoc] = context.search_engine.get_interface_docs(interface_name)
    if doc is None:
        return f'Interface "{interface_name}" not found.\n\nRun `list_interfaces` to see all available interfaces.'
    lines = _render_members(doc, doc.name)
    if not doc.methods and not doc.properties and doc.content:
        lines += ["## Definition", "", "```typescript", doc.content.strip(), "```", ""]
    return "\n".join(lines)


def get_method_docs(
    class_name: Optional[str] = None,
    method_name: Optional[str] = None,
    *,
    context: DocsContext = default_context,
) -> Any:
    """Documentation for one method of a class."""
    if not is_present(class_name) or not is_present(method_name):
        return {"error": "className and methodName parameters are required."}

    context.ensure_initialized()
    found = context.search_engine.get_method_docs(class_name, method_name)
    if found is None:
        return (
            f'Method "{method_name}" not found in class "{class_name}".\n\n'
            "Use `get_class_docs` to see all methods of the class."
        )

    lines = [f"# {found.class_name}.{found.method.name}", ""]
    if found.method.signature:
        lines += ["## Signature", "", "```typescript", found.method.signature, "```", ""]
    if found.method.description:
        lines += ["## Description", "", found.method.description, ""]
    return "\n".join(lines)


def _render_listing(title: str, items: List[Dict[str, str]], empty_label: str, footer: Optional[str] = None) -> str:
    if not items:
        return f"No {empty_label} found. {UPDATE_HINT}"
    lines = [f"# DemoSDK {title} ({len(items)})", ""]
    for item in items:
        lines.append(f"## {item['name']}")
        if item.get("description"):
            lines.append(item["description"])
        lines.append("")
    if footer:
        lines.append(footer)
    return "\n".join(lines)


def list_classes(*, context: DocsContext = default_context) -> str:
    """List every documented class."""
    context.ensure_initialized()
    return _render_listing(
        "Classes",
        context.search_engine.list_classes(),
        "classes",
        footer="Use `get_class_docs` with a class name to see full documentation.",
    )


def list_interfaces(*, context: DocsContext = default_context) -> str:
    """List every documented interface."""
    context.ensure_initialized()
    return _render_listing("Interfaces", context.search_engine.list_interfaces(), "interfaces")


def list_functions(*, context: DocsContext = default_context) -> str:
    """List every documented top-level function."""
    context.ensure_initialized()
    return _render_listing("Functions", context.search_engine.list_functions(), "functions")


def get_docs_stats(*, context: DocsContext = default_context) -> Dict[str, Any]:
    """Entry counts per kind and where the index came from."""
    available = context.ensure_initialized()
    stats: Dict[str, Any] = dict(context.search_engine.get_stats())
    stats["source"] = context.source
    stats["available"] = available
    return stats
