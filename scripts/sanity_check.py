"""Minimal sanity checks for the DemoSDK documentation tools."""

from __future__ import annotations

import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from demosdk_docs_mcp.docs.context import default_context  # noqa: E402
from demosdk_docs_mcp.tools import (  # noqa: E402
    get_class_docs,
    get_docs_stats,
    get_method_docs,
    list_classes,
    search_docs,
)

# Override via env to probe a different part of the SDK.
SAMPLE_QUERY = os.getenv("DEMOSDK_SAMPLE_QUERY", "connect")
SAMPLE_CLASS = os.getenv("DEMOSDK_SAMPLE_CLASS", "Demos")
SAMPLE_METHOD = os.getenv("DEMOSDK_SAMPLE_METHOD", "connect")


def main() -> int:
    if not default_context.ensure_initialized():
        print("No documentation available. Run `demosdk-docs-update` first.")
        return 1

    print("Stats:", get_docs_stats())
    print(list_classes())
    print(search_docs(SAMPLE_QUERY, limit=3))
    print(get_class_docs(SAMPLE_CLASS))
    print(get_method_docs(SAMPLE_CLASS, SAMPLE_METHOD))
    return 0


if __name__ == "__main__":
    sys.exit(main())
