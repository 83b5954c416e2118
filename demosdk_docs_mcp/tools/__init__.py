"""LLM-facing tool implementations."""

from .docs import (
    get_class_docs,
    get_docs_stats,
    get_interface_docs,
    get_method_docs,
    list_classes,
    list_functions,
    list_interfaces,
    search_docs,
)
from . import validators

__all__ = [
    "search_docs",
    "get_class_docs",
    "get_interface_docs",
    "get_method_docs",
    "list_classes",
    "list_interfaces",
    "list_functions",
    "get_docs_stats",
    "validators",
]
