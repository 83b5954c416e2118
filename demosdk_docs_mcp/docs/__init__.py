"""Documentation parsing, indexing and search for the DemoSDK."""

from .builder import BuildResult, IndexBuilder, load_cached_index
from .context import DocsContext, default_context
from .models import (
    COLLECTION_NAMES,
    DOC_KINDS,
    ClassDoc,
    DocEntry,
    DocIndex,
    EnumDoc,
    FunctionDoc,
    InterfaceDoc,
    MethodDoc,
    ParameterDoc,
    PropertyDoc,
    TypeDoc,
    VariableDoc,
)
from .parser import DocumentationParser
from .search import DocumentationSearch, MethodLookup, SearchResult

__all__ = [
    "BuildResult",
    "IndexBuilder",
    "load_cached_index",
    "DocsContext",
    "default_context",
    "COLLECTION_NAMES",
    "DOC_KINDS",
    "ClassDoc",
    "DocEntry",
    "DocIndex",
    "EnumDoc",
    "FunctionDoc",
    "InterfaceDoc",
    "MethodDoc",
    "ParameterDoc",
    "PropertyDoc",
    "TypeDoc",
    "VariableDoc",
    "DocumentationParser",
    "DocumentationSearch",
    "MethodLookup",
    "SearchResult",
]
