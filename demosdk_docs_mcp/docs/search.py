"""
Keyword search over a ``DocIndex``.

Scores are additive across fields. Within the name field only the best tier
counts (exact, then prefix, then substring); description, content, method and
property matches each add their own points on top.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .models import (
    COLLECTION_NAMES,
    ClassDoc,
    DocEntry,
    DocIndex,
    InterfaceDoc,
    MemberDoc,
    MethodDoc,
)

EXACT_NAME_SCORE = 100
PREFIX_NAME_SCORE = 75
PARTIAL_NAME_SCORE = 50
DESCRIPTION_SCORE = 20
CONTENT_SCORE = 10
EXACT_METHOD_SCORE = 80
PARTIAL_METHOD_SCORE = 40
METHOD_DESCRIPTION_SCORE = 15
EXACT_PROPERTY_SCORE = 70
PARTIAL_PROPERTY_SCORE = 35

DEFAULT_LIMIT = 10


@dataclass(frozen=True, slots=True)
class SearchResult:
    entry: DocEntry
    score: int

    @property
    def kind(self) -> str:
        return self.entry.kind

    def to_dict(self) -> Dict[str, Any]:
        data = self.entry.to_dict()
        data["score"] = self.score
        data["category"] = self.kind
        return data


@dataclass(frozen=True, slots=True)
class MethodLookup:
    class_name: str
    method: MethodDoc

    def to_dict(self) -> Dict[str, Any]:
        return {"class": self.class_name, "method": self.method.to_dict()}


def normalize_query(query: Any) -> Optional[str]:
    """Lowercased, trimmed query text, or None when there is nothing to match."""
    if not isinstance(query, str):
        return None
    normalized = query.lower().strip()
    return normalized or None


def score_entry(entry: DocEntry, query_lower: str) -> int:
    score = 0
    name = entry.name.lower()
    full_name = entry.full_name.lower()

    if name == query_lower or full_name == query_lower:
        score += EXACT_NAME_SCORE
    elif name.startswith(query_lower) or full_name.startswith(query_lower):
        score += PREFIX_NAME_SCORE
    elif query_lower in name or query_lower in full_name:
        score += PARTIAL_NAME_SCORE

    if query_lower in entry.description.lower():
        score += DESCRIPTION_SCORE
    if query_lower in entry.content.lower():
        score += CONTENT_SCORE

    if isinstance(entry, MemberDoc):
        for method in entry.methods:
            method_name = method.name.lower()
            if method_name == query_lower:
                score += EXACT_METHOD_SCORE
            elif query_lower in method_name:
                score += PARTIAL_METHOD_SCORE
            if query_lower in method.description.lower():
                score += METHOD_DESCRIPTION_SCORE

        for prop in entry.properties:
            prop_name = prop.name.lower()
            if prop_name == query_lower:
                score += EXACT_PROPERTY_SCORE
            elif query_lower in prop_name:
                score += PARTIAL_PROPERTY_SCORE

    return score


def _matches_name(entry: DocEntry, name_lower: str) -> bool:
    return entry.name.lower() == name_lower or entry.full_name.lower() == name_lower


class DocumentationSearch:
    """Read-only query surface over one documentation index."""

    def __init__(self, index: DocIndex) -> None:
        self.index = index

    def search(
        self,
        query: Any,
        *,
        doc_type: Optional[str] = None,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> List[SearchResult]:
        """
        Rank entries against ``query``.

        Args:
            query: Free text. Non-strings and blank strings match nothing.
            doc_type: Optional kind (class, interface, function, enum, type,
                variable). Results are narrowed to it before the limit.
            limit: Maximum number of results. Callers clamp it to a sane
                upper bound.

        Returns:
            Results ordered by descending score; equal scores keep index order.
        """
        query_lower = normalize_query(query)
        if query_lower is None:
            return []
        if limit is None:
            limit = DEFAULT_LIMIT
        if limit <= 0:
            return []

        if doc_type and doc_type not in COLLECTION_NAMES:
            return []

        results: List[SearchResult] = []
        for entry in self.index.entries():
            score = score_entry(entry, query_lower)
            if score > 0:
                results.append(SearchResult(entry=entry, score=score))

        results = self.filter_by_type(results, doc_type)
        results.sort(key=lambda result: result.score, reverse=True)
        return results[:limit]

    @staticmethod
    def filter_by_type(results: List[SearchResult], doc_type: Optional[str]) -> List[SearchResult]:
        if not doc_type:
            return results
        return [result for result in results if result.kind == doc_type]

    @staticmethod
    def format_results(results: List[SearchResult], query: str = "", limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
        """Summarize results for structured (JSON) consumers."""
        shown = results[:limit]
        formatted = []
        for result in shown:
            item: Dict[str, Any] = {
                "type": result.kind,
                "name": result.entry.name,
                "fullName": result.entry.full_name,
                "description": result.entry.description,
                "score": result.score,
            }
            if isinstance(result.entry, MemberDoc):
                item["methods"] = [method.name for method in result.entry.methods]
                item["properties"] = [prop.name for prop in result.entry.properties]
            formatted.append(item)
        return {"query": query, "total": len(results), "showing": len(shown), "results": formatted}

    def get_entry(self, kind: str, name: Any) -> Optional[DocEntry]:
        if not isinstance(name, str) or kind not in COLLECTION_NAMES:
            return None
        name_lower = name.strip().lower()
        if not name_lower:
            return None
        for entry in self.index.collection(kind):
            if _matches_name(entry, name_lower):
                return entry
        return None

    def get_class_docs(self, class_name: Any) -> Optional[ClassDoc]:
        entry = self.get_entry("class", class_name)
        return entry if isinstance(entry, ClassDoc) else None

    def get_interface_docs(self, interface_name: Any) -> Optional[InterfaceDoc]:
        entry = self.get_entry("interface", interface_name)
        return entry if isinstance(entry, InterfaceDoc) else None

    def get_method_docs(self, class_name: Any, method_name: Any) -> Optional[MethodLookup]:
        cls = self.get_class_docs(class_name)
        if cls is None or not isinstance(method_name, str):
            return None
        method_lower = method_name.strip().lower()
        for method in cls.methods:
            if method.name.lower() == method_lower:
                return MethodLookup(class_name=cls.name, method=method)
        return None

    def list_kind(self, kind: str) -> List[Dict[str, str]]:
        return [entry.summary() for entry in self.index.collection(kind)]

    def list_classes(self) -> List[Dict[str, str]]:
        return self.list_kind("class")

    def list_interfaces(self) -> List[Dict[str, str]]:
        return self.list_kind("interface")

    def list_functions(self) -> List[Dict[str, str]]:
        return self.list_kind("function")

    def get_stats(self) -> Dict[str, int]:
        return self.index.stats()
