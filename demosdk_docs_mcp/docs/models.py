"""
Typed documentation entries and the in-memory documentation index.

Each entry kind is its own frozen dataclass so code can dispatch on the
variant instead of probing a loose dict. The index keeps one collection per
kind and only accepts entries through ``DocIndex.add``, which routes on the
entry's kind.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Type

logger = logging.getLogger(__name__)

DOC_KINDS: Tuple[str, ...] = ("class", "interface", "function", "enum", "type", "variable")
COLLECTION_NAMES: Dict[str, str] = {
    "class": "classes",
    "interface": "interfaces",
    "function": "functions",
    "enum": "enums",
    "type": "types",
    "variable": "variables",
}


class IndexFormatError(ValueError):
    """Raised when a serialized index does not have the expected shape."""


@dataclass(frozen=True, slots=True)
class MethodDoc:
    name: str
    signature: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "signature": self.signature, "description": self.description}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MethodDoc":
        return cls(
            name=_text(raw.get("name")),
            signature=_text(raw.get("signature")),
            description=_text(raw.get("description")),
        )


@dataclass(frozen=True, slots=True)
class PropertyDoc:
    name: str
    type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "PropertyDoc":
        return cls(name=_text(raw.get("name")), type=_text(raw.get("type")))


@dataclass(frozen=True, slots=True)
class ParameterDoc:
    name: str
    type: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "description": self.description}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ParameterDoc":
        return cls(
            name=_text(raw.get("name")),
            type=_text(raw.get("type")),
            description=_text(raw.get("description")),
        )


@dataclass(frozen=True, slots=True)
class DocEntry:
    """Fields shared by every documentation entry."""

    kind: ClassVar[str] = ""

    name: str
    full_name: str = ""
    description: str = ""
    content: str = ""
    file_path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        # "type" is the tag key used by existing docs-index.json caches.
        return {
            "type": self.kind,
            "name": self.name,
            "fullName": self.full_name,
            "description": self.description,
            "filePath": self.file_path,
            "content": self.content,
        }

    def summary(self) -> Dict[str, str]:
        return {"name": self.name, "fullName": self.full_name, "description": self.description}


@dataclass(frozen=True, slots=True)
class MemberDoc(DocEntry):
    """Entry with methods and properties (classes and interfaces)."""

    methods: Tuple[MethodDoc, ...] = ()
    properties: Tuple[PropertyDoc, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = DocEntry.to_dict(self)
        data["methods"] = [method.to_dict() for method in self.methods]
        data["properties"] = [prop.to_dict() for prop in self.properties]
        return data


@dataclass(frozen=True, slots=True)
class ClassDoc(MemberDoc):
    kind: ClassVar[str] = "class"


@dataclass(frozen=True, slots=True)
class InterfaceDoc(MemberDoc):
    kind: ClassVar[str] = "interface"


@dataclass(frozen=True, slots=True)
class FunctionDoc(DocEntry):
    kind: ClassVar[str] = "function"

    parameters: Tuple[ParameterDoc, ...] = ()
    returns: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = DocEntry.to_dict(self)
        data["parameters"] = [param.to_dict() for param in self.parameters]
        data["returns"] = self.returns
        return data


@dataclass(frozen=True, slots=True)
class EnumDoc(DocEntry):
    kind: ClassVar[str] = "enum"


@dataclass(frozen=True, slots=True)
class TypeDoc(DocEntry):
    kind: ClassVar[str] = "type"


@dataclass(frozen=True, slots=True)
class VariableDoc(DocEntry):
    kind: ClassVar[str] = "variable"


ENTRY_TYPES: Dict[str, Type[DocEntry]] = {
    "class": ClassDoc,
    "interface": InterfaceDoc,
    "function": FunctionDoc,
    "enum": EnumDoc,
    "type": TypeDoc,
    "variable": VariableDoc,
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _records(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def entry_from_dict(kind: str, raw: Dict[str, Any]) -> DocEntry:
    """Rebuild an entry of ``kind`` from its serialized record."""
    entry_type = ENTRY_TYPES.get(kind)
    if entry_type is None:
        raise IndexFormatError(f"Unknown documentation kind: {kind}")
    tag = raw.get("type", raw.get("kind"))
    if tag is not None and tag != kind:
        raise IndexFormatError(f"Record tagged {tag!r} found in {COLLECTION_NAMES[kind]}")
    name = _text(raw.get("name"))
    if not name:
        raise IndexFormatError("Documentation record without a name")

    common = {
        "name": name,
        "full_name": _text(raw.get("fullName", raw.get("full_name"))) or name,
        "description": _text(raw.get("description")),
        "content": _text(raw.get("content")),
        "file_path": _text(raw.get("filePath", raw.get("file_path"))),
    }
    if issubclass(entry_type, MemberDoc):
        return entry_type(
            **common,
            methods=tuple(MethodDoc.from_dict(item) for item in _records(raw.get("methods"))),
            properties=tuple(PropertyDoc.from_dict(item) for item in _records(raw.get("properties"))),
        )
    if entry_type is FunctionDoc:
        return FunctionDoc(
            **common,
            parameters=tuple(ParameterDoc.from_dict(item) for item in _records(raw.get("parameters"))),
            returns=_text(raw.get("returns")),
        )
    return entry_type(**common)


@dataclass
class DocIndex:
    """Six per-kind collections of documentation entries."""

    classes: List[DocEntry] = field(default_factory=list)
    interfaces: List[DocEntry] = field(default_factory=list)
    functions: List[DocEntry] = field(default_factory=list)
    enums: List[DocEntry] = field(default_factory=list)
    types: List[DocEntry] = field(default_factory=list)
    variables: List[DocEntry] = field(default_factory=list)

    def collection(self, kind: str) -> List[DocEntry]:
        collection_name = COLLECTION_NAMES.get(kind)
        if collection_name is None:
            raise KeyError(kind)
        return getattr(self, collection_name)

    def add(self, entry: DocEntry) -> None:
        self.collection(entry.kind).append(entry)

    def entries(self) -> Iterator[DocEntry]:
        for kind in DOC_KINDS:
            yield from self.collection(kind)

    def total_count(self) -> int:
        return sum(len(self.collection(kind)) for kind in DOC_KINDS)

    def is_empty(self) -> bool:
        return self.total_count() == 0

    def stats(self) -> Dict[str, int]:
        counts = {COLLECTION_NAMES[kind]: len(self.collection(kind)) for kind in DOC_KINDS}
        counts["total"] = sum(counts.values())
        return counts

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            COLLECTION_NAMES[kind]: [entry.to_dict() for entry in self.collection(kind)]
            for kind in DOC_KINDS
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "DocIndex":
        """
        Build an index from its serialized form.

        Missing collections are treated as empty. Records that cannot be
        rebuilt (no name, tagged with another kind) are skipped with a warning.
        """
        if not isinstance(raw, dict):
            raise IndexFormatError("Documentation index must be a JSON object")
        index = cls()
        for kind in DOC_KINDS:
            collection_name = COLLECTION_NAMES[kind]
            records = raw.get(collection_name, [])
            if not isinstance(records, list):
                raise IndexFormatError(f"Field {collection_name!r} must be an array")
            for record in records:
                if not isinstance(record, dict):
                    logger.warning("Skipping non-object record in %s", collection_name)
                    continue
                try:
                    index.add(entry_from_dict(kind, record))
                except IndexFormatError as exc:
                    logger.warning("Skipping record in %s: %s", collection_name, exc)
        return index

    def save(self, path: Path) -> None:
        """Write the index as JSON, replacing ``path`` only once the write has completed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(self.to_dict(), indent=2)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise

    @classmethod
    def load(cls, path: Path) -> "DocIndex":
        """Load a saved index. Raises OSError or ValueError on unreadable files."""
        text = Path(path).read_text(encoding="utf-8")
        try:
            raw = json.loads(text)
        except RecursionError as exc:
            raise IndexFormatError("Documentation index is nested too deeply") from exc
        return cls.from_dict(raw)
