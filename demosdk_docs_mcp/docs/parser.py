"""
Documentation parser for the DemoSDK.

Parses TypeDoc HTML output into a ``DocIndex`` or, when no generated HTML is
available, falls back to doc comments in the SDK sources and its ``.d.ts``
declaration files.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Tuple

from . import markup
from .models import (
    ClassDoc,
    DocEntry,
    DocIndex,
    EnumDoc,
    FunctionDoc,
    InterfaceDoc,
    TypeDoc,
    VariableDoc,
)

logger = logging.getLogger(__name__)

# (kind, subdirectory) pairs of a TypeDoc output tree.
HTML_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("class", "classes"),
    ("interface", "interfaces"),
    ("function", "functions"),
    ("enum", "enums"),
)

MANIFEST_NAME = "package.json"
DEFAULT_ENTRY_FILE = "index.js"
DECLARATION_SUFFIX = ".d.ts"
EXCLUDED_DIRS = frozenset({"node_modules"})

DOC_COMMENT = r"/\*\*((?:(?!\*/).)*)\*/\s*"
JS_CLASS_RE = re.compile(DOC_COMMENT + r"(?:export\s+)?class\s+(\w+)", re.DOTALL)
JS_FUNCTION_RE = re.compile(DOC_COMMENT + r"(?:export\s+)?(?:async\s+)?function\s+(\w+)", re.DOTALL)
TS_INTERFACE_RE = re.compile(r"export\s+interface\s+(\w+)\s*{([^}]*)}", re.DOTALL)
TS_TYPE_ALIAS_RE = re.compile(r"export\s+(?:declare\s+)?type\s+(\w+)(?:<[^=]*>)?\s*=\s*([^;]*);", re.DOTALL)
TS_VARIABLE_RE = re.compile(r"export\s+(?:declare\s+)?(?:const|let|var)\s+(\w+)\s*:\s*([^;=]*)")
COMMENT_LEADER_RE = re.compile(r"^\s*\*\s?", re.MULTILINE)


def _clean_doc_comment(raw: str) -> str:
    return markup.strip_markup(COMMENT_LEADER_RE.sub("", raw))[: markup.MAX_DESCRIPTION_LENGTH]


class DocumentationParser:
    """Builds a ``DocIndex`` from generated HTML or from SDK sources."""

    def __init__(self) -> None:
        self.index = DocIndex()

    def parse_generated_html(self, root: Path) -> DocIndex:
        """
        Parse a TypeDoc HTML output directory.

        Missing subdirectories are skipped; a page that cannot be read is
        logged and skipped without aborting the rest of the batch.
        """
        root = Path(root)
        if not root.is_dir():
            logger.warning("TypeDoc directory not found: %s", root)
            return self.index

        for kind, subdir in HTML_SECTIONS:
            section_dir = root / subdir
            if not section_dir.is_dir():
                continue
            for path in sorted(section_dir.glob("*.html")):
                entry = self.parse_html_file(path, kind)
                if entry is not None:
                    self.index.add(entry)

        logger.info("Parsed %d documentation items from TypeDoc HTML", self.total_count())
        return self.index

    def parse_html_file(self, path: Path, kind: str) -> Optional[DocEntry]:
        """Parse one generated page; returns None when the file is unreadable."""
        try:
            html = Path(path).read_text(encoding="utf-8")
        except (OSError, ValueError) as exc:
            logger.warning("Error parsing %s: %s", path, exc)
            return None

        # e.g. websdk.Demos.html -> fullName "websdk.Demos", name "Demos"
        full_name = Path(path).stem
        name = full_name.split(".")[-1]
        common = {
            "name": name,
            "full_name": full_name,
            "description": markup.extract_description(html),
            "content": markup.strip_markup(html)[: markup.MAX_CONTENT_LENGTH],
            "file_path": str(path),
        }

        if kind in ("class", "interface"):
            entry_type = ClassDoc if kind == "class" else InterfaceDoc
            return entry_type(
                **common,
                methods=tuple(markup.extract_methods(html)),
                properties=tuple(markup.extract_properties(html)),
            )
        if kind == "function":
            return FunctionDoc(
                **common,
                parameters=tuple(markup.extract_parameters(html)),
                returns=markup.extract_return_type(html),
            )
        return EnumDoc(**common)

    def parse_source_fallback(self, sdk_root: Path) -> DocIndex:
        """
        Parse SDK sources when no generated HTML exists.

        Doc-commented classes and functions come from the manifest's entry
        file; interfaces, type aliases and exported variables come from every
        ``.d.ts`` file under ``sdk_root``.
        """
        sdk_root = Path(sdk_root)
        logger.info("Falling back to source file parsing in %s", sdk_root)

        manifest_path = sdk_root / MANIFEST_NAME
        if not manifest_path.is_file():
            logger.warning("SDK package.json not found at: %s", manifest_path)
            return self.index

        try:
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s: %s", manifest_path, exc)
            return self.index
        if not isinstance(manifest, dict):
            manifest = {}

        entry_file = manifest.get("main") or manifest.get("module") or DEFAULT_ENTRY_FILE
        entry_path = sdk_root / str(entry_file)
        if entry_path.is_file():
            self.parse_javascript_file(entry_path)
        else:
            logger.info("SDK entry file not found: %s", entry_path)

        self.parse_type_declarations(sdk_root)

        logger.info("Parsed %d documentation items from source files", self.total_count())
        return self.index

    def parse_javascript_file(self, path: Path) -> None:
        try:
            source = Path(path).read_text(encoding="utf-8")
        except (OSError, ValueError) as exc:
            logger.warning("Error parsing %s: %s", path, exc)
            return

        for match in JS_CLASS_RE.finditer(source):
            description = _clean_doc_comment(match.group(1))
            name = match.group(2)
            self.index.add(
                ClassDoc(
                    name=name,
                    full_name=name,
                    description=description,
                    content=description,
                    file_path=str(path),
                )
            )

        for match in JS_FUNCTION_RE.finditer(source):
            description = _clean_doc_comment(match.group(1))
            name = match.group(2)
            self.index.add(
                FunctionDoc(
                    name=name,
                    full_name=name,
                    description=description,
                    content=description,
                    file_path=str(path),
                )
            )

    def parse_type_declarations(self, sdk_root: Path) -> None:
        for path in self.find_files(sdk_root, DECLARATION_SUFFIX):
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, ValueError) as exc:
                logger.warning("Error parsing %s: %s", path, exc)
                continue

            for match in TS_INTERFACE_RE.finditer(source):
                name = match.group(1)
                self.index.add(
                    InterfaceDoc(
                        name=name,
                        full_name=name,
                        description=f"Interface {name}",
                        content=match.group(2)[: markup.MAX_CONTENT_LENGTH],
                        file_path=str(path),
                    )
                )

            for match in TS_TYPE_ALIAS_RE.finditer(source):
                name = match.group(1)
                definition = markup.WHITESPACE_RE.sub(" ", match.group(2)).strip()
                self.index.add(
                    TypeDoc(
                        name=name,
                        full_name=name,
                        description=f"Type {name}",
                        content=definition[: markup.MAX_CONTENT_LENGTH],
                        file_path=str(path),
                    )
                )

            for match in TS_VARIABLE_RE.finditer(source):
                name = match.group(1)
                declared_type = match.group(2).strip()
                self.index.add(
                    VariableDoc(
                        name=name,
                        full_name=name,
                        description=f"Variable {name}",
                        content=declared_type[: markup.MAX_CONTENT_LENGTH],
                        file_path=str(path),
                    )
                )

    @staticmethod
    def find_files(root: Path, suffix: str) -> List[Path]:
        """Recursively collect files ending in ``suffix``, skipping node_modules."""
        found: List[Path] = []
        # os.walk ignores unreadable directories by default.
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDED_DIRS)
            for filename in sorted(filenames):
                if filename.endswith(suffix):
                    found.append(Path(dirpath) / filename)
        return found

    def total_count(self) -> int:
        return self.index.total_count()

    def get_index(self) -> DocIndex:
        return self.index
