"""
Documentation updater for the DemoSDK.

Regenerates the TypeDoc HTML reference from the installed SDK, parses it (or
the SDK sources when TypeDoc is unavailable or fails) and saves the JSON
index the server loads at startup.

Run with: demosdk-docs-update [--sdk-path PATH] [--skip-typedoc]
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Sequence

from demosdk_docs_mcp.config import DocsConfig, default_config
from demosdk_docs_mcp.log import configure_logging

from .builder import find_sdk_path
from .models import DocIndex
from .parser import DocumentationParser

logger = logging.getLogger(__name__)

TYPEDOC_ERROR_PREVIEW = 500


@dataclass(frozen=True, slots=True)
class UpdateResult:
    success: bool
    index: Optional[DocIndex] = None


class DocumentationUpdater:
    """Generates or refreshes the documentation index from the installed SDK."""

    def __init__(self, config: DocsConfig = default_config) -> None:
        self.config = config
        self.sdk_path: Optional[Path] = None
        self.parser = DocumentationParser()

    def find_sdk_path(self) -> Optional[Path]:
        sdk_path = find_sdk_path(self.config)
        if sdk_path is None:
            logger.error("DemoSDK not found in any of: %s", ", ".join(str(p) for p in self.config.sdk_paths))
        else:
            logger.info("Found DemoSDK at: %s", sdk_path)
        return sdk_path

    def typedoc_command(self) -> Path:
        if self.config.typedoc_bin:
            return Path(self.config.typedoc_bin)
        name = "typedoc.cmd" if os.name == "nt" else "typedoc"
        return Path(self.config.project_root) / "node_modules" / ".bin" / name

    def is_typedoc_available(self) -> bool:
        return self.typedoc_command().is_file()

    def run_typedoc(self, sdk_path: Path) -> bool:
        """
        Run TypeDoc against ``sdk_path``.

        The process is killed when it exceeds ``config.typedoc_timeout``
        seconds. Any failure (non-zero exit, timeout, missing binary) is
        reported as False so the caller can fall back to source parsing.
        """
        output_dir = Path(self.config.api_ref_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        args: List[str] = [
            str(self.typedoc_command()),
            "--entryPointStrategy",
            "expand",
            "--out",
            str(output_dir),
            str(sdk_path),
        ]
        logger.info("Running: %s", " ".join(args))
        try:
            completed = subprocess.run(
                args,
                cwd=str(self.config.project_root),
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.config.typedoc_timeout,
                shell=False,
            )
        except subprocess.TimeoutExpired:
            logger.error("TypeDoc generation timed out after %.0f seconds", self.config.typedoc_timeout)
            return False
        except OSError as exc:
            logger.error("Failed to run TypeDoc: %s", exc)
            return False

        if completed.returncode != 0:
            logger.error(
                "TypeDoc generation failed (exit %s): %s",
                completed.returncode,
                (completed.stderr or "")[:TYPEDOC_ERROR_PREVIEW],
            )
            return False
        logger.info("TypeDoc generation successful")
        return True

    def verify_doc_generation(self) -> bool:
        output_dir = Path(self.config.api_ref_dir)
        if not output_dir.is_dir():
            return False
        return (
            (output_dir / "index.html").is_file()
            or (output_dir / "classes").is_dir()
            or (output_dir / "interfaces").is_dir()
        )

    def parse_documentation(self, sdk_path: Path, use_typedoc: bool) -> DocIndex:
        index: Optional[DocIndex] = None
        if use_typedoc and Path(self.config.api_ref_dir).is_dir():
            index = self.parser.parse_generated_html(self.config.api_ref_dir)

        if index is None or self.parser.total_count() == 0:
            index = self.parser.parse_source_fallback(sdk_path)
        return index

    def save_index(self, index: DocIndex) -> bool:
        try:
            index.save(self.config.index_path)
        except OSError as exc:
            logger.error("Failed to save documentation index: %s", exc)
            return False
        logger.info("Documentation index saved to: %s", self.config.index_path)
        return True

    def update(self, *, skip_typedoc: bool = False) -> UpdateResult:
        self.sdk_path = self.find_sdk_path()
        if self.sdk_path is None:
            logger.error("Cannot update documentation: DemoSDK not installed (run `npm install` first)")
            return UpdateResult(success=False)

        typedoc_ok = False
        if skip_typedoc:
            logger.info("Skipping TypeDoc; using source file parsing only")
        elif not self.is_typedoc_available():
            logger.warning("TypeDoc not installed; using source file parsing only (npm install typedoc)")
        else:
            typedoc_ok = self.run_typedoc(self.sdk_path) and self.verify_doc_generation()

        index = self.parse_documentation(self.sdk_path, typedoc_ok)
        stats = index.stats()
        if stats["total"] == 0:
            logger.error("No documentation items found; the SDK layout may be unsupported")
            return UpdateResult(success=False)

        logger.info(
            "Found %d documentation items: classes=%d interfaces=%d functions=%d enums=%d types=%d variables=%d",
            stats["total"],
            stats["classes"],
            stats["interfaces"],
            stats["functions"],
            stats["enums"],
            stats["types"],
            stats["variables"],
        )
        if not self.save_index(index):
            return UpdateResult(success=False, index=index)
        return UpdateResult(success=True, index=index)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Regenerate the DemoSDK documentation index.")
    parser.add_argument("--sdk-path", type=Path, help="Path to the installed DemoSDK package.")
    parser.add_argument("--out", type=Path, help="Directory for the generated TypeDoc HTML.")
    parser.add_argument("--index-path", type=Path, help="Where to write the JSON documentation index.")
    parser.add_argument("--skip-typedoc", action="store_true", help="Parse SDK sources without running TypeDoc.")
    return parser


def main(argv: Optional[Sequence[str]] = None, *, config: DocsConfig = default_config) -> int:
    args = _build_arg_parser().parse_args(argv)
    overrides = {}
    if args.sdk_path is not None:
        overrides["sdk_paths"] = [args.sdk_path]
    if args.out is not None:
        overrides["api_ref_dir"] = args.out
    if args.index_path is not None:
        overrides["index_path"] = args.index_path
    run_config = replace(config, **overrides) if overrides else config

    configure_logging(run_config)
    try:
        result = DocumentationUpdater(run_config).update(skip_typedoc=args.skip_typedoc)
    except Exception:
        logger.exception("Error updating documentation")
        return 1
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
