"""
Index construction strategies.

Three independent strategies are tried in order until one produces a
non-empty index: the cached JSON index, the generated TypeDoc HTML, then the
SDK sources. A strategy that finds nothing to work with falls through to the
next one instead of failing the build.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

from demosdk_docs_mcp.config import DocsConfig, default_config
from demosdk_docs_mcp.metrics import default_metrics

from .models import DocIndex
from .parser import DocumentationParser

logger = logging.getLogger(__name__)

SOURCE_CACHE = "cache"
SOURCE_HTML = "html"
SOURCE_SDK = "source"
SOURCE_EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class BuildResult:
    index: DocIndex
    source: str

    @property
    def available(self) -> bool:
        return not self.index.is_empty()


def load_cached_index(path: Path) -> Optional[DocIndex]:
    """Load the cached index; missing or malformed caches yield None."""
    path = Path(path)
    if not path.is_file():
        logger.info("No cached documentation index at %s", path)
        return None
    try:
        return DocIndex.load(path)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable documentation index %s: %s", path, exc)
        return None


def find_sdk_path(config: DocsConfig) -> Optional[Path]:
    for candidate in config.sdk_paths:
        if Path(candidate).is_dir():
            return Path(candidate)
    return None


class IndexBuilder:
    """Chooses how to build the documentation index for one process."""

    def __init__(self, config: DocsConfig = default_config, *, metrics=default_metrics) -> None:
        self.config = config
        self.metrics = metrics

    def _from_cache(self) -> Optional[DocIndex]:
        return load_cached_index(self.config.index_path)

    def _from_html(self) -> Optional[DocIndex]:
        api_ref_dir = Path(self.config.api_ref_dir)
        if not api_ref_dir.is_dir():
            logger.info("No generated HTML reference at %s", api_ref_dir)
            return None
        return DocumentationParser().parse_generated_html(api_ref_dir)

    def _from_sdk_source(self) -> Optional[DocIndex]:
        sdk_path = find_sdk_path(self.config)
        if sdk_path is None:
            logger.info("DemoSDK sources not found in any configured location")
            return None
        return DocumentationParser().parse_source_fallback(sdk_path)

    def strategies(self) -> Tuple[Tuple[str, Callable[[], Optional[DocIndex]]], ...]:
        return (
            (SOURCE_CACHE, self._from_cache),
            (SOURCE_HTML, self._from_html),
            (SOURCE_SDK, self._from_sdk_source),
        )

    def build(self) -> BuildResult:
        start = time.monotonic()
        result = BuildResult(index=DocIndex(), source=SOURCE_EMPTY)
        for source, strategy in self.strategies():
            try:
                index = strategy()
            except OSError as exc:
                logger.warning("Documentation strategy %s failed: %s", source, exc, extra={"source": source})
                continue
            if index is not None and not index.is_empty():
                result = BuildResult(index=index, source=source)
                break

        if result.available:
            logger.info(
                "Loaded %d documentation items from %s",
                result.index.total_count(),
                result.source,
                extra={"source": result.source},
            )
        else:
            logger.warning("No documentation found; run demosdk-docs-update first")

        if self.config.write_index_cache and result.source != SOURCE_CACHE:
            self.save(result.index)

        duration_ms = (time.monotonic() - start) * 1000
        self.metrics.record_index_build(result.source, result.index.total_count(), duration_ms)
        return result

    def save(self, index: DocIndex) -> bool:
        try:
            index.save(self.config.index_path)
        except OSError as exc:
            logger.warning("Failed to save documentation index to %s: %s", self.config.index_path, exc)
            return False
        logger.info("Documentation index saved to %s", self.config.index_path)
        return True
