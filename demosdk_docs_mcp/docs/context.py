"""
Process-wide documentation state.

The server builds the index once and then only reads it. ``DocsContext``
holds that state explicitly so request handlers receive it instead of
reaching for module globals, and ``ensure_initialized`` memoizes the build
behind a lock.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from demosdk_docs_mcp.config import DocsConfig, default_config

from .builder import SOURCE_EMPTY, BuildResult, IndexBuilder
from .models import DocIndex
from .search import DocumentationSearch

logger = logging.getLogger(__name__)


class DocsContext:
    """Documentation index and search engine shared by all request handlers."""

    def __init__(self, config: DocsConfig = default_config, *, builder: Optional[IndexBuilder] = None) -> None:
        self.config = config
        self._builder = builder or IndexBuilder(config)
        self._lock = Lock()
        self._initialized = False
        self._index = DocIndex()
        self._search_engine = DocumentationSearch(self._index)
        self._source = SOURCE_EMPTY

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def index(self) -> DocIndex:
        return self._index

    @property
    def search_engine(self) -> DocumentationSearch:
        return self._search_engine

    @property
    def source(self) -> str:
        return self._source

    def ensure_initialized(self) -> bool:
        """Build the index on first use. Returns True when documentation is available."""
        if self._initialized:
            return not self._index.is_empty()
        with self._lock:
            if not self._initialized:
                self._install(self._build())
        return not self._index.is_empty()

    def rebuild(self) -> bool:
        """Replace the index wholesale with a freshly built one."""
        with self._lock:
            self._install(self._build())
        return not self._index.is_empty()

    def _build(self) -> BuildResult:
        try:
            return self._builder.build()
        except Exception:
            logger.exception("Error initializing documentation")
            return BuildResult(index=DocIndex(), source=SOURCE_EMPTY)

    def _install(self, result: BuildResult) -> None:
        self._index = result.index
        self._search_engine = DocumentationSearch(result.index)
        self._source = result.source
        self._initialized = True


default_context = DocsContext()
