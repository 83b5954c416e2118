"""
Configuration helpers for the DemoSDK documentation MCP server.

This module centralizes where documentation lives on disk (generated HTML
reference, cached JSON index, installed SDK), the TypeDoc timeout, search
limits and logging options. Values come from environment variables read at
import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("DEMOSDK_PROJECT_ROOT", str(PACKAGE_ROOT.parent)))

# Documentation locations
DEFAULT_DOCS_DIR = Path(os.getenv("DEMOSDK_DOCS_DIR", str(PROJECT_ROOT / "docs-data")))
DEFAULT_API_REF_DIR = Path(os.getenv("DEMOSDK_API_REF_DIR", str(DEFAULT_DOCS_DIR / "demosdk-api-ref")))
DEFAULT_INDEX_PATH = Path(os.getenv("DEMOSDK_DOCS_INDEX_PATH", str(DEFAULT_DOCS_DIR / "docs-index.json")))

SDK_PATH_ENV_VAR = "DEMOSDK_SDK_PATH"
DEFAULT_SDK_CANDIDATES = (
    PROJECT_ROOT / "node_modules" / "@kynesyslabs" / "demosdk",
    PROJECT_ROOT / "node_modules" / "demos sdk",
)


def _parse_path_list(raw: Optional[str]) -> List[Path]:
    """Split a comma-separated list of paths, dropping blanks."""
    if not raw:
        return []
    return [Path(item.strip()) for item in raw.split(",") if item.strip()]


def _load_sdk_paths() -> List[Path]:
    paths = _parse_path_list(os.getenv(SDK_PATH_ENV_VAR))
    for candidate in DEFAULT_SDK_CANDIDATES:
        if candidate not in paths:
            paths.append(candidate)
    return paths


def _load_timeout() -> float:
    raw_timeout = os.getenv("DEMOSDK_TYPEDOC_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return 60.0
    return 60.0


def _load_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y"}


DEFAULT_TYPEDOC_TIMEOUT = _load_timeout()
TYPEDOC_BIN = os.getenv("DEMOSDK_TYPEDOC_BIN") or None
WRITE_INDEX_CACHE = _load_flag("DEMOSDK_DOCS_WRITE_CACHE")

# Search limits
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50

HOST = os.getenv("DEMOSDK_MCP_HOST", "127.0.0.1")
PORT = int(os.getenv("DEMOSDK_MCP_PORT", "8765"))

LOG_LEVEL = os.getenv("DEMOSDK_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("DEMOSDK_MCP_LOG_FORMAT", "json")  # json or plain


@dataclass(slots=True)
class DocsConfig:
    """Runtime configuration for documentation indexing and search."""

    project_root: Path = PROJECT_ROOT
    docs_dir: Path = DEFAULT_DOCS_DIR
    api_ref_dir: Path = DEFAULT_API_REF_DIR
    index_path: Path = DEFAULT_INDEX_PATH
    sdk_paths: List[Path] = field(default_factory=_load_sdk_paths)
    typedoc_bin: Optional[str] = TYPEDOC_BIN
    typedoc_timeout: float = DEFAULT_TYPEDOC_TIMEOUT
    write_index_cache: bool = WRITE_INDEX_CACHE
    default_search_limit: int = DEFAULT_SEARCH_LIMIT
    max_search_limit: int = MAX_SEARCH_LIMIT
    host: str = HOST
    port: int = PORT
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT


default_config = DocsConfig()
