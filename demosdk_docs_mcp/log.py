"""Logging setup shared by the server and the updater CLI."""

from __future__ import annotations

import json
import logging

from demosdk_docs_mcp.config import DocsConfig, default_config

EXTRA_FIELDS = ("tool", "request_id", "error", "source")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def resolve_level(config: DocsConfig = default_config) -> int:
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(config: DocsConfig = default_config) -> None:
    """Install the JSON or plain root handler selected by ``config.log_format``."""
    level = resolve_level(config)
    if config.log_format.lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler])
    else:
        logging.basicConfig(level=level)
