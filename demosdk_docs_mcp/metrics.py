"""Minimal in-process metrics recorder (not suitable for multi-process aggregation)."""

from __future__ import annotations

from collections import Counter
from threading import Lock
from typing import Dict, Optional


class MetricsRecorder:
    def __init__(self) -> None:
        self._lock = Lock()
        self._requests = 0
        self._request_durations_ms: Dict[str, float] = {}
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._searches = 0
        self._empty_searches = 0
        self._last_index_build: Optional[Dict[str, object]] = None

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_duration(self, request_id: str, duration_ms: float) -> None:
        with self._lock:
            self._request_durations_ms[request_id] = duration_ms

    def record_tool(self, tool: str, *, success: bool) -> None:
        with self._lock:
            if success:
                self._tool_success[tool] += 1
            else:
                self._tool_error[tool] += 1

    def record_search(self, *, hits: int) -> None:
        with self._lock:
            self._searches += 1
            if hits == 0:
                self._empty_searches += 1

    def record_index_build(self, source: str, entries: int, duration_ms: float) -> None:
        with self._lock:
            self._last_index_build = {
                "source": source,
                "entries": entries,
                "duration_ms": duration_ms,
            }

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "requests": self._requests,
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "searches": self._searches,
                "empty_searches": self._empty_searches,
                "last_index_build": dict(self._last_index_build) if self._last_index_build else None,
                "recent_request_durations_ms": dict(self._request_durations_ms),
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._request_durations_ms.clear()
            self._tool_success.clear()
            self._tool_error.clear()
            self._searches = 0
            self._empty_searches = 0
            self._last_index_build = None


default_metrics = MetricsRecorder()
