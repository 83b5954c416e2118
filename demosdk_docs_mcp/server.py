"""FastAPI application wiring the DemoSDK documentation tools to HTTP routes."""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from demosdk_docs_mcp import mcp
from demosdk_docs_mcp.config import default_config
from demosdk_docs_mcp.docs.context import default_context
from demosdk_docs_mcp.log import configure_logging
from demosdk_docs_mcp.metrics import default_metrics
from demosdk_docs_mcp.tools import (
    get_class_docs,
    get_docs_stats,
    get_interface_docs,
    get_method_docs,
    list_classes,
    list_functions,
    list_interfaces,
    search_docs,
)

logger = logging.getLogger(__name__)
configure_logging(default_config)

APP_VERSION = "0.1.0"
MCP_SERVER_NAME = "demosdk-docs"
MCP_SERVER_VERSION = APP_VERSION

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602

LIST_TOOLS_METHODS = ("list_tools", "tools/list")
CALL_TOOL_METHODS = ("call_tool", "tools/call")
NOTIFICATION_METHODS = ("notifications/initialized", "initialized")

docs_context = default_context


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup: build or load the documentation index once.
    if not docs_context.ensure_initialized():
        logger.warning("No documentation found - run `demosdk-docs-update` first")
    yield


app = FastAPI(
    title="DemoSDK Docs MCP Server",
    description="DemoSDK API reference search for LLM agents.",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    default_metrics.incr_request()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    default_metrics.record_duration(request_id, duration_ms)
    response.headers["X-Request-ID"] = request_id
    return response


def _log_tool_result(tool_name: str, result: Any, request_id: Optional[str] = None) -> None:
    if isinstance(result, dict) and result.get("error"):
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool_name,
            result.get("error"),
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": result.get("error")},
        )
        default_metrics.record_tool(tool_name, success=False)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        default_metrics.record_tool(tool_name, success=True)


def _tool_response(tool_name: str, result: Any, request: Request) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    _log_tool_result(tool_name, result, request_id)
    if isinstance(result, str):
        return JSONResponse(content={"text": result})
    return JSONResponse(content=result)


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    available = docs_context.ensure_initialized()
    return JSONResponse(
        content={
            "status": "ok",
            "documentation": {
                "available": available,
                "source": docs_context.source,
                "counts": docs_context.index.stats(),
            },
        }
    )


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.get("/tools/search")
async def search_route(
    request: Request,
    query: str | None = None,
    type: str | None = Query(None),
    limit: int | None = Query(None, ge=0),
    structured: bool = Query(False),
) -> JSONResponse:
    """Proxy for search_demosdk_docs tool."""
    result = search_docs(query, doc_type=type, limit=limit, structured=structured, context=docs_context)
    return _tool_response("search_demosdk_docs", result, request)


@app.get("/tools/classes")
async def classes_route(request: Request) -> JSONResponse:
    """Proxy for list_classes tool."""
    return _tool_response("list_classes", list_classes(context=docs_context), request)


@app.get("/tools/interfaces")
async def interfaces_route(request: Request) -> JSONResponse:
    """Proxy for list_interfaces tool."""
    return _tool_response("list_interfaces", list_interfaces(context=docs_context), request)


@app.get("/tools/functions")
async def functions_route(request: Request) -> JSONResponse:
    """Proxy for list_functions tool."""
    return _tool_response("list_functions", list_functions(context=docs_context), request)


@app.get("/tools/class/{class_name}")
async def class_route(class_name: str, request: Request) -> JSONResponse:
    """Proxy for get_class_docs tool."""
    return _tool_response("get_class_docs", get_class_docs(class_name, context=docs_context), request)


@app.get("/tools/class/{class_name}/method/{method_name}")
async def method_route(class_name: str, method_name: str, request: Request) -> JSONResponse:
    """Proxy for get_method_docs tool."""
    result = get_method_docs(class_name, method_name, context=docs_context)
    return _tool_response("get_method_docs", result, request)


@app.get("/tools/interface/{interface_name}")
async def interface_route(interface_name: str, request: Request) -> JSONResponse:
    """Proxy for get_interface_docs tool."""
    result = get_interface_docs(interface_name, context=docs_context)
    return _tool_response("get_interface_docs", result, request)


@app.get("/tools/stats")
async def stats_route(request: Request) -> JSONResponse:
    """Proxy for get_docs_stats tool."""
    return _tool_response("get_docs_stats", get_docs_stats(context=docs_context), request)


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """
    Minimal JSON-RPC-like gateway for MCP-style integrations.

    Supported methods:
      - initialize
      - list_tools / tools/list
      - call_tool / tools/call (``tool``/``params`` or ``name``/``arguments``)
      - notifications/initialized (no response body)
    """
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()

    def _respond(
        payload: Dict[str, Any],
        status_code: int = 200,
        *,
        method: Optional[str] = None,
        tool: Optional[str] = None,
    ) -> JSONResponse:
        error_code = payload["error"]["code"] if "error" in payload else None
        logger.debug(
            "mcp method=%s tool=%s id=%s status=%s duration_ms=%.2f error_code=%s",
            method,
            tool,
            payload.get("id"),
            status_code,
            (time.time() - start_time) * 1000,
            error_code,
            extra={"request_id": request_id, "tool": tool, "error": error_code},
        )
        return JSONResponse(status_code=status_code, content=payload)

    try:
        body = await request.json()
    except ValueError:
        return _respond(_jsonrpc_error_payload(None, PARSE_ERROR, "Parse error"), 400)
    if not isinstance(body, dict):
        return _respond(_jsonrpc_error_payload(None, INVALID_REQUEST, "Invalid request"), 400)

    method = body.get("method")
    rpc_id = body.get("id")
    params = body.get("params")
    if params is None:
        params = {}
    if not isinstance(params, dict):
        return _respond(_jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params"), method=method)
    if not method:
        return _respond(_jsonrpc_error_payload(rpc_id, INVALID_REQUEST, "Invalid request"))

    if method in NOTIFICATION_METHODS:
        return Response(status_code=204)

    if method == "initialize":
        result = _initialize_result(params)
        if result is None:
            return _respond(_jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params"), method=method)
        return _respond(_jsonrpc_success_payload(rpc_id, result), method=method)

    if method in LIST_TOOLS_METHODS:
        return _respond(_jsonrpc_success_payload(rpc_id, {"tools": mcp.list_tools()}), method=method)

    if method in CALL_TOOL_METHODS:
        target = _tool_call_target(params)
        if target is None:
            return _respond(_jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params"), method=method)
        tool_name, tool_params = target
        result = await mcp.call_tool(tool_name, tool_params, context=docs_context)
        _log_tool_result(tool_name, result, request_id)
        return _respond(_jsonrpc_success_payload(rpc_id, _wrap_tool_result(result)), method=method, tool=tool_name)

    return _respond(_jsonrpc_error_payload(rpc_id, METHOD_NOT_FOUND, "Method not found"), method=method)


def _initialize_result(params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    protocol_version = params.get("protocolVersion")
    if not isinstance(protocol_version, str) or not protocol_version:
        return None
    return {
        "protocolVersion": protocol_version,
        "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
        "capabilities": {"tools": {"listChanged": False}},
    }


def _tool_call_target(params: Dict[str, Any]) -> Optional[Tuple[str, Dict[str, Any]]]:
    """Tool name and arguments of a call request, or None when malformed."""
    tool_name = params.get("tool") or params.get("name")
    arguments = params.get("params")
    if arguments is None:
        arguments = params.get("arguments") or {}
    if not isinstance(tool_name, str) or not tool_name.strip():
        return None
    if not isinstance(arguments, dict):
        return None
    return tool_name, arguments


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


def _wrap_tool_result(result: Any) -> Dict[str, Any]:
    """Shape a tool result into an MCP content array."""
    if isinstance(result, dict) and "error" in result:
        return {
            "content": [{"type": "text", "text": f"Error: {result.get('error') or 'Error'}"}],
            "isError": True,
            "structuredContent": result,
        }
    if isinstance(result, str):
        return {"content": [{"type": "text", "text": result}]}

    wrapped: Dict[str, Any] = {"content": [{"type": "text", "text": json.dumps(result, ensure_ascii=True, default=str)}]}
    if isinstance(result, dict):
        wrapped["structuredContent"] = result
    return wrapped


def main() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    uvicorn.run("demosdk_docs_mcp.server:app", host=default_config.host, port=default_config.port)


# Run with: uvicorn demosdk_docs_mcp.server:app --reload
if __name__ == "__main__":
    main()
