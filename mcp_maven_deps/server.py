"""MCP STDIO server for the get_maven_latest_version tool.

Design notes:
- Transport adapter stays thin; registry, validation and reduction are kept
  local, transport-neutral and re-usable.
- The Maven Central client is built once per server and injected into the
  tool; there is no module-level singleton.
- Logging goes to stderr via the central logging config.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from fastmcp import FastMCP
from mcp import types
from mcp.shared.exceptions import McpError

from .central_api import MavenCentralHttpClient, build_latest_version_query, extract_error_message
from .config import Settings
from .logging_config import configure_logging
from .models import (
    CoordinateRejected,
    DependencyNotFound,
    MavenCoordinate,
    SearchResponse,
    ToolOutcome,
    UpstreamError,
    VersionFound,
    parse_coordinate_request,
)

_logger = logging.getLogger(__name__)

SERVER_NAME = "maven-deps-server"
SERVER_VERSION = "0.1.0"

TOOL_NAME = "get_maven_latest_version"
TOOL_DESCRIPTION = "Get the latest version of a Maven dependency"
DEPENDENCY_DESCRIPTION = (
    'Maven dependency in format "groupId:artifactId" (e.g. "org.springframework:spring-core")'
)
INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "dependency": {"type": "string", "description": DEPENDENCY_DESCRIPTION},
    },
    "required": ["dependency"],
}


def list_tools_core() -> list[types.Tool]:
    """The tools this server advertises, in order. Always exactly one."""
    return [types.Tool(name=TOOL_NAME, description=TOOL_DESCRIPTION, inputSchema=INPUT_SCHEMA)]


def reduce_search_response(coordinate: MavenCoordinate, response: SearchResponse) -> ToolOutcome:
    """Classify a successful search.

    Maven Central already sorted by timestamp; the first document is taken
    as-is without checking the version format.
    """
    docs = response.response.docs
    if not docs:
        return DependencyNotFound(coordinate=coordinate)
    return VersionFound(version=docs[0].v)


def reduce_http_error(exc: httpx.HTTPError) -> UpstreamError:
    return UpstreamError(message=extract_error_message(exc))


async def get_maven_latest_version_core(
    coordinate: MavenCoordinate,
    *,
    client: MavenCentralHttpClient,
) -> ToolOutcome:
    """Core logic for the get_maven_latest_version tool (transport-neutral).

    Error handling policy:
    - httpx transport and HTTP status failures become an UpstreamError soft
      result.
    - Anything else (non-JSON body, unexpected shape, bugs) propagates.
    """

    query = build_latest_version_query(coordinate)
    _logger.info("querying maven central latest version", extra={"op": "latest_version"})
    try:
        response = await client.search(query)
    except httpx.HTTPError as exc:
        _logger.warning(
            "maven central request failed",
            extra={"op": "latest_version", "error_type": type(exc).__name__},
        )
        return reduce_http_error(exc)
    return reduce_search_response(coordinate, response)


async def call_tool_core(
    name: str,
    arguments: Any,
    *,
    client: MavenCentralHttpClient,
) -> ToolOutcome:
    """Dispatch a tools/call request.

    Raises McpError with METHOD_NOT_FOUND for any name other than
    get_maven_latest_version, and INVALID_PARAMS for a malformed payload.
    Neither case touches the network.
    """

    if name != TOOL_NAME:
        raise McpError(
            types.ErrorData(code=types.METHOD_NOT_FOUND, message=f"Unknown tool: {name}")
        )

    checked = parse_coordinate_request(arguments)
    if isinstance(checked, CoordinateRejected):
        raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=checked.reason))

    return await get_maven_latest_version_core(checked, client=client)


def build_server(client: MavenCentralHttpClient | None = None) -> FastMCP:
    """Create the FastMCP server with the tools/list and tools/call handlers.

    Both handlers are installed on the underlying MCP request table so that
    McpError reaches the client as a JSON-RPC error (METHOD_NOT_FOUND,
    INVALID_PARAMS) and unexpected failures become error responses rather
    than isError tool results.

    A client passed in stays owned by the caller; otherwise one is created
    here and closed when the server shuts down.
    """

    http = client or MavenCentralHttpClient()
    owns_client = client is None

    @asynccontextmanager
    async def _lifespan(_: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            if owns_client:
                await http.aclose()

    server: FastMCP = FastMCP(SERVER_NAME, version=SERVER_VERSION, lifespan=_lifespan)

    async def _list_tools(_: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=list_tools_core()))

    async def _call_tool(req: types.CallToolRequest) -> types.ServerResult:
        try:
            outcome = await call_tool_core(req.params.name, req.params.arguments, client=http)
        except McpError:
            raise
        except Exception:
            _logger.exception("unexpected failure in tools/call", extra={"op": "call_tool"})
            raise
        return types.ServerResult(outcome.to_call_tool_result())

    handlers = server._mcp_server.request_handlers
    handlers[types.ListToolsRequest] = _list_tools
    handlers[types.CallToolRequest] = _call_tool

    return server


def run() -> None:  # pragma: no cover
    settings = Settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    server = build_server()
    _logger.info("Maven Dependencies MCP server running on stdio")
    try:
        server.run()
    except KeyboardInterrupt:
        _logger.info("interrupt received, shutting down")


__all__ = [
    "SERVER_NAME",
    "TOOL_NAME",
    "list_tools_core",
    "reduce_search_response",
    "reduce_http_error",
    "get_maven_latest_version_core",
    "call_tool_core",
    "build_server",
    "run",
]
