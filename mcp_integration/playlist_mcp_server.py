#!/usr/bin/env python3
"""
YouTube Playlist MCP Server

A Model Context Protocol server that lists the videos of a YouTube playlist via
the YouTube Data API v3. Served over SSE: clients open a session with
GET /sse and post protocol messages to the endpoint announced on that stream.
Each SSE connection gets its own session id, so concurrent clients never share
a message channel.
"""

import asyncio
import logging
from typing import Annotated, Callable, List

import uvicorn
from mcp import types
from mcp.server.fastmcp import FastMCP
from mcp.shared.exceptions import McpError
from pydantic import Field
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware

from config.settings import Settings
from tools.playlist_fetcher import (
    PlaylistFetcher,
    VideoRecord,
    create_playlist_fetcher
)
from tools.playlist_ids import get_playlist_id_from_url

logger = logging.getLogger(__name__)

SERVER_NAME = "youtube-playlist-extractor"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
SSE_PATH = "/sse"
TOOL_NAME = "get_playlist_videos"

FetcherFactory = Callable[[Settings], PlaylistFetcher]


def format_playlist_summary(videos: List[VideoRecord]) -> str:
    """Render the tool's success payload: a count line plus numbered videos."""
    result = f"Found {len(videos)} videos in playlist:\n"
    for i, video in enumerate(videos, 1):
        result += f"{i}. {video.title} ({video.url})\n"
    return result


async def get_playlist_videos_text(
    settings: Settings,
    playlist_url: str,
    fetcher_factory: FetcherFactory = create_playlist_fetcher
) -> str:
    """
    Body of the get_playlist_videos tool.

    Application errors (missing or invalid URL, YouTube API failures) come
    back as text rather than protocol errors.
    """
    if not playlist_url:
        return "Error: playlist_url is required"

    playlist_id = get_playlist_id_from_url(playlist_url)
    if not playlist_id:
        return "Error: Invalid playlist URL"

    try:
        fetcher = fetcher_factory(settings)
        # The API client blocks; keep the event loop free for other sessions
        videos = await asyncio.to_thread(fetcher.fetch_all, playlist_id)
    except Exception as e:
        logger.error(f"Tool call failed for playlist {playlist_id}: {e}")
        return f"Error processing request: {e}"

    logger.info(f"Tool call returned {len(videos)} videos for playlist {playlist_id}")
    return format_playlist_summary(videos)


def create_mcp_server(
    settings: Settings,
    fetcher_factory: FetcherFactory = create_playlist_fetcher,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT
) -> FastMCP:
    """
    Build the MCP server with its single tool registered.

    Args:
        settings: Application settings
        fetcher_factory: Builds a fresh fetcher for every tool call
        host: Interface the SSE app binds to
        port: Port the SSE app listens on

    Returns:
        FastMCP server instance
    """
    mcp = FastMCP(SERVER_NAME, host=host, port=port)

    @mcp.tool()
    async def get_playlist_videos(
        playlist_url: Annotated[
            str,
            Field(description="The full URL of the YouTube playlist or the playlist ID.")
        ]
    ) -> str:
        """
        Extract all video titles and URLs from a YouTube playlist URL.
        Use this tool when the user provides a YouTube playlist link and asks for its content.
        """
        return await get_playlist_videos_text(settings, playlist_url, fetcher_factory)

    _guard_call_tool(mcp)
    return mcp


def _guard_call_tool(mcp: FastMCP) -> None:
    """
    Wrap the tools/call request handler.

    FastMCP reports an unknown tool as an isError text result and rejects a
    missing argument through pydantic validation. Here an unknown tool name is
    a JSON-RPC METHOD_NOT_FOUND error, and a missing or null playlist_url is
    passed through as "" so the tool answers with its own required-argument
    text.
    """
    handlers = mcp._mcp_server.request_handlers
    call_tool = handlers[types.CallToolRequest]

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        if name != TOOL_NAME:
            logger.warning(f"Rejected call to unknown tool: {name}")
            raise McpError(types.ErrorData(code=types.METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

        arguments = dict(req.params.arguments or {})
        if not arguments.get("playlist_url"):
            arguments["playlist_url"] = ""
            params = req.params.model_copy(update={"arguments": arguments})
            req = req.model_copy(update={"params": params})
        return await call_tool(req)

    handlers[types.CallToolRequest] = handle_call_tool


class SSEConnectionLogger:
    """ASGI middleware that logs every new SSE session."""

    def __init__(self, app, sse_path: str = SSE_PATH):
        self.app = app
        self.sse_path = sse_path

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope["method"] == "GET" and scope["path"] == self.sse_path:
            client = scope.get("client") or ("unknown", 0)
            logger.info(f"New SSE connection established from {client[0]}")
        await self.app(scope, receive, send)


def create_sse_app(mcp: FastMCP) -> Starlette:
    """
    Wrap the server's SSE app with CORS and connection logging.

    Args:
        mcp: Server built by create_mcp_server

    Returns:
        Starlette application ready for an ASGI server
    """
    app = mcp.sse_app()
    app.add_middleware(SSEConnectionLogger, sse_path=SSE_PATH)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


def run_server(settings: Settings, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve the MCP server over SSE until interrupted."""
    mcp = create_mcp_server(settings, host=host, port=port)
    app = create_sse_app(mcp)

    logger.info("=== MCP Server Running ===")
    display_host = "localhost" if host in ("0.0.0.0", "::") else host
    logger.info(f"Server URL: http://{display_host}:{port}{SSE_PATH}")

    uvicorn.run(app, host=host, port=port, log_level="debug" if settings.verbose else "warning")
