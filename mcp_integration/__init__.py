"""
MCP integration layer for YouTube Playlist Extractor.
Exposes the playlist pipeline as an MCP tool served over SSE.
"""

from .playlist_mcp_server import (
    SERVER_NAME,
    create_mcp_server,
    create_sse_app,
    format_playlist_summary,
    get_playlist_videos_text,
    run_server
)

__all__ = [
    'SERVER_NAME',
    'create_mcp_server',
    'create_sse_app',
    'format_playlist_summary',
    'get_playlist_videos_text',
    'run_server',
]
