"""
Tools package for YouTube Playlist Extractor.
Contains the playlist retrieval pipeline shared by the CLI and the MCP server.
"""

from .playlist_ids import get_playlist_id_from_url, build_playlist_url
from .playlist_fetcher import (
    PlaylistFetcher,
    PlaylistFetchError,
    FetchState,
    VideoRecord,
    create_playlist_fetcher
)
from .exporter import (
    EXPORT_FORMATS,
    ExportError,
    render,
    default_output_filename,
    write_export
)

__all__ = [
    # Identifier extraction
    'get_playlist_id_from_url',
    'build_playlist_url',

    # Playlist fetching
    'PlaylistFetcher',
    'PlaylistFetchError',
    'FetchState',
    'VideoRecord',
    'create_playlist_fetcher',

    # Export
    'EXPORT_FORMATS',
    'ExportError',
    'render',
    'default_output_filename',
    'write_export',
]
