#!/usr/bin/env python3
"""
YouTube Playlist Extractor

Exports the videos of a YouTube playlist to CSV, JSON or plain text, or runs
as an MCP server (SSE) exposing the same lookup as a tool.
"""

import logging
import sys

import click
from dotenv import load_dotenv

from config.logging_config import configure_logging
from config.settings import CONFIG_FILE, LOG_FILE, Settings, load_config, resolve_api_key, save_config
from mcp_integration.playlist_mcp_server import DEFAULT_HOST, DEFAULT_PORT, run_server
from tools.exporter import EXPORT_FORMATS, default_output_filename, write_export
from tools.playlist_fetcher import PlaylistFetchError, create_playlist_fetcher
from tools.playlist_ids import get_playlist_id_from_url

logger = logging.getLogger("youtube_playlist")


def fail(message: str) -> None:
    """Log an error and exit with status 1."""
    logger.error(message)
    sys.exit(1)


@click.command(name="youtube-playlist", help="YouTube Playlist Extractor Tool & MCP Server")
@click.option("--url", help="Playlist URL or ID.")
@click.option("--key", help="YouTube Data API key.")
@click.option("--output", help="Output filename (default: playlist_<id>.<format>).")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(EXPORT_FORMATS, case_sensitive=False),
    default="csv",
    show_default=True,
    help="Output format.",
)
@click.option("--save-key", is_flag=True, help="Save the API key given with --key to the config file.")
@click.option("--server", is_flag=True, help="Run as MCP server (SSE).")
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Server bind address.")
@click.option("--port", type=int, default=DEFAULT_PORT, show_default=True, help="Server port.")
@click.option("--verbose", is_flag=True, help="Enable verbose logging.")
def main(url, key, output, output_format, save_key, server, host, port, verbose):
    load_dotenv()
    configure_logging(LOG_FILE, verbose=verbose)

    api_key = resolve_api_key(key, load_config(CONFIG_FILE))
    if not api_key:
        fail("An API key is required. Use --key 'YOUR_KEY'")

    settings = Settings(
        youtube_api_key=api_key,
        config_path=CONFIG_FILE,
        log_file=LOG_FILE,
        verbose=verbose
    )
    logger.debug(f"Settings resolved (config: {settings.config_path}, log: {settings.log_file})")

    if save_key and key:
        if save_config({'api_key': key}, settings.config_path):
            logger.info("API key saved successfully.")

    # === Server mode ===
    if server:
        run_server(settings, host=host, port=port)
        return

    # === CLI mode ===
    if not url:
        fail("Provide a playlist URL with --url, or start the server with --server")

    playlist_id = get_playlist_id_from_url(url)
    if not playlist_id:
        fail("Invalid playlist URL.")

    try:
        videos = create_playlist_fetcher(settings).fetch_all(playlist_id)
    except PlaylistFetchError as e:
        fail(f"An error occurred: {e}")

    logger.info(f"Done! Total videos: {len(videos)}")

    output_format = output_format.lower()
    output_file = output or default_output_filename(playlist_id, output_format)
    try:
        path = write_export(videos, output_format, output_file)
    except OSError as e:
        fail(f"An error occurred: {e}")

    logger.info(f"Saved data to file: {path}")


if __name__ == "__main__":
    main()
