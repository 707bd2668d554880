"""Shared fixtures for YouTube Playlist Extractor tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings
from tools.playlist_fetcher import VideoRecord

TEST_YOUTUBE_API_KEY = "AIza_test_api_key_123456789"


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers installed by configure_logging so log files get closed."""
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        # pytest's own capture handlers are subclasses and stay in place
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(saved_level)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Create test settings pointing at temporary files."""
    return Settings(
        youtube_api_key=TEST_YOUTUBE_API_KEY,
        config_path=str(tmp_path / "cli_config.json"),
        log_file=str(tmp_path / "cli_tool.log")
    )


@pytest.fixture
def sample_videos():
    """Three records in playlist order."""
    return [
        VideoRecord.from_video_id("vid_one_001", "First Video", "2023-01-01T00:00:00Z"),
        VideoRecord.from_video_id("vid_two_002", "Second, with comma", "2023-02-01T00:00:00Z"),
        VideoRecord.from_video_id("vid_three03", "Третье видео", ""),
    ]


def make_playlist_item(video_id, title="Video", published_at="2023-01-01T00:00:00Z"):
    """Build a playlistItems resource the way the API returns it."""
    snippet = {
        'title': title,
        'publishedAt': published_at,
        'resourceId': {'kind': 'youtube#video'},
    }
    if video_id is not None:
        snippet['resourceId']['videoId'] = video_id
    return {'id': f"item_{video_id}", 'snippet': snippet}


def make_page(video_ids, next_page_token=None):
    """Build one playlistItems.list response page."""
    page = {'items': [make_playlist_item(video_id, title=f"Video {video_id}") for video_id in video_ids]}
    if next_page_token:
        page['nextPageToken'] = next_page_token
    return page


@pytest.fixture
def playlist_page():
    """Factory for playlistItems.list response pages."""
    return make_page


@pytest.fixture
def playlist_item():
    """Factory for single playlistItems resources."""
    return make_playlist_item
