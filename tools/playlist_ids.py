"""
Playlist identifier extraction for YouTube Playlist Extractor.
"""

import re
from typing import Optional

# Tried in order; the first capture wins
PLAYLIST_ID_PATTERNS = (
    re.compile(r'list=([a-zA-Z0-9_-]+)'),
    re.compile(r'playlist\?list=([a-zA-Z0-9_-]+)'),
)

# Raw input longer than this (and not a URL) is taken as the ID itself
MIN_RAW_ID_LENGTH = 10

PLAYLIST_URL_TEMPLATE = "https://www.youtube.com/playlist?list={}"


def get_playlist_id_from_url(url: Optional[str]) -> Optional[str]:
    """
    Extract playlist ID from YouTube URL formats.

    Supports:
    - https://www.youtube.com/playlist?list=PLAYLIST_ID
    - https://www.youtube.com/watch?v=VIDEO_ID&list=PLAYLIST_ID
    - PLAYLIST_ID (longer than 10 characters, not a URL)

    The input is not trimmed or case-folded. Whether the ID really exists is
    left to the YouTube API.
    """
    if not url:
        return None

    for pattern in PLAYLIST_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)

    # Assume a direct ID when the input is not a link
    if len(url) > MIN_RAW_ID_LENGTH and 'http' not in url:
        return url

    return None


def build_playlist_url(playlist_id: str) -> str:
    """Return the canonical playlist page URL for an ID."""
    return PLAYLIST_URL_TEMPLATE.format(playlist_id)
