"""
Playlist fetching for YouTube Playlist Extractor.
Walks the YouTube Data API playlistItems listing page by page.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from config.settings import Settings
from tools.playlist_ids import build_playlist_url

logger = logging.getLogger(__name__)

# playlistItems.list accepts at most 50 results per page
MAX_PAGE_SIZE = 50

WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={}"
UNKNOWN_TITLE = "Unknown"


class PlaylistFetchError(Exception):
    """Custom exception for playlist fetch related errors."""
    pass


class FetchState(Enum):
    """State of a paged playlist fetch."""
    FETCHING = "fetching"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass(frozen=True)
class VideoRecord:
    """One entry of a playlist, in playlist order."""
    title: str
    url: str
    video_id: str
    published_at: str = ""

    @classmethod
    def from_video_id(cls, video_id: str, title: Optional[str] = None, published_at: Optional[str] = None) -> "VideoRecord":
        """Build a record, deriving the watch URL from the video ID."""
        return cls(
            title=title or UNKNOWN_TITLE,
            url=WATCH_URL_TEMPLATE.format(video_id),
            video_id=video_id,
            published_at=published_at or ""
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class PlaylistFetcher:
    """
    Fetches every video of a YouTube playlist.

    Pages are requested strictly one after another, each carrying the
    previous response's continuation token:
    - FETCHING -> FETCHING while a response has a nextPageToken
    - FETCHING -> EXHAUSTED once a response has none
    - FETCHING -> FAILED on any API or transport error (no retry)
    """

    def __init__(self, settings: Settings):
        """
        Initialize PlaylistFetcher with YouTube API client.

        Args:
            settings: Application settings containing API keys
        """
        self.settings = settings
        self.youtube = build('youtube', 'v3', developerKey=settings.youtube_api_key)

    def fetch_all(
        self,
        playlist_id: str,
        on_progress: Optional[Callable[[int], None]] = None
    ) -> List[VideoRecord]:
        """
        Fetch all videos of a playlist.

        Args:
            playlist_id: YouTube playlist ID
            on_progress: Called with the running video count after each page

        Returns:
            List of video records in playlist order

        Raises:
            PlaylistFetchError: If any page request fails. Videos collected
                from earlier pages are discarded.
        """
        videos: List[VideoRecord] = []
        page_token: Optional[str] = None
        state = FetchState.FETCHING

        logger.info(f"Fetching videos for playlist: {playlist_id}")
        logger.debug(f"Playlist URL: {build_playlist_url(playlist_id)}")

        while state is FetchState.FETCHING:
            try:
                response = self._request_page(playlist_id, page_token)
            except Exception as e:
                state = FetchState.FAILED
                logger.debug(f"Fetch {state.value} after {len(videos)} videos; discarding them")
                message = _http_error_message(e) if isinstance(e, HttpError) else str(e)
                raise PlaylistFetchError(f"YouTube API Error: {message}") from e

            videos.extend(self._extract_page_videos(response))

            page_token = response.get('nextPageToken') or None
            state = FetchState.FETCHING if page_token else FetchState.EXHAUSTED

            if on_progress is not None:
                on_progress(len(videos))
            if state is FetchState.FETCHING:
                logger.info(f"Fetched {len(videos)} videos so far...")

        logger.info(f"Finished playlist {playlist_id}: {len(videos)} videos")
        return videos

    def _request_page(self, playlist_id: str, page_token: Optional[str]) -> Dict[str, Any]:
        logger.debug(f"Requesting page token={page_token!r} for playlist {playlist_id}")
        request = self.youtube.playlistItems().list(
            part='snippet',
            playlistId=playlist_id,
            maxResults=MAX_PAGE_SIZE,
            pageToken=page_token
        )
        return request.execute()

    def _extract_page_videos(self, response: Dict[str, Any]) -> List[VideoRecord]:
        """
        Turn one playlistItems response page into video records.

        Items without a snippet or without a resolvable video ID (deleted or
        private entries) are skipped.
        """
        videos = []
        for item in response.get('items') or []:
            snippet = item.get('snippet')
            if not snippet:
                continue

            video_id = (snippet.get('resourceId') or {}).get('videoId')
            if not video_id:
                logger.debug(f"Skipping playlist item without video ID: {item.get('id')}")
                continue

            videos.append(VideoRecord.from_video_id(
                video_id,
                title=snippet.get('title'),
                published_at=snippet.get('publishedAt')
            ))
        return videos


def _http_error_message(error: HttpError) -> str:
    """Prefer the API's own error reason over the full HttpError repr."""
    reason = getattr(error, 'reason', None)
    status = getattr(getattr(error, 'resp', None), 'status', None)
    if reason and status:
        return f"{reason} ({status})"
    return str(error)


def create_playlist_fetcher(settings: Settings) -> PlaylistFetcher:
    """
    Factory function to create PlaylistFetcher instance.

    Args:
        settings: Application settings

    Returns:
        Configured PlaylistFetcher instance
    """
    return PlaylistFetcher(settings)
