"""
YouTube Catalog Service

yt-dlp backed implementation of the media service: flat feed extraction for
browse sections, paged continuation, cookie based sign-in and stream URLs.
"""

import logging
import os
import random
import time
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import yt_dlp
from yt_dlp.utils import DownloadError

from core.media_service import (
    CatalogError,
    MediaGroupManager,
    MediaService,
    Producer,
    SignInManager,
)
from core.models import CatalogGroup, CatalogItem, CatalogType

logger = logging.getLogger("YouTubeService")

FEED_PREFIXES = (":yt", "ytsearch")
ALLOWED_DOMAINS = ["youtube.com", "www.youtube.com", "youtu.be", "music.youtube.com"]
UNUSABLE_TITLES = ("[Private video]", "[Deleted video]")


def validate_url(url: str):
    """Ensure URL is a YouTube URL or a yt-dlp feed keyword."""
    if not url:
        raise ValueError("Empty URL")
    if url.startswith(FEED_PREFIXES):
        return
    if not (url.startswith("http://") or url.startswith("https://")):
        raise ValueError("Invalid URL scheme: must be http or https")
    if not any(domain in url for domain in ALLOWED_DOMAINS):
        raise ValueError("Security: Only YouTube URLs are allowed")


class YouTubeClient:
    """Thin yt-dlp wrapper: options, cookie strategy and 429 retries."""

    def __init__(self, max_retries: int = 3, retry_base_delay: float = 30.0):
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

        # Suppress yt-dlp console output completely
        self._null_logger = logging.getLogger("yt-dlp")
        self._null_logger.setLevel(logging.CRITICAL)

        self.ydl_opts_info: Dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "extract_flat": "in_playlist",
            "logger": self._null_logger,
        }
        self.cookies_configured = False

        self._apply_cookie_strategy()

    def _apply_cookie_strategy(self):
        """
        Configure yt-dlp authentication.

        Priority:
        1. Explicit file via TVBROWSE_COOKIES_FILE or cookies.txt.
        2. Explicit browser via TVBROWSE_COOKIES_BROWSER.
        Without either, auth-only sections stay signed out.
        """
        if os.environ.get("TVBROWSE_DISABLE_COOKIES"):
            logger.warning("Cookie strategy disabled via TVBROWSE_DISABLE_COOKIES")
            return

        cookie_file_env = os.environ.get("TVBROWSE_COOKIES_FILE")
        cookie_path = Path(cookie_file_env) if cookie_file_env else Path("cookies.txt")
        if cookie_path.exists():
            logger.info(f"Using cookies file: {cookie_path}")
            self.ydl_opts_info["cookiefile"] = str(cookie_path)
            self.cookies_configured = True
            return

        browser = os.environ.get("TVBROWSE_COOKIES_BROWSER")
        if browser:
            logger.info(f"Using cookies_from_browser='{browser}'")
            self.ydl_opts_info["cookiesfrombrowser"] = (browser.lower(),)
            self.cookies_configured = True
            return

        logger.warning(
            "No cookies configured (set cookies.txt or TVBROWSE_COOKIES_* env vars). "
            "Subscriptions, history and playlists will ask to sign in."
        )

    def extract(self, url: str, **overrides) -> Dict[str, Any]:
        try:
            validate_url(url)
        except ValueError as e:
            raise CatalogError(str(e), url) from e
        opts = self.ydl_opts_info.copy()
        opts.update(overrides)

        for attempt in range(self.max_retries + 1):
            try:
                with yt_dlp.YoutubeDL(opts) as ydl:
                    info = ydl.extract_info(url, download=False)
                break
            except Exception as e:
                if attempt < self.max_retries and (
                    "429" in str(e) or "too many requests" in str(e).lower()
                ):
                    wait = (attempt + 1) * self.retry_base_delay + random.uniform(1, 10)
                    logger.warning(f"HTTP 429. Retrying {url} in {wait:.1f}s...")
                    time.sleep(wait)
                    continue
                raise CatalogError(f"Failed to extract feed: {e}", url) from e

        if not info:
            raise CatalogError("Empty response", url)
        return info


def entry_to_item(entry: Dict[str, Any]) -> Optional[CatalogItem]:
    """Map a flat yt-dlp entry to a catalog item (None for unusable entries)."""
    if not entry:
        return None
    title = entry.get("title") or "Unknown"
    if title in UNUSABLE_TITLES:
        return None

    video_id = entry.get("id") or ""
    url = entry.get("url") or entry.get("webpage_url")
    if not url and video_id:
        url = f"https://www.youtube.com/watch?v={video_id}"
    if not url:
        return None

    thumbnail = entry.get("thumbnail")
    if not thumbnail and entry.get("thumbnails"):
        thumbnail = entry["thumbnails"][-1].get("url")

    return CatalogItem(
        video_id=video_id,
        title=title,
        url=url,
        author=entry.get("channel") or entry.get("uploader") or "",
        duration=int(entry.get("duration") or 0),
        thumbnail=thumbnail,
        view_count=entry.get("view_count"),
    )


class YouTubeGroupManager(MediaGroupManager):
    def __init__(self, client: YouTubeClient, feeds: Dict[str, list], page_size: int = 20):
        self._client = client
        self._feeds = feeds
        self._page_size = max(1, int(page_size))

    # ---- fetching ----
    def fetch_page(self, group_type: int, title: str, url: str, offset: int = 0) -> CatalogGroup:
        """Fetch one page of a feed as a catalog group."""
        info = self._client.extract(
            url,
            playliststart=offset + 1,
            playlistend=offset + self._page_size,
        )
        entries = info.get("entries")
        if entries is None:
            # Not a playlist-like page; nothing we can page through
            logger.error(f"Feed has no entries: {url}")
            return CatalogGroup(type=group_type, title=title, items=None)

        entries = list(entries)
        items = [item for item in (entry_to_item(e) for e in entries) if item]

        continuation = None
        if len(entries) >= self._page_size:
            continuation = {"url": url, "offset": offset + len(entries)}

        logger.info(f"[{title}] fetched {len(items)} items (offset={offset})")
        return CatalogGroup(
            type=group_type, title=title, items=items, continuation=continuation
        )

    def _shelves(self, group_type: CatalogType) -> List[Dict[str, str]]:
        return [s for s in self._feeds.get(group_type.feed_name, []) if s.get("url")]

    def _rows_producer(self, group_type: CatalogType) -> Producer[List[CatalogGroup]]:
        def produce() -> Iterator[List[CatalogGroup]]:
            groups = []
            for shelf in self._shelves(group_type):
                title = shelf.get("title") or shelf["url"]
                try:
                    groups.append(self.fetch_page(group_type, title, shelf["url"]))
                except CatalogError as e:
                    # One broken shelf must not take the whole row down
                    logger.error(f"[{title}] shelf failed: {e}")
                    groups.append(None)
            yield groups

        return produce

    def _grid_producer(self, group_type: CatalogType) -> Producer[CatalogGroup]:
        def produce() -> Iterator[CatalogGroup]:
            shelves = self._shelves(group_type)
            if not shelves:
                return
            shelf = shelves[0]
            yield self.fetch_page(group_type, shelf.get("title") or shelf["url"], shelf["url"])

        return produce

    def get_home_observe(self):
        return self._rows_producer(CatalogType.HOME)

    def get_gaming_observe(self):
        return self._rows_producer(CatalogType.GAMING)

    def get_news_observe(self):
        return self._rows_producer(CatalogType.NEWS)

    def get_music_observe(self):
        return self._rows_producer(CatalogType.MUSIC)

    def get_playlists_observe(self):
        return self._rows_producer(CatalogType.PLAYLISTS)

    def get_subscriptions_observe(self):
        return self._grid_producer(CatalogType.SUBSCRIPTIONS)

    def get_history_observe(self):
        return self._grid_producer(CatalogType.HISTORY)

    def continue_group_observe(self, group: CatalogGroup) -> Producer[CatalogGroup]:
        state = group.continuation

        def produce() -> Iterator[CatalogGroup]:
            if not state:
                return
            yield self.fetch_page(group.type, group.title, state["url"], state["offset"])

        return produce


class YouTubeSignInManager(SignInManager):
    PROBE_URL = ":ytsubs"

    def __init__(self, client: YouTubeClient):
        self._client = client

    def is_signed_observe(self) -> Producer[bool]:
        def produce() -> Iterator[bool]:
            if not self._client.cookies_configured:
                yield False
                return
            try:
                self._client.extract(self.PROBE_URL, playlistend=1)
            except CatalogError as e:
                if isinstance(e.__cause__, DownloadError):
                    logger.info(f"Sign-in probe rejected: {e}")
                    yield False
                    return
                raise
            yield True

        return produce


class YouTubeMediaService(MediaService):
    def __init__(self, feeds: Dict[str, list], page_size: int = 20, max_retries: int = 3):
        self.client = YouTubeClient(max_retries=max_retries)
        self._group_manager = YouTubeGroupManager(self.client, feeds, page_size)
        self._sign_in_manager = YouTubeSignInManager(self.client)
        logger.info("YouTubeMediaService initialized")

    def get_group_manager(self) -> YouTubeGroupManager:
        return self._group_manager

    def get_sign_in_manager(self) -> YouTubeSignInManager:
        return self._sign_in_manager

    def get_stream_url(self, item: CatalogItem) -> str:
        info = self.client.extract(
            item.url, extract_flat=False, format="best[acodec!=none][vcodec!=none]/best"
        )
        if info.get("url"):
            return info["url"]

        formats = [
            f
            for f in info.get("formats", [])
            if f.get("acodec") != "none" and f.get("vcodec") != "none" and f.get("url")
        ]
        if not formats:
            raise CatalogError("No playable format", item.url)
        formats.sort(key=lambda f: f.get("height") or 0, reverse=True)
        return formats[0]["url"]
