"""
Playback

VideoPlayer wraps libVLC (python-vlc binding). PlaybackPresenter resolves an
item's stream URL off the UI thread and starts playback back on it.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Optional

import vlc

from core.dispatcher import UiDispatcher
from core.media_service import MediaService
from core.models import CatalogItem
from config.i18n import t

logger = logging.getLogger("Playback")


class PlayerState(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


class VideoPlayer:
    """Video player using VLC."""

    def __init__(self, volume: int = 80):
        logger.info("Initializing VideoPlayer with VLC backend")
        self.state = PlayerState.STOPPED
        self.volume = volume
        self.current_url = None

        self._instance = vlc.Instance("--quiet")
        self._player = self._instance.media_player_new()
        self.set_volume(self.volume)

    def play(self, source: str):
        self.stop()
        self.current_url = source
        logger.info(f"Playing: {source[:80]}...")

        media = self._instance.media_new(source)
        self._player.set_media(media)
        self._player.play()
        self.state = PlayerState.PLAYING
        self.set_volume(self.volume)

    def stop(self):
        try:
            self._player.stop()
        except Exception as e:
            logger.debug(f"Stop failed: {e}")
        self.state = PlayerState.STOPPED

    def set_volume(self, level: int):
        self.volume = max(0, min(100, level))
        try:
            self._player.audio_set_volume(self.volume)
        except Exception as e:
            logger.debug(f"Volume change failed: {e}")

    def cleanup(self):
        self.stop()
        try:
            self._player.release()
            self._instance.release()
        except Exception as e:
            logger.debug(f"VLC release failed: {e}")


class PlaybackPresenter:
    """Opens a clicked item: resolve stream in a worker, play on the UI thread."""

    def __init__(
        self,
        media_service: MediaService,
        dispatcher: UiDispatcher,
        player_factory: Callable[[], VideoPlayer] = VideoPlayer,
    ):
        self._media_service = media_service
        self._dispatcher = dispatcher
        self._player_factory = player_factory
        self._player: Optional[VideoPlayer] = None
        self._view = None
        self._request_seq = 0

    def register(self, view) -> None:
        self._view = view

    def unregister(self, view) -> None:
        if self._view is view:
            self._view = None

    @property
    def player(self) -> VideoPlayer:
        if self._player is None:
            self._player = self._player_factory()
        return self._player

    def open_video(self, item: CatalogItem) -> None:
        # Only the latest click wins
        self._request_seq += 1
        request = self._request_seq
        self._notify(f"{t('playback.resolving')} {item.title[:40]}")

        def worker():
            try:
                url = self._media_service.get_stream_url(item)
            except Exception as e:
                logger.error(f"Failed to resolve stream for {item.url}: {e}")
                self._dispatcher.post(lambda: self._on_failed(request, item))
                return
            self._dispatcher.post(lambda: self._on_resolved(request, item, url))

        threading.Thread(target=worker, daemon=True).start()

    def stop(self) -> None:
        self._request_seq += 1
        if self._player is not None:
            self._player.stop()
            self._notify(t("playback.stopped"))

    def shutdown(self) -> None:
        self._request_seq += 1
        if self._player is not None:
            self._player.cleanup()
            self._player = None
        self._view = None

    def _on_resolved(self, request: int, item: CatalogItem, url: str) -> None:
        if request != self._request_seq:
            return
        try:
            self.player.play(url)
        except Exception as e:
            logger.error(f"Playback failed for {item.url}: {e}")
            self._notify(t("playback.error"))
            return
        self._notify(f"▶ {t('playback.playing')}: {item.title[:60]}")

    def _on_failed(self, request: int, item: CatalogItem) -> None:
        if request != self._request_seq:
            return
        self._notify(f"{t('playback.error')}: {item.title[:40]}")

    def _notify(self, message: str) -> None:
        if self._view is not None:
            self._view.notify(message)
