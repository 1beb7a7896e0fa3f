"""
Media Service Interfaces

What the browse presenter consumes from a catalog backend. Every ``*_observe``
method returns a lazy producer: nothing is fetched until the producer is
called and iterated, and calling it again re-issues the fetch.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, TypeVar

from core.models import CatalogGroup, CatalogItem

T = TypeVar("T")

Producer = Callable[[], Iterable[T]]


class CatalogError(Exception):
    """A catalog fetch failed."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(f"{message} ({url})" if url else message)
        self.url = url


class MediaGroupManager(ABC):
    # Row sections: each emission is an ordered list of groups
    @abstractmethod
    def get_home_observe(self) -> Producer[List[CatalogGroup]]: ...

    @abstractmethod
    def get_gaming_observe(self) -> Producer[List[CatalogGroup]]: ...

    @abstractmethod
    def get_news_observe(self) -> Producer[List[CatalogGroup]]: ...

    @abstractmethod
    def get_music_observe(self) -> Producer[List[CatalogGroup]]: ...

    @abstractmethod
    def get_playlists_observe(self) -> Producer[List[CatalogGroup]]: ...

    # Grid sections: each emission is a single group
    @abstractmethod
    def get_subscriptions_observe(self) -> Producer[CatalogGroup]: ...

    @abstractmethod
    def get_history_observe(self) -> Producer[CatalogGroup]: ...

    @abstractmethod
    def continue_group_observe(self, group: CatalogGroup) -> Producer[CatalogGroup]:
        """Next page(s) of ``group``."""


class SignInManager(ABC):
    @abstractmethod
    def is_signed_observe(self) -> Producer[bool]: ...


class MediaService(ABC):
    @abstractmethod
    def get_group_manager(self) -> MediaGroupManager: ...

    @abstractmethod
    def get_sign_in_manager(self) -> SignInManager: ...

    @abstractmethod
    def get_stream_url(self, item: CatalogItem) -> str:
        """Direct stream URL for playback (blocking, call off the UI thread)."""
