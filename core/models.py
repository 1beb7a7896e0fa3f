"""
Browse Data Model

Sections (headers), catalog groups returned by the media service and the
display-ready section updates handed to the browse view.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, List, Optional


class CatalogType(IntEnum):
    """Well-known catalog identifiers. A section's id is its catalog type."""

    HOME = 0
    GAMING = 1
    NEWS = 2
    MUSIC = 3
    SUBSCRIPTIONS = 4
    HISTORY = 5
    PLAYLISTS = 6

    @property
    def feed_name(self) -> str:
        return self.name.lower()


class SectionKind(Enum):
    """How a section lays out its catalog data."""

    GRID = "grid"  # single collection
    ROW = "row"  # ordered sequence of collections


@dataclass(frozen=True)
class Section:
    """A browsable header in the sidebar."""

    id: int
    title: str
    kind: SectionKind
    icon: str = ""
    auth_only: bool = False


@dataclass(frozen=True)
class CatalogItem:
    """A single video in a catalog group."""

    video_id: str
    title: str
    url: str
    author: str = ""
    duration: int = 0
    thumbnail: Optional[str] = None
    view_count: Optional[int] = None

    @property
    def duration_label(self) -> str:
        seconds = max(0, int(self.duration or 0))
        hours, rest = divmod(seconds, 3600)
        minutes, secs = divmod(rest, 60)
        if hours:
            return f"{hours:d}:{minutes:02d}:{secs:02d}"
        return f"{minutes:d}:{secs:02d}"


@dataclass
class CatalogGroup:
    """A titled collection of items plus opaque pagination state.

    ``items`` is None when the service returned a malformed group; an empty
    list is a valid (empty) group.
    """

    type: int
    title: str
    items: Optional[List[CatalogItem]] = field(default_factory=list)
    continuation: Optional[Any] = None

    @property
    def has_continuation(self) -> bool:
        return self.continuation is not None


@dataclass(frozen=True)
class SectionUpdate:
    """Display-ready projection of one catalog group bound to a section."""

    section: Section
    title: str
    items: List[CatalogItem] = field(default_factory=list)
    catalog_group: Optional[CatalogGroup] = None
    continuation: bool = False

    @property
    def is_placeholder(self) -> bool:
        return self.catalog_group is None


@dataclass(frozen=True)
class SignInData:
    """Payload for the 'needs sign-in' placeholder of a section."""

    section: Section
    title: str
    message: str
    hint: str = ""
