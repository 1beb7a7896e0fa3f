"""
Browse Presenter

Mediates between the browse view and the media service: owns the section
registry and the fetch binding table, and runs at most one section refresh
and one scroll continuation at a time.

All public methods run on the UI thread. Fetches run on subscription task
threads and their results come back through the UI dispatcher.

View contract (duck typed, see ui/views/browse_view.py):
    show_progress_bar(show)          clear_header(section)
    update_header(section_update)    update_header_if_empty(sign_in_data)
    show_details(item)               notify(message)
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from core import presentation
from core.auth_gate import gate
from core.dispatcher import UiDispatcher
from core.media_service import MediaService, Producer
from core.models import CatalogGroup, CatalogType, Section, SectionKind, SectionUpdate
from core.tasks import SubscriptionTask, new_task_name
from config.i18n import t

logger = logging.getLogger("BrowsePresenter")

RELOAD_PERIOD_SEC = 10 * 60
NO_SECTION = -1  # legacy sentinel, normalized to None


class BrowsePresenter:
    def __init__(
        self,
        media_service: MediaService,
        dispatcher: UiDispatcher,
        *,
        playback: Any = None,
        details: Any = None,
        reload_period: float = RELOAD_PERIOD_SEC,
        clock: Callable[[], float] = time.time,
    ):
        self._media_service = media_service
        self._dispatcher = dispatcher
        self._playback = playback
        self._details = details
        self._reload_period = reload_period
        self._clock = clock

        self._view = None
        self._sections: List[Section] = []
        self._grid_mapping: Dict[int, Producer[CatalogGroup]] = {}
        self._row_mapping: Dict[int, Producer[List[CatalogGroup]]] = {}
        self._update_action: Optional[SubscriptionTask] = None
        self._scroll_action: Optional[SubscriptionTask] = None
        self._current_section_id: Optional[int] = None
        self._last_update_time = 0.0

    # ---- lifecycle ----
    def initialize(self) -> None:
        """Build the section registry and bind every section to its producer."""
        if self._sections:
            return

        manager = self._media_service.get_group_manager()

        self._sections = [
            Section(CatalogType.HOME, t("section.home"), SectionKind.ROW, "⌂"),
            Section(CatalogType.GAMING, t("section.gaming"), SectionKind.ROW, "🎮"),
            Section(CatalogType.NEWS, t("section.news"), SectionKind.ROW, "📰"),
            Section(CatalogType.MUSIC, t("section.music"), SectionKind.ROW, "♫"),
            Section(
                CatalogType.SUBSCRIPTIONS,
                t("section.subscriptions"),
                SectionKind.GRID,
                "★",
                auth_only=True,
            ),
            Section(
                CatalogType.HISTORY,
                t("section.history"),
                SectionKind.GRID,
                "⟲",
                auth_only=True,
            ),
            Section(
                CatalogType.PLAYLISTS,
                t("section.playlists"),
                SectionKind.ROW,
                "☰",
                auth_only=True,
            ),
        ]

        self._row_mapping[CatalogType.HOME] = manager.get_home_observe()
        self._row_mapping[CatalogType.NEWS] = manager.get_news_observe()
        self._row_mapping[CatalogType.MUSIC] = manager.get_music_observe()
        self._row_mapping[CatalogType.GAMING] = manager.get_gaming_observe()
        self._row_mapping[CatalogType.PLAYLISTS] = manager.get_playlists_observe()

        self._grid_mapping[CatalogType.SUBSCRIPTIONS] = manager.get_subscriptions_observe()
        self._grid_mapping[CatalogType.HISTORY] = manager.get_history_observe()

        logger.info(f"Initialized {len(self._sections)} sections")

    def shutdown(self) -> None:
        self._dispose(self._update_action)
        self._dispose(self._scroll_action)
        self._update_action = None
        self._scroll_action = None
        self._view = None
        logger.info("Browse presenter shut down")

    def register(self, view) -> None:
        self._view = view

    def unregister(self, view) -> None:
        if self._view is view:
            self._view = None

    # ---- properties ----
    @property
    def sections(self) -> List[Section]:
        return list(self._sections)

    @property
    def current_section_id(self) -> Optional[int]:
        return self._current_section_id

    @property
    def last_update_time(self) -> float:
        return self._last_update_time

    @property
    def refresh_task(self) -> Optional[SubscriptionTask]:
        return self._update_action

    @property
    def scroll_task(self) -> Optional[SubscriptionTask]:
        return self._scroll_action

    @property
    def is_loading(self) -> bool:
        return self._in_progress(self._update_action)

    def find_section(self, section_id: Optional[int]) -> Optional[Section]:
        for section in self._sections:
            if section.id == section_id:
                return section
        return None

    # ---- view events ----
    def on_init_done(self) -> None:
        if self._view is None:
            return

        for section in self._sections:
            self._view.update_header(presentation.from_section(section))

    def on_video_item_clicked(self, item) -> None:
        if self._view is None or self._playback is None:
            return

        self._playback.open_video(item)

    def on_video_item_long_clicked(self, item) -> None:
        if self._view is None or self._details is None:
            return

        self._details.open_video(item)

    def on_scroll_end(self, section_update: SectionUpdate) -> None:
        logger.debug(f"Scroll end on group: {section_update.title}")

        if self._in_progress(self._scroll_action):
            return

        self._continue_group(section_update)

    def on_view_resumed(self) -> None:
        elapsed = self._clock() - self._last_update_time
        if elapsed > self._reload_period and self._current_section_id is not None:
            self.focus_section(self._current_section_id)

    def on_header_focused(self, section_id: Optional[int]) -> None:
        self.focus_section(section_id)

    def refresh(self) -> None:
        self.focus_section(self._current_section_id)

    def focus_section(self, section_id: Optional[int]) -> None:
        if section_id == NO_SECTION:
            section_id = None
        self._current_section_id = section_id

        if section_id is None or self._view is None:
            return

        if self._in_progress(self._update_action):
            self._update_action.dispose()

        section = self.find_section(section_id)
        if section is None:
            logger.warning(f"Unknown section id: {section_id}")
            return

        self._view.show_progress_bar(True)
        self._view.clear_header(section)
        self._update_section(section)

    # ---- refresh tasks ----
    def _update_section(self, section: Section) -> None:
        if section.kind == SectionKind.GRID:
            self._update_grid_section(section, self._grid_mapping.get(section.id))
        elif section.kind == SectionKind.ROW:
            self._update_rows_section(section, self._row_mapping.get(section.id))

    def _update_rows_section(
        self, section: Section, groups: Optional[Producer[List[CatalogGroup]]]
    ) -> None:
        logger.debug(f"[{section.title}] loading rows")

        if groups is None:
            logger.error(f"[{section.title}] no row producer bound")
            return

        real_groups = gate(
            groups, section.auth_only, self._media_service.get_sign_in_manager()
        )

        self._update_action = SubscriptionTask(
            real_groups,
            self._dispatcher,
            on_next=lambda media_groups: self._apply_rows(section, media_groups),
            on_error=lambda error: self._on_update_error(section, error),
            on_complete=lambda: self._on_update_complete(section),
            name=new_task_name("rows"),
        ).start()

    def _apply_rows(self, section: Section, media_groups: Optional[List[CatalogGroup]]) -> None:
        for media_group in media_groups or []:
            if media_group is None or media_group.items is None:
                title = media_group.title if media_group else None
                logger.error(
                    f"[{section.title}] skipping group without items: {title}"
                )
                continue

            if self._view is None:
                return

            self._view.update_header(presentation.from_group(media_group, section))
            self._last_update_time = self._clock()

    def _update_grid_section(
        self, section: Section, group: Optional[Producer[CatalogGroup]]
    ) -> None:
        logger.debug(f"[{section.title}] loading grid")

        if group is None:
            logger.error(f"[{section.title}] no grid producer bound")
            return

        real_group = gate(
            group, section.auth_only, self._media_service.get_sign_in_manager()
        )

        self._update_action = SubscriptionTask(
            real_group,
            self._dispatcher,
            on_next=lambda media_group: self._apply_grid(section, media_group),
            on_error=lambda error: self._on_update_error(section, error),
            on_complete=lambda: self._on_update_complete(section),
            name=new_task_name("grid"),
        ).start()

    def _apply_grid(self, section: Section, media_group: Optional[CatalogGroup]) -> None:
        if media_group is None or media_group.items is None:
            logger.error(f"[{section.title}] skipping grid group without items")
            return

        if self._view is None:
            return

        self._view.update_header(presentation.from_group(media_group, section))
        self._last_update_time = self._clock()

    def _on_update_error(self, section: Section, error: BaseException) -> None:
        logger.error(f"[{section.title}] refresh failed: {error}")
        if self._view is not None:
            self._view.show_progress_bar(False)

    def _on_update_complete(self, section: Section) -> None:
        if self._view is None:
            return

        self._view.show_progress_bar(False)
        self._view.update_header_if_empty(presentation.sign_in_data(section))

    # ---- scroll continuation ----
    def _continue_group(self, section_update: SectionUpdate) -> None:
        logger.debug(f"Continuing group: {section_update.title}")

        media_group = section_update.catalog_group
        if media_group is None or not media_group.has_continuation:
            logger.debug(f"No continuation for group: {section_update.title}")
            return

        section = section_update.section
        manager = self._media_service.get_group_manager()

        self._scroll_action = SubscriptionTask(
            manager.continue_group_observe(media_group),
            self._dispatcher,
            on_next=lambda continued: self._apply_continuation(section, continued),
            on_error=lambda error: self._on_continue_error(section, error),
            on_complete=self._on_continue_complete,
            name=new_task_name("scroll"),
        ).start()

    def _apply_continuation(self, section: Section, media_group: Optional[CatalogGroup]) -> None:
        if media_group is None or media_group.items is None:
            logger.error(f"[{section.title}] skipping continuation without items")
            return

        if self._view is None:
            return

        self._view.update_header(
            presentation.from_group(media_group, section, continuation=True)
        )

    def _on_continue_error(self, section: Section, error: BaseException) -> None:
        logger.error(f"[{section.title}] continuation failed: {error}")
        if self._view is not None:
            self._view.show_progress_bar(False)

    def _on_continue_complete(self) -> None:
        if self._view is not None:
            self._view.show_progress_bar(False)

    # ---- helpers ----
    @staticmethod
    def _in_progress(task: Optional[SubscriptionTask]) -> bool:
        return task is not None and not task.is_disposed()

    @staticmethod
    def _dispose(task: Optional[SubscriptionTask]) -> None:
        if task is not None:
            task.dispose()
