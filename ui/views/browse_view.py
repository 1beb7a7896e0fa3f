"""
Browse View

Sidebar of sections on the left, rows of the focused section on the right,
status bar at the bottom. Implements the view contract the browse presenter
calls into; every method here runs on the urwid (UI) thread.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

import urwid

from core.models import CatalogItem, Section, SectionUpdate, SignInData
from ui.dialogs.details_dialog import DetailsDialog
from ui.widgets.status_bar import StatusBar
from config.i18n import t

if TYPE_CHECKING:
    from core.browse_presenter import BrowsePresenter

logger = logging.getLogger("BrowseView")


class SectionButton(urwid.Button):
    def __init__(self, section: Section):
        self.section = section
        super().__init__(f"{section.icon} {section.title}")


class ItemButton(urwid.Button):
    def __init__(self, item: CatalogItem, row: "Row"):
        self.item = item
        self.row = row
        label = f"{item.title[:70]}  ({item.author or '-'} · {item.duration_label})"
        super().__init__(label)


class Row:
    """One rendered group: title line plus item buttons."""

    def __init__(self, update: SectionUpdate):
        self.update = update
        self.title = urwid.Text(("title", f" {update.title} "))
        self.buttons: List[ItemButton] = []


class BrowseView:
    def __init__(self, presenter: "BrowsePresenter", status: Optional[StatusBar] = None):
        self.presenter = presenter
        self.status = status or StatusBar(t("status.ready"))

        self._sections: Dict[int, Section] = {}
        self._current_section: Optional[Section] = None
        self._rows: List[Row] = []
        self._placeholder_shown = False
        self._focused_section_id: Optional[int] = None
        self._populating = False

        self.sidebar_walker = urwid.SimpleListWalker([])
        self.body_walker = urwid.SimpleListWalker([])
        urwid.connect_signal(self.sidebar_walker, "modified", self._on_sidebar_modified)
        urwid.connect_signal(self.body_walker, "modified", self._on_body_modified)

        self.body_header = urwid.Text(("title", t("browse.empty")), align="center")
        sidebar = urwid.LineBox(
            urwid.ListBox(self.sidebar_walker), title=t("browse.sections")
        )
        body = urwid.LineBox(
            urwid.Frame(body=urwid.ListBox(self.body_walker), header=self.body_header)
        )
        self.columns = urwid.Columns(
            [("weight", 1, sidebar), ("weight", 4, body)], dividechars=1
        )
        self._frame = urwid.Frame(body=self.columns, footer=self.status)
        self.root = urwid.WidgetPlaceholder(self._frame)

    # ---- presenter contract ----
    def show_progress_bar(self, show: bool) -> None:
        self.status.set_loading(show)

    def clear_header(self, section: Section) -> None:
        self._current_section = section
        self._rows = []
        self._placeholder_shown = False
        self._populating = True
        try:
            del self.body_walker[:]
        finally:
            self._populating = False
        self.body_header.set_text(("title", f"{section.icon} {section.title}"))

    def update_header(self, update: SectionUpdate) -> None:
        if update.is_placeholder:
            self._add_section(update.section)
            return

        if self._current_section is None or update.section.id != self._current_section.id:
            logger.debug(f"Dropping update for hidden section: {update.section.title}")
            return

        self._populating = True
        try:
            if self._placeholder_shown:
                del self.body_walker[:]
                self._placeholder_shown = False
            if update.continuation:
                self._extend_row(update)
            else:
                self._append_row(update)
        finally:
            self._populating = False

    def update_header_if_empty(self, data: SignInData) -> None:
        if self._current_section is None or data.section.id != self._current_section.id:
            return
        if self._rows:
            return

        self._populating = True
        try:
            self.body_walker.extend(
                [
                    urwid.Divider(),
                    urwid.Text(("title", data.title), align="center"),
                    urwid.Text(data.message, align="center"),
                    urwid.Text(("info", data.hint), align="center"),
                ]
            )
            self._placeholder_shown = True
        finally:
            self._populating = False

    def show_details(self, item: CatalogItem) -> None:
        dialog = DetailsDialog(item, on_close=self._close_overlay)
        self.root.original_widget = urwid.Overlay(
            dialog,
            self._frame,
            align="center",
            width=("relative", 70),
            valign="middle",
            height=("relative", 50),
        )

    def notify(self, message: str) -> None:
        self.status.notify(message)

    # ---- helpers used by the app ----
    @property
    def current_section(self) -> Optional[Section]:
        return self._current_section

    @property
    def rows(self) -> List[Row]:
        return list(self._rows)

    def focused_item(self) -> Optional[CatalogItem]:
        button = self._focused_button()
        return button.item if button else None

    def toggle_pane(self) -> None:
        self.columns.focus_position = 1 - self.columns.focus_position

    def focus_section(self, section_id: Optional[int]) -> None:
        """Move the sidebar cursor; the focus handler notifies the presenter."""
        for pos, widget in enumerate(self.sidebar_walker):
            if widget.original_widget.section.id == section_id:
                self.sidebar_walker.set_focus(pos)
                self._on_sidebar_modified()
                return

    # ---- internals ----
    def _add_section(self, section: Section) -> None:
        if section.id in self._sections:
            return
        self._sections[section.id] = section
        button = SectionButton(section)
        urwid.connect_signal(button, "click", lambda b: self._on_section_clicked())
        self._populating = True
        try:
            self.sidebar_walker.append(urwid.AttrMap(button, None, focus_map="highlight"))
        finally:
            self._populating = False

    def _append_row(self, update: SectionUpdate) -> None:
        row = Row(update)
        self._rows.append(row)
        widgets = [urwid.Divider(), row.title]
        widgets.extend(self._make_buttons(row, update.items))
        self.body_walker.extend(widgets)

    def _extend_row(self, update: SectionUpdate) -> None:
        row = self._find_row(update)
        if row is None:
            self._append_row(update)
            return

        row.update = update
        if not row.buttons:
            insert_at = self._index_of(row.title) + 1
        else:
            insert_at = self._index_of(row.buttons[-1]) + 1
        for offset, widget in enumerate(self._make_buttons(row, update.items)):
            self.body_walker.insert(insert_at + offset, widget)

    def _make_buttons(self, row: Row, items: List[CatalogItem]) -> list:
        widgets = []
        for item in items:
            button = ItemButton(item, row)
            urwid.connect_signal(
                button, "click", lambda b: self.presenter.on_video_item_clicked(b.item)
            )
            row.buttons.append(button)
            widgets.append(urwid.AttrMap(button, None, focus_map="highlight"))
        return widgets

    def _find_row(self, update: SectionUpdate) -> Optional[Row]:
        group = update.catalog_group
        for row in self._rows:
            previous = row.update.catalog_group
            if previous is not None and group is not None and previous.title == group.title:
                return row
        return None

    def _index_of(self, widget) -> int:
        for pos, candidate in enumerate(self.body_walker):
            if candidate is widget or getattr(candidate, "original_widget", None) is widget:
                return pos
        return len(self.body_walker) - 1

    def _focused_button(self) -> Optional[ItemButton]:
        if not len(self.body_walker):
            return None
        widget = self.body_walker[self.body_walker.focus]
        button = getattr(widget, "original_widget", None)
        return button if isinstance(button, ItemButton) else None

    def _on_section_clicked(self) -> None:
        self.columns.focus_position = 1

    def _on_sidebar_modified(self) -> None:
        if self._populating or not len(self.sidebar_walker):
            return
        widget = self.sidebar_walker[self.sidebar_walker.focus]
        section = widget.original_widget.section
        if section.id == self._focused_section_id:
            return
        self._focused_section_id = section.id
        self.presenter.on_header_focused(section.id)

    def _on_body_modified(self) -> None:
        if self._populating:
            return
        button = self._focused_button()
        if button is None or button is not button.row.buttons[-1]:
            return
        group = button.row.update.catalog_group
        if group is not None and group.has_continuation:
            self.status.set_loading(True)
            self.presenter.on_scroll_end(button.row.update)

    def _close_overlay(self) -> None:
        self.root.original_widget = self._frame
        self.presenter.on_view_resumed()
