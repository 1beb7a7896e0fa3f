"""
DetailsDialog Widget

Modal with an item's metadata and ESC/Q close support.
"""

import urwid

from core.models import CatalogItem
from config.i18n import t


class DetailsDialog(urwid.WidgetWrap):
    """Item details modal with ESC/Q close support."""

    def __init__(self, item: CatalogItem, on_close=None):
        self._on_close = on_close
        header = urwid.Text(("title", f" {t('details.title')} "), align="center")

        rows = [
            urwid.Text(("title", item.title)),
            urwid.Divider("─"),
            urwid.Text(f"{t('details.author')}: {item.author or '-'}"),
            urwid.Text(f"{t('details.duration')}: {item.duration_label}"),
        ]
        if item.view_count is not None:
            rows.append(urwid.Text(f"{t('details.views')}: {item.view_count:,}"))
        rows.append(urwid.Text(f"{t('details.url')}: {item.url}"))
        rows.append(urwid.Divider())
        rows.append(urwid.Text(("info", t("details.close_hint")), align="center"))

        body = urwid.ListBox(urwid.SimpleFocusListWalker(rows))
        frame = urwid.Frame(body=body, header=header)
        super().__init__(urwid.LineBox(frame))

    def keypress(self, size, key):
        if key in ("esc", "q", "Q"):
            if self._on_close:
                self._on_close()
            return None
        return super().keypress(size, key)
