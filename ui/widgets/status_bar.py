"""
StatusBar Widget

Two-line status bar: info/notifications with a loading spinner (top) and
browse shortcuts (bottom).
"""

import time

import urwid

from config.i18n import t

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
NOTIFY_SECONDS = 5.0


class StatusBar(urwid.WidgetWrap):
    """Two-line status bar: Info + loading indicator (Top) + Shortcuts (Bot)."""

    def __init__(self, context_text="", clock=time.time):
        self.top_line = urwid.Text(context_text, align="center")
        self.bot_line = urwid.Text(t("browse.footer"), align="center")

        # Keep references to AttrWraps to change styles dynamically
        self.top_attr = urwid.AttrMap(self.top_line, "status")
        self.bot_attr = urwid.AttrMap(self.bot_line, "status")

        self._default_info = context_text
        self._notice = None
        self._notice_until = 0.0
        self._clock = clock
        self._loading = False
        self._spinner_frame = 0

        self.pile = urwid.Pile([self.top_attr, self.bot_attr])
        super().__init__(self.pile)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def notice(self):
        return self._notice

    def notify(self, text, style="status", duration=NOTIFY_SECONDS):
        """Show a transient notification (Top Line) for ``duration`` seconds."""
        self._notice = text
        self._notice_until = self._clock() + duration
        self.top_attr.set_attr_map({None: style})
        self._render_top()

    def clear_notify(self):
        """Restore default info to Top Line."""
        self._notice = None
        self.top_attr.set_attr_map({None: "status"})
        self._render_top()

    def set_loading(self, loading: bool):
        self._loading = loading
        self._spinner_frame = 0
        self._render_top()

    def tick(self):
        """Expire notifications and advance the spinner (driven by an alarm)."""
        if self._notice is not None and self._clock() >= self._notice_until:
            self.clear_notify()
        if not self._loading:
            return
        self._spinner_frame = (self._spinner_frame + 1) % len(SPINNER_FRAMES)
        self._render_top()

    def _render_top(self):
        text = self._notice if self._notice is not None else self._default_info
        if self._loading:
            text = f"{SPINNER_FRAMES[self._spinner_frame]} {t('status.loading')}  {text}"
        self.top_line.set_text(text)
