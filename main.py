#!/usr/bin/env python3
"""
TVBrowse - terminal YouTube browser.

Composition root: builds the services, presenters and the urwid browse view,
pumps the UI dispatcher on the main loop and tears everything down on exit.
"""

import argparse
import logging
from typing import Optional

import urwid

from core.browse_presenter import BrowsePresenter
from core.config import ConfigManager
from core.details import DetailsPresenter
from core.dispatcher import UiDispatcher
from core.logger import setup_logging
from core.models import CatalogType
from core.playback import PlaybackPresenter, VideoPlayer
from core.youtube_service import YouTubeMediaService
from ui.views.browse_view import BrowseView
from config.i18n import init_language

logger = logging.getLogger("TVBrowse")

PALETTE = [
    ("status", "black", "dark cyan"),
    ("title", "yellow,bold", ""),
    ("highlight", "black", "dark cyan"),
    ("normal", "", ""),
    ("error", "light red,bold", ""),
    ("info", "light blue", ""),
    ("error_toast", "white", "dark red"),
]


class TVBrowseApp:
    SPINNER_INTERVAL = 0.1

    def __init__(self, config: ConfigManager, lang: Optional[str] = None):
        self.config = config
        init_language(config.get("ui.language"), override=lang)

        self.dispatcher = UiDispatcher()
        self.media_service = YouTubeMediaService(
            feeds=config.feeds(),
            page_size=config.get("catalog.page_size", 20),
            max_retries=config.get("catalog.max_retries", 3),
        )
        volume = int(config.get("playback.volume", 80))
        self.playback = PlaybackPresenter(
            self.media_service,
            self.dispatcher,
            player_factory=lambda: VideoPlayer(volume=volume),
        )
        self.details = DetailsPresenter()
        self.presenter = BrowsePresenter(
            self.media_service,
            self.dispatcher,
            playback=self.playback,
            details=self.details,
            reload_period=config.reload_period_seconds(),
        )
        self.view = BrowseView(self.presenter)

        self.loop: Optional[urwid.MainLoop] = None
        self._pump_interval = float(config.get("ui.pump_interval", 0.05))
        self._pump_alarm = None
        self._spinner_alarm = None

    # ---------- lifecycle ----------
    def start(self):
        self.presenter.initialize()
        self.presenter.register(self.view)
        self.playback.register(self.view)
        self.details.register(self.view)
        self.presenter.on_init_done()

        self.loop = urwid.MainLoop(
            self.view.root,
            palette=PALETTE,
            unhandled_input=self.unhandled_input,
        )
        self._start_dispatcher_pump()
        self._spinner_alarm = self.loop.set_alarm_in(self.SPINNER_INTERVAL, self._tick_spinner)

        first = self._initial_section_id()
        self.loop.set_alarm_in(0, lambda l, d: self.view.focus_section(first))

        self.config.start_session()
        logger.info("TVBrowse started")

    def run(self):
        self.start()
        try:
            self.loop.run()
        finally:
            self.shutdown()

    def shutdown(self):
        self.config.end_session(last_section_id=self.presenter.current_section_id)
        self.presenter.unregister(self.view)
        self.presenter.shutdown()
        self.playback.shutdown()
        self.details.unregister(self.view)
        self.dispatcher.close()
        if self.loop:
            for alarm in (self._pump_alarm, self._spinner_alarm):
                if alarm:
                    self.loop.remove_alarm(alarm)
        self._pump_alarm = None
        self._spinner_alarm = None
        logger.info("TVBrowse stopped")

    def _initial_section_id(self) -> int:
        if self.config.get("browse.restore_last_section", True):
            last = self.config.get_state("last_section_id")
            if self.presenter.find_section(last) is not None:
                return last
        return CatalogType.HOME

    # ---------- main loop plumbing ----------
    def _start_dispatcher_pump(self):
        """Drain worker results on the main loop (thread-safe)."""
        if self._pump_alarm:
            return
        self._pump_alarm = self.loop.set_alarm_in(
            self._pump_interval, self._process_dispatcher
        )

    def _process_dispatcher(self, loop=None, user_data=None):
        # Clear the handle first to avoid duplicate scheduling if a callback is slow
        self._pump_alarm = None
        try:
            self.dispatcher.drain()
        finally:
            if self.loop and not self.dispatcher.closed:
                self._pump_alarm = self.loop.set_alarm_in(
                    self._pump_interval, self._process_dispatcher
                )

    def _tick_spinner(self, loop=None, user_data=None):
        self.view.status.tick()
        self._spinner_alarm = self.loop.set_alarm_in(self.SPINNER_INTERVAL, self._tick_spinner)

    # ---------- input ----------
    def unhandled_input(self, key):
        if not isinstance(key, str):
            return
        action = self.config.get_action_for_key(key.lower())

        if action == "quit":
            raise urwid.ExitMainLoop()
        if action == "refresh":
            self.presenter.refresh()
        elif action == "details":
            item = self.view.focused_item()
            if item:
                self.presenter.on_video_item_long_clicked(item)
        elif action == "next_section":
            self.view.toggle_pane()
        elif action == "stop_playback":
            self.playback.stop()
            self.presenter.on_view_resumed()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Browse YouTube from the terminal")
    parser.add_argument("--config-dir", default="config", help="Config/state directory")
    parser.add_argument("--log-dir", default="logs", help="Log directory")
    parser.add_argument("--lang", choices=["es", "en"], help="UI language")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_dir, logging.DEBUG if args.debug else logging.INFO)

    config = ConfigManager(args.config_dir)

    try:
        app = TVBrowseApp(config, lang=args.lang)
        app.run()
    except KeyboardInterrupt:
        print("\n👋 Bye!")
    except Exception as e:
        logger.critical("Critical Error: %s", e, exc_info=(type(e), e, e.__traceback__))
        print(f"\n❌ Critical Error: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
