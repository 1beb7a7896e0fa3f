import threading
from typing import Dict, List, Optional

import pytest

from core.browse_presenter import BrowsePresenter
from core.dispatcher import UiDispatcher
from core.media_service import MediaGroupManager, MediaService, SignInManager
from core.models import CatalogGroup, CatalogItem, CatalogType


def make_item(video_id: str) -> CatalogItem:
    return CatalogItem(
        video_id=video_id,
        title=f"Video {video_id}",
        url=f"https://www.youtube.com/watch?v={video_id}",
        author="Channel",
        duration=125,
    )


def make_group(
    title: str,
    ids=("a", "b"),
    *,
    group_type: int = CatalogType.HOME,
    continuation=None,
    items: Optional[list] = None,
) -> CatalogGroup:
    if items is None:
        items = [make_item(i) for i in ids]
    return CatalogGroup(type=group_type, title=title, items=items, continuation=continuation)


class FakeView:
    """Records every view-contract call in order."""

    def __init__(self):
        self.calls: List[tuple] = []

    def show_progress_bar(self, show):
        self.calls.append(("progress", show))

    def clear_header(self, section):
        self.calls.append(("clear", section))

    def update_header(self, update):
        self.calls.append(("update", update))

    def update_header_if_empty(self, data):
        self.calls.append(("if_empty", data))

    def show_details(self, item):
        self.calls.append(("details", item))

    def notify(self, message):
        self.calls.append(("notify", message))

    def named(self, name: str) -> list:
        return [args for call, *args in self.calls if call == name]

    def updates(self) -> list:
        return [args[0] for args in self.named("update")]


class FakeGroupManager(MediaGroupManager):
    """Producers return whatever is configured in ``rows`` / ``grids``.

    A section can be gated on a ``threading.Event`` to keep its fetch in
    flight until the test releases it.
    """

    def __init__(self):
        self.rows: Dict[int, list] = {}
        self.grids: Dict[int, list] = {}
        self.errors: Dict[int, Exception] = {}
        self.gates: Dict[int, threading.Event] = {}
        self.calls: Dict[int, int] = {}
        self.continuations: List[CatalogGroup] = []
        self.continue_gate: Optional[threading.Event] = None
        self.continue_result: Optional[CatalogGroup] = None
        self.continue_error: Optional[Exception] = None

    def _producer(self, section_id, emissions):
        def produce():
            self.calls[section_id] = self.calls.get(section_id, 0) + 1
            gate = self.gates.get(section_id)
            if gate is not None:
                gate.wait(5)
            if section_id in self.errors:
                raise self.errors[section_id]
            for value in emissions.get(section_id, []):
                yield value

        return produce

    def get_home_observe(self):
        return self._producer(CatalogType.HOME, self.rows)

    def get_gaming_observe(self):
        return self._producer(CatalogType.GAMING, self.rows)

    def get_news_observe(self):
        return self._producer(CatalogType.NEWS, self.rows)

    def get_music_observe(self):
        return self._producer(CatalogType.MUSIC, self.rows)

    def get_playlists_observe(self):
        return self._producer(CatalogType.PLAYLISTS, self.rows)

    def get_subscriptions_observe(self):
        return self._producer(CatalogType.SUBSCRIPTIONS, self.grids)

    def get_history_observe(self):
        return self._producer(CatalogType.HISTORY, self.grids)

    def continue_group_observe(self, group):
        def produce():
            self.continuations.append(group)
            if self.continue_gate is not None:
                self.continue_gate.wait(5)
            if self.continue_error is not None:
                raise self.continue_error
            if self.continue_result is not None:
                yield self.continue_result

        return produce


class FakeSignInManager(SignInManager):
    def __init__(self, signed: bool = False):
        self.signed = signed
        self.probes = 0

    def is_signed_observe(self):
        def produce():
            self.probes += 1
            yield self.signed

        return produce


class FakeMediaService(MediaService):
    def __init__(self):
        self.group_manager = FakeGroupManager()
        self.sign_in_manager = FakeSignInManager()
        self.stream_urls: Dict[str, str] = {}

    def get_group_manager(self):
        return self.group_manager

    def get_sign_in_manager(self):
        return self.sign_in_manager

    def get_stream_url(self, item):
        if item.video_id not in self.stream_urls:
            raise RuntimeError(f"no stream for {item.video_id}")
        return self.stream_urls[item.video_id]


def settle(dispatcher: UiDispatcher, *tasks) -> None:
    """Wait for worker threads, then run their deliveries on this thread."""
    for task in tasks:
        if task is not None:
            assert task.join(2.0), f"task {task.name} did not finish"
    dispatcher.drain()


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def dispatcher():
    d = UiDispatcher()
    yield d
    d.close()


@pytest.fixture
def service():
    return FakeMediaService()


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def presenter(service, dispatcher, view, clock):
    p = BrowsePresenter(service, dispatcher, clock=clock)
    p.initialize()
    p.register(view)
    yield p
    for gate in service.group_manager.gates.values():
        gate.set()
    if service.group_manager.continue_gate is not None:
        service.group_manager.continue_gate.set()
    p.shutdown()
