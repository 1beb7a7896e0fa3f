from conftest import FakeClock

from ui.widgets.status_bar import NOTIFY_SECONDS, StatusBar


def test_notification_survives_loading_changes():
    bar = StatusBar("Ready", clock=FakeClock())

    bar.notify("Playing: song")
    bar.set_loading(True)
    assert "Playing: song" in bar.top_line.text

    bar.set_loading(False)
    assert bar.top_line.text == "Playing: song"


def test_notification_expires_on_tick():
    clock = FakeClock()
    bar = StatusBar("Ready", clock=clock)
    bar.notify("Stream failed", style="error_toast")

    clock.now += NOTIFY_SECONDS - 1
    bar.tick()
    assert bar.notice == "Stream failed"

    clock.now += 2
    bar.tick()
    assert bar.notice is None
    assert bar.top_line.text == "Ready"
    assert bar.top_attr.attr_map == {None: "status"}


def test_spinner_only_advances_while_loading():
    bar = StatusBar("Ready", clock=FakeClock())

    bar.tick()
    assert bar.top_line.text == "Ready"

    bar.set_loading(True)
    first = bar.top_line.text
    bar.tick()
    assert bar.top_line.text != first
    assert bar.top_line.text.endswith("Ready")
