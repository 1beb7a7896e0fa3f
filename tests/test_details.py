from conftest import FakeView, make_item

from core.details import DetailsPresenter


def test_details_presenter_shows_item():
    details = DetailsPresenter()
    view = FakeView()
    item = make_item("a")

    details.open_video(item)
    assert view.calls == []

    details.register(view)
    details.open_video(item)
    assert view.named("details") == [[item]]

    details.unregister(view)
    details.open_video(item)
    assert len(view.calls) == 1
