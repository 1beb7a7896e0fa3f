from core.models import CatalogItem


class DetailsPresenter:
    """Shows an item's details in the browse view."""

    def __init__(self):
        self._view = None

    def register(self, view) -> None:
        self._view = view

    def unregister(self, view) -> None:
        if self._view is view:
            self._view = None

    def open_video(self, item: CatalogItem) -> None:
        if self._view is None:
            return
        self._view.show_details(item)
