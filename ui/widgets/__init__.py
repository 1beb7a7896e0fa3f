"""UI Widgets Package

Reusable UI components for the browse screen.
"""

from ui.widgets.status_bar import StatusBar

__all__ = ["StatusBar"]
