"""
Dialogs Package

UI dialog components for TVBrowse.
"""

from ui.dialogs.details_dialog import DetailsDialog

__all__ = ["DetailsDialog"]
