"""
Presentation Adapter

Pure translations from catalog data to what the browse view displays.
"""

from core.models import CatalogGroup, Section, SectionUpdate, SignInData
from config.i18n import t


def from_group(
    group: CatalogGroup, section: Section, continuation: bool = False
) -> SectionUpdate:
    """Project a catalog group onto a section."""
    return SectionUpdate(
        section=section,
        title=group.title,
        items=list(group.items or []),
        catalog_group=group,
        continuation=continuation,
    )


def from_section(section: Section) -> SectionUpdate:
    """Empty update announcing a section (sidebar entry) before any data."""
    return SectionUpdate(section=section, title=section.title)


def sign_in_data(section: Section) -> SignInData:
    return SignInData(
        section=section,
        title=t("signin.title"),
        message=t("signin.message", section=section.title),
        hint=t("signin.hint"),
    )
