from conftest import make_group

from config import i18n
from core import presentation
from core.models import CatalogType, Section, SectionKind

HISTORY = Section(CatalogType.HISTORY, "History", SectionKind.GRID, auth_only=True)


def test_from_group_projects_items_and_keeps_group():
    group = make_group("Recent", ("a", "b"), continuation={"offset": 2})

    update = presentation.from_group(group, HISTORY)

    assert update.section is HISTORY
    assert update.title == "Recent"
    assert [i.video_id for i in update.items] == ["a", "b"]
    assert update.catalog_group is group
    assert not update.continuation
    assert not update.is_placeholder


def test_from_group_copies_item_list():
    group = make_group("Recent", ("a",))

    update = presentation.from_group(group, HISTORY, continuation=True)
    group.items.append(make_group("x", ("z",)).items[0])

    assert len(update.items) == 1
    assert update.continuation


def test_from_section_is_an_empty_placeholder():
    update = presentation.from_section(HISTORY)

    assert update.is_placeholder
    assert update.title == "History"
    assert update.items == []


def test_sign_in_data_names_the_section(monkeypatch):
    monkeypatch.setattr(i18n, "LANG", "en")

    data = presentation.sign_in_data(HISTORY)

    assert data.section is HISTORY
    assert "History" in data.message
    assert data.title
    assert data.hint
