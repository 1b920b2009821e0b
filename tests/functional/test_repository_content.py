"""Functional tests for the content repository (SQLite in-memory)."""

from __future__ import annotations

import pytest

from content_binder.errors import ContentParentNotFound, ContentRouteConflict
from content_binder.logic.repository_content import (
    create_content,
    get_content_by_id,
    get_content_by_route,
    list_children,
    normalize_route,
    slugify,
)


@pytest.mark.parametrize(
    "path, expected",
    [
        ("", "/"),
        ("/", "/"),
        ("About", "/about/"),
        ("/News//Latest/", "/news/latest/"),
        (None, "/"),
    ],
)
def test_normalize_route(path, expected) -> None:
    assert normalize_route(path) == expected


def test_slugify() -> None:
    assert slugify("About Us!") == "about-us"
    assert slugify("***") == "item"


def test_create_and_fetch_by_route(engine) -> None:
    home = create_content(engine, "Home", "homePage", properties={"title": "Welcome"})
    about = create_content(engine, "About Us", "textPage", parent_route="/home/")

    assert home.route == "/home/"
    assert home.level == 1
    assert about.route == "/home/about-us/"
    assert about.parent_id == home.id
    assert about.level == 2

    fetched = get_content_by_route(engine, "Home/About-Us")
    assert fetched is not None
    assert fetched.id == about.id
    assert get_content_by_route(engine, "/home/").value("title") == "Welcome"
    assert get_content_by_id(engine, home.id).name == "Home"


def test_empty_route_addresses_first_root(engine) -> None:
    create_content(engine, "Second", "homePage", sort_order=2)
    first = create_content(engine, "First", "homePage", sort_order=1)
    assert get_content_by_route(engine, "/").id == first.id


def test_missing_content_returns_none(engine) -> None:
    assert get_content_by_route(engine, "/") is None
    assert get_content_by_route(engine, "/nowhere/") is None
    assert get_content_by_id(engine, 999) is None


def test_route_conflict(engine) -> None:
    create_content(engine, "News", "listPage")
    with pytest.raises(ContentRouteConflict) as excinfo:
        create_content(engine, "Other", "listPage", url_segment="news")
    assert excinfo.value.route == "/news/"


def test_parent_must_exist(engine) -> None:
    with pytest.raises(ContentParentNotFound):
        create_content(engine, "Orphan", "textPage", parent_route="/missing/")


def test_children_are_ordered(engine) -> None:
    news = create_content(engine, "News", "listPage")
    create_content(engine, "B", "article", parent_route="/news/", sort_order=2)
    create_content(engine, "A", "article", parent_route="/news/", sort_order=1)
    assert [c.name for c in list_children(engine, news.id)] == ["A", "B"]
    assert [c.name for c in list_children(engine, None)] == ["News"]
