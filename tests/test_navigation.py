# -*- coding: utf-8 -*-
from __future__ import annotations

import asyncio

import pytest

from core.errors import ConcurrencyRejected, ContentFetchError, UnknownSectionError
from core.sections import SectionDescriptor
from services.content_source import FetchResult
from services.navigation import SectionNavigator
from services.section_loader import SectionLoader
from services.view_tree import MemoryViewTree


SECTIONS = [
    SectionDescriptor(id="dashboard", content_locator="d.html", title="Dashboard", description="Overview and analytics"),
    SectionDescriptor(id="users", content_locator="u.html", title="User Management", description="User profiles"),
    SectionDescriptor(id="move-management", content_locator="m.html", title="Move Management", description="Create and manage dance moves"),
]


class _DummySource:
    def __init__(self, failing=()):
        self.failing = set(failing)

    async def fetch(self, locator: str) -> FetchResult:
        await asyncio.sleep(0)
        return FetchResult(500 if locator in self.failing else 200, locator)


def _navigator(failing=(), errors=None):
    loader = SectionLoader(sections=SECTIONS, view_tree=MemoryViewTree(), content_source=_DummySource(failing))
    on_error = (lambda title, msg: errors.append((title, msg))) if errors is not None else None
    return SectionNavigator(loader, on_error=on_error)


def test_navigate_returns_true_and_activates():
    nav = _navigator()
    assert asyncio.run(nav.navigate("users")) is True
    assert nav.loader.active_section == "users"
    assert nav.last_error is None


def test_navigate_failure_returns_false_and_reports():
    errors = []
    nav = _navigator(failing={"u.html"}, errors=errors)

    assert asyncio.run(nav.navigate("users")) is False

    assert isinstance(nav.last_error, ContentFetchError)
    assert errors and errors[0][0] == "Failed to load User Management"


def test_navigate_busy_returns_false_without_dialog():
    errors = []
    nav = _navigator(errors=errors)

    async def run():
        return await asyncio.gather(nav.navigate("dashboard"), nav.navigate("users"))

    assert asyncio.run(run()) == [True, False]
    assert errors == []
    assert nav.loader.active_section == "dashboard"


def test_navigate_unknown_section_raises():
    nav = _navigator()
    with pytest.raises(UnknownSectionError):
        asyncio.run(nav.navigate("settings"))


def test_next_and_previous_wrap_around():
    nav = _navigator()

    async def run():
        visited = []
        await nav.navigate_next()
        visited.append(nav.loader.active_section)
        await nav.navigate_next()
        visited.append(nav.loader.active_section)
        await nav.navigate_next()
        visited.append(nav.loader.active_section)
        await nav.navigate_next()
        visited.append(nav.loader.active_section)
        await nav.navigate_previous()
        visited.append(nav.loader.active_section)
        return visited

    assert asyncio.run(run()) == ["dashboard", "users", "move-management", "dashboard", "move-management"]


def test_previous_from_nothing_goes_to_last():
    nav = _navigator()
    asyncio.run(nav.navigate_previous())
    assert nav.loader.active_section == "move-management"


def test_navigate_by_index_bounds():
    nav = _navigator()
    assert asyncio.run(nav.navigate_by_index(1)) is True
    assert nav.loader.active_section == "users"
    assert asyncio.run(nav.navigate_by_index(7)) is False
    assert asyncio.run(nav.navigate_by_index(-1)) is False


def test_search_matches_title_description_and_id():
    nav = _navigator()
    assert [d.id for d in nav.search("dance")] == ["move-management"]
    assert [d.id for d in nav.search("USER")] == ["users"]
    assert [d.id for d in nav.search("dash")] == ["dashboard"]
    assert len(nav.search("")) == 3


def test_stats_reflect_loader_state():
    nav = _navigator(failing={"m.html"})

    async def run():
        await nav.navigate("dashboard")
        for _ in range(3):
            await nav.navigate("move-management")

    asyncio.run(run())
    stats = nav.stats()

    assert stats["active_section"] == "dashboard"
    assert stats["busy_with"] is None
    assert stats["total_sections"] == 3
    assert stats["loaded"] == ["dashboard"]
    assert stats["failed"] == ["move-management"]


def test_rejection_error_is_kept():
    nav = _navigator()

    async def run():
        await asyncio.gather(nav.navigate("users"), nav.navigate("dashboard"))

    asyncio.run(run())
    assert isinstance(nav.last_error, ConcurrencyRejected)


def test_back_history_is_most_recent_first_without_duplicates():
    nav = _navigator()

    async def run():
        for sid in ("dashboard", "users", "move-management", "users"):
            assert await nav.navigate(sid)

    asyncio.run(run())

    assert nav.history() == ["move-management", "users", "dashboard"]
    assert nav.stats()["history_length"] == 3


def test_navigate_back_returns_to_previous_section():
    nav = _navigator()

    async def run():
        await nav.navigate("dashboard")
        await nav.navigate("users")
        first = await nav.navigate_back()
        active_after_first = nav.loader.active_section
        second = await nav.navigate_back()
        return first, active_after_first, second

    first, active_after_first, second = asyncio.run(run())

    assert first is True
    assert active_after_first == "dashboard"
    # Going back does not record the section it left.
    assert second is False
    assert nav.history() == []


def test_navigate_back_keeps_entry_when_target_fails():
    nav = _navigator()

    async def run():
        await nav.navigate("users")
        await nav.navigate("dashboard")
        nav.loader.invalidate("users")
        nav.loader.materializer.content_source.failing.add("u.html")
        return await nav.navigate_back()

    assert asyncio.run(run()) is False
    assert nav.history() == ["users"]
    assert nav.loader.active_section == "dashboard"


def test_history_is_bounded():
    sections = [SectionDescriptor(id=f"s{i}", content_locator=f"{i}.html", title=f"S{i}") for i in range(6)]
    loader = SectionLoader(sections=sections, view_tree=MemoryViewTree(), content_source=_DummySource())
    nav = SectionNavigator(loader, max_history=3)

    async def run():
        for d in sections:
            await nav.navigate(d.id)

    asyncio.run(run())

    assert nav.history() == ["s4", "s3", "s2"]
