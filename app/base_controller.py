# -*- coding: utf-8 -*-
"""Base section controller (no-Qt).

A section controller is created once per section by the ControllerRegistry
and kept for the life of the process. The loader calls:

1) attach(container)  every load, with the canonical container
2) initialize()       on the first successful load
3) refresh()          on later reloads (content was replaced in place)

Data access against the admin API belongs to the controller; the loader only
sequences these calls. Keep this module free of PyQt imports.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

log = logging.getLogger(__name__)

Provider = Callable[[], Awaitable[Any]]


class SectionController:
    """Shared bookkeeping for controllers.

    Parameters
    ----------
    section_id:
        Section this controller serves.
    on_error:
        Optional callable to surface errors to UI. It receives a short title and
        message. Kept generic (no Qt types).
    """

    def __init__(self, section_id: str, *, on_error: Optional[Callable[[str, str], None]] = None) -> None:
        self.section_id = str(section_id)
        self.container: Any = None
        self.initialized = False
        self.refresh_count = 0
        self._on_error = on_error

    def attach(self, container: Any) -> None:
        if container is not self.container and self.container is not None:
            log.debug("Controller %s reattached to a new container", self.section_id)
        self.container = container

    async def initialize(self) -> None:
        await self.load()
        self.initialized = True

    async def refresh(self) -> None:
        await self.load()
        self.refresh_count += 1

    async def load(self) -> None:
        """Fetch whatever the section shows. Default: nothing."""
        return None

    def report_error(self, title: str, message: str) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(title, message)
        except Exception:
            log.debug("on_error callback failed", exc_info=True)


class DashboardController(SectionController):
    """Keeps the latest platform stats for the dashboard section."""

    def __init__(self, section_id: str = "dashboard", *, stats_provider: Optional[Provider] = None, **kwargs) -> None:
        super().__init__(section_id, **kwargs)
        self._stats_provider = stats_provider
        self.stats: Dict[str, Any] = {}

    async def load(self) -> None:
        if self._stats_provider is None:
            return
        data = await self._stats_provider()
        self.stats = dict(data or {})


class ResourceListController(SectionController):
    """Keeps one page of items for a CRUD section (moves, styles, users)."""

    def __init__(self, section_id: str, *, items_provider: Optional[Provider] = None, **kwargs) -> None:
        super().__init__(section_id, **kwargs)
        self._items_provider = items_provider
        self.items: List[Any] = []

    async def load(self) -> None:
        if self._items_provider is None:
            return
        data = await self._items_provider()
        self.items = list(data or [])
