# -*- coding: utf-8 -*-
"""SectionNavigator

User-facing navigation on top of SectionLoader. Sidebar clicks, keyboard
shortcuts and the startup default all go through navigate(), which turns the
expected load outcomes (busy, fetch/controller failure, terminal failure)
into a False return plus ``last_error``. Unknown ids still raise.

Successful navigation records the section that was left in a short
most-recent-first history; navigate_back() walks it.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional

from core.errors import ConcurrencyRejected, RetryableSectionError, SectionFailedError, SectionLoaderError
from core.sections import LoadState, SectionDescriptor
from services.section_loader import SectionLoader

log = logging.getLogger(__name__)

MAX_HISTORY = 10


class SectionNavigator:
    def __init__(
        self,
        loader: SectionLoader,
        *,
        on_error: Optional[Callable[[str, str], None]] = None,
        max_history: int = MAX_HISTORY,
    ) -> None:
        self.loader = loader
        self._on_error = on_error
        self.last_error: Optional[SectionLoaderError] = None
        # Most recent first; a section appears at most once.
        self._history: Deque[str] = deque(maxlen=max(1, int(max_history)))

    @property
    def order(self) -> List[str]:
        return self.loader.section_ids()

    # ---------------- navigation ----------------
    async def navigate(self, section_id: str, *, record: bool = True) -> bool:
        self.last_error = None
        previous = self.loader.active_section
        try:
            await self.loader.request_section(section_id)
        except ConcurrencyRejected as exc:
            self.last_error = exc
            log.info("Navigation to %s ignored: %s", section_id, exc)
            return False
        except (RetryableSectionError, SectionFailedError) as exc:
            self.last_error = exc
            log.warning("Navigation to %s failed: %s", section_id, exc)
            self._report(section_id, exc)
            return False
        if record and previous is not None and previous != section_id:
            self._remember(previous)
        return True

    async def navigate_back(self) -> bool:
        """Return to the most recently left section. False when history is empty."""
        if not self._history:
            return False
        target = self._history.popleft()
        ok = await self.navigate(target, record=False)
        if not ok:
            self._remember(target)
        return ok

    def history(self) -> List[str]:
        return list(self._history)

    def _remember(self, section_id: str) -> None:
        if section_id in self._history:
            self._history.remove(section_id)
        self._history.appendleft(section_id)

    async def navigate_by_index(self, index: int) -> bool:
        order = self.order
        if not 0 <= int(index) < len(order):
            return False
        return await self.navigate(order[int(index)])

    async def navigate_next(self) -> bool:
        return await self.navigate(self._neighbour(+1))

    async def navigate_previous(self) -> bool:
        return await self.navigate(self._neighbour(-1))

    def _neighbour(self, step: int) -> str:
        order = self.order
        current = self.loader.active_section
        if current not in order:
            return order[0] if step > 0 else order[-1]
        return order[(order.index(current) + step) % len(order)]

    # ---------------- queries ----------------
    def search(self, query: str) -> List[SectionDescriptor]:
        q = str(query or "").strip().lower()
        descs = [self.loader.descriptor(sid) for sid in self.order]
        if not q:
            return descs
        return [
            d for d in descs
            if q in d.id.lower() or q in d.title.lower() or q in d.description.lower()
        ]

    def stats(self) -> Dict[str, Any]:
        snap = self.loader.snapshot()
        return {
            "active_section": self.loader.active_section,
            "busy_with": self.loader.busy_with,
            "total_sections": len(snap),
            "history_length": len(self._history),
            "loaded": sorted(sid for sid, st in snap.items() if st.state is LoadState.LOADED),
            "failed": sorted(sid for sid, st in snap.items() if st.state is LoadState.FAILED),
        }

    def _report(self, section_id: str, exc: SectionLoaderError) -> None:
        if self._on_error is None:
            return
        title = self.loader.descriptor(section_id).title
        try:
            self._on_error(f"Failed to load {title}", str(exc))
        except Exception:
            log.debug("on_error callback failed", exc_info=True)
