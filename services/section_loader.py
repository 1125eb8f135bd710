# -*- coding: utf-8 -*-
"""SectionLoader

Single entry point for section navigation. Owns every piece of mutable
loader state (per-section status, attempt counters, the gate, the in-flight
map); nothing lives in module globals, so several loaders can coexist.

request_section(section_id):
- unknown id            -> UnknownSectionError, nothing touched
- same id in flight     -> await the running pipeline (single-flight);
                           from inside that pipeline -> ConcurrencyRejected
- gate held by other id -> ConcurrencyRejected (no attempt consumed)
- terminal failure      -> SectionFailedError until reset()
- loaded, not stale     -> fast path: no fetch, re-run activation
- otherwise             -> materialize -> controller -> activate

The gate and the in-flight map are set in the same synchronous step that
creates the pipeline task, before the first await.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional

from app.config import MAX_LOAD_ATTEMPTS
from app.events import (
    EventBus,
    SectionActivated,
    SectionLoaded,
    SectionLoadFailed,
    SectionLoadStarted,
    SectionRejected,
)
from core.errors import (
    ConcurrencyRejected,
    LoaderDisposedError,
    RetryableSectionError,
    SectionFailedError,
    UnknownSectionError,
)
from core.sections import LoadState, SectionDescriptor, SectionStatus
from infra.perf import span as perf_span
from services.activation_switch import ActivationSwitch
from services.content_materializer import ContentMaterializer
from services.content_source import ContentSource
from services.controller_registry import ControllerFactory, ControllerRegistry
from services.view_tree import NavIndicator, ViewTree

log = logging.getLogger(__name__)


@dataclass
class _Bookkeeping:
    state: LoadState = LoadState.NOT_LOADED
    attempts: int = 0
    stale: bool = False
    last_error: Optional[BaseException] = None

    def snapshot(self) -> SectionStatus:
        return SectionStatus(
            state=self.state,
            attempts=self.attempts,
            stale=self.stale,
            last_error=self.last_error,
        )


class SectionLoader:
    def __init__(
        self,
        *,
        sections: Iterable[SectionDescriptor],
        view_tree: ViewTree,
        content_source: ContentSource,
        controller_factories: Optional[Mapping[str, Optional[ControllerFactory]]] = None,
        nav_indicator: Optional[NavIndicator] = None,
        max_attempts: int = MAX_LOAD_ATTEMPTS,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._descriptors: Dict[str, SectionDescriptor] = {}
        for desc in sections:
            if desc.id in self._descriptors:
                raise ValueError(f"Duplicate section id: {desc.id!r}")
            self._descriptors[desc.id] = desc
        if int(max_attempts) < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = int(max_attempts)

        self.materializer = ContentMaterializer(view_tree=view_tree, content_source=content_source)
        self.registry = ControllerRegistry(controller_factories or {})
        self.switch = ActivationSwitch(view_tree=view_tree, nav_indicator=nav_indicator)
        self._event_bus = event_bus

        self._status: Dict[str, _Bookkeeping] = {sid: _Bookkeeping() for sid in self._descriptors}
        self._inflight: Dict[str, asyncio.Future] = {}
        self._gate: Optional[str] = None
        self._disposed = False

    # ---------------- queries ----------------
    @property
    def active_section(self) -> Optional[str]:
        return self.switch.active_section

    @property
    def busy_with(self) -> Optional[str]:
        """Section currently holding the gate (None when idle)."""
        return self._gate

    @property
    def disposed(self) -> bool:
        return self._disposed

    def descriptor(self, section_id: str) -> SectionDescriptor:
        desc = self._descriptors.get(section_id)
        if desc is None:
            raise UnknownSectionError(section_id)
        return desc

    def section_ids(self) -> list[str]:
        return list(self._descriptors)

    def state(self, section_id: str) -> SectionStatus:
        self.descriptor(section_id)
        return self._status[section_id].snapshot()

    def snapshot(self) -> Dict[str, SectionStatus]:
        return {sid: book.snapshot() for sid, book in self._status.items()}

    # ---------------- public API ----------------
    async def request_section(self, section_id: str) -> None:
        """Load (if needed) and show *section_id*."""
        if self._disposed:
            raise LoaderDisposedError(section_id)
        descriptor = self.descriptor(section_id)
        book = self._status[section_id]

        inflight = self._inflight.get(section_id)
        if inflight is not None and inflight is asyncio.current_task():
            # Awaiting our own pipeline from inside it would never finish.
            log.warning("Rejected re-entrant request for %s from its own load", section_id)
            self._emit(SectionRejected(section_id, busy_with=self._gate))
            raise ConcurrencyRejected(section_id, self._gate)
        if inflight is not None:
            log.debug("Joining in-flight load of section %s", section_id)
            await asyncio.shield(inflight)
            return

        if self._gate is not None:
            log.info("Rejected request for %s: %s is loading", section_id, self._gate)
            self._emit(SectionRejected(section_id, busy_with=self._gate))
            raise ConcurrencyRejected(section_id, self._gate)

        if book.state is LoadState.FAILED:
            raise SectionFailedError(section_id, book.attempts, book.last_error)

        if book.state is LoadState.LOADED and not book.stale:
            if self.materializer.canonical(section_id) is not None:
                self._activate(section_id, fast_path=True)
                return
            log.warning("Container for loaded section %s disappeared; reloading", section_id)
            book.stale = True

        reason = "reload" if book.stale else "request"
        book.state = LoadState.LOADING
        self._gate = section_id
        task = asyncio.ensure_future(self._run_pipeline(descriptor, book))
        self._inflight[section_id] = task
        task.add_done_callback(_retrieve_exception)
        self._emit(SectionLoadStarted(section_id, reason=reason))
        await asyncio.shield(task)

    def invalidate(self, section_id: str) -> bool:
        """Mark a loaded section stale: the next request re-fetches it."""
        self.descriptor(section_id)
        book = self._status[section_id]
        if book.state is not LoadState.LOADED:
            return False
        book.stale = True
        return True

    def invalidate_all(self) -> None:
        for sid in self._descriptors:
            self.invalidate(sid)

    def reset(self, section_id: str) -> bool:
        """Clear failure bookkeeping so a terminally failed section can load again."""
        self.descriptor(section_id)
        book = self._status[section_id]
        if book.state is LoadState.LOADING:
            return False
        if book.state is LoadState.FAILED:
            book.state = LoadState.NOT_LOADED
        book.attempts = 0
        book.last_error = None
        return True

    def dispose(self) -> None:
        """Refuse further requests and cancel whatever is still loading."""
        self._disposed = True
        for task in list(self._inflight.values()):
            task.cancel()

    # ---------------- internals ----------------
    async def _run_pipeline(self, descriptor: SectionDescriptor, book: _Bookkeeping) -> None:
        sid = descriptor.id
        try:
            container = await self.materializer.ensure_content(descriptor)
            controller = self.registry.ensure_controller(sid)
            phase = await self.registry.initialize_or_refresh(sid, controller, container)
            self._activate(sid)
        except RetryableSectionError as exc:
            book.attempts += 1
            book.last_error = exc
            if book.attempts >= self.max_attempts:
                book.state = LoadState.FAILED
                log.error("Section %s failed permanently after %d attempts: %s", sid, book.attempts, exc)
                self._emit(SectionLoadFailed(sid, error=exc, attempts=book.attempts, terminal=True))
                raise SectionFailedError(sid, book.attempts, exc) from exc
            book.state = LoadState.NOT_LOADED
            log.warning("Section %s load failed (attempt %d/%d): %s", sid, book.attempts, self.max_attempts, exc)
            self._emit(SectionLoadFailed(sid, error=exc, attempts=book.attempts, terminal=False))
            raise
        except BaseException:
            # Programmer errors and cancellation are not counted as attempts.
            book.state = LoadState.NOT_LOADED
            raise
        else:
            book.state = LoadState.LOADED
            book.stale = False
            book.attempts = 0
            book.last_error = None
            log.info("Section %s loaded (%s)", sid, phase or "no controller")
            self._emit(SectionLoaded(sid, phase=phase))
        finally:
            self._gate = None
            self._inflight.pop(sid, None)

    def _activate(self, section_id: str, *, fast_path: bool = False) -> None:
        previous = self.switch.active_section
        with perf_span(section_id, "activate", threshold_ms=20.0):
            self.switch.activate(section_id)
        self._emit(SectionActivated(section_id, previous=previous, fast_path=fast_path))

    def _emit(self, event: Any) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(event)


def _retrieve_exception(task: asyncio.Future) -> None:
    # The outcome is already recorded in the bookkeeping; this only keeps
    # asyncio from warning when every awaiting caller went away.
    if not task.cancelled():
        task.exception()
