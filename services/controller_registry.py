# -*- coding: utf-8 -*-
"""ControllerRegistry

One controller per section id, created lazily from the catalog factory and
kept for the lifetime of the process. Controllers are never torn down between
activations; revisits reattach and refresh them.

Controller contract (duck-typed, see app/base_controller.py):
- initialize()          required, may be a coroutine
- refresh()             optional, may be a coroutine
- attach(container)     optional, receives the canonical container
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Set

from core.errors import ControllerInitError
from infra.perf import span as perf_span

log = logging.getLogger(__name__)

ControllerFactory = Callable[[], Any]


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class ControllerRegistry:
    def __init__(self, factories: Mapping[str, Optional[ControllerFactory]]) -> None:
        self._factories: Dict[str, Optional[ControllerFactory]] = dict(factories)
        self._instances: Dict[str, Any] = {}
        self._initialized: Set[str] = set()

    # ---------------- queries ----------------
    def get(self, section_id: str) -> Optional[Any]:
        return self._instances.get(section_id)

    def is_initialized(self, section_id: str) -> bool:
        return section_id in self._initialized

    # ---------------- lifecycle ----------------
    def ensure_controller(self, section_id: str) -> Optional[Any]:
        """Return the cached controller, creating it on first use.

        Sections without a factory have no controller (returns None).
        """
        if section_id in self._instances:
            return self._instances[section_id]
        factory = self._factories.get(section_id)
        if factory is None:
            return None
        try:
            controller = factory()
        except Exception as exc:
            raise ControllerInitError(section_id, exc, phase="create") from exc
        self._instances[section_id] = controller
        log.debug("Created controller %s for section %s", type(controller).__name__, section_id)
        return controller

    async def initialize_or_refresh(self, section_id: str, controller: Any, container: Any = None) -> str:
        """Run initialize() the first time, refresh() (or initialize()) after.

        Returns the phase that ran: "initialize" or "refresh".
        """
        if controller is None:
            return ""
        attach = getattr(controller, "attach", None)
        if container is not None and callable(attach):
            attach(container)

        first = section_id not in self._initialized
        refresh = getattr(controller, "refresh", None)
        if first or not callable(refresh):
            phase, fn = "initialize", getattr(controller, "initialize")
        else:
            phase, fn = "refresh", refresh

        try:
            with perf_span(section_id, phase, threshold_ms=50.0):
                await _maybe_await(fn())
        except Exception as exc:
            raise ControllerInitError(section_id, exc, phase=phase) from exc

        self._initialized.add(section_id)
        return phase
