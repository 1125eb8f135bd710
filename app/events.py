# -*- coding: utf-8 -*-
"""Simple event bus for section lifecycle notifications (no UI dependency)."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Type


@dataclass(frozen=True)
class SectionLoadStarted:
    section: str
    reason: str = "request"
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class SectionLoaded:
    section: str
    phase: str = ""
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class SectionActivated:
    section: str
    previous: Optional[str] = None
    fast_path: bool = False
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class SectionLoadFailed:
    section: str
    error: Optional[BaseException] = None
    attempts: int = 0
    terminal: bool = False
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class SectionRejected:
    section: str
    busy_with: str = ""
    timestamp: float = field(default_factory=time.time)


class EventBus:
    """Minimal in-process event bus (best-effort)."""

    def __init__(self) -> None:
        self._subs: Dict[Type[Any], List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[Any], callback: Callable[[Any], None]) -> None:
        self._subs.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: Type[Any], callback: Callable[[Any], None]) -> None:
        subs = self._subs.get(event_type) or []
        if callback in subs:
            subs.remove(callback)

    def emit(self, event: Any) -> None:
        for cb in list(self._subs.get(type(event), []) or []):
            try:
                cb(event)
            except Exception:
                # Best-effort: a broken listener must not break a section load
                logging.getLogger(__name__).debug("Event handler failed.", exc_info=True)
