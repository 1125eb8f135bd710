# -*- coding: utf-8 -*-
"""Per-step timings for section loads.

Every load step (fetch, initialize/refresh, activate) runs inside
``span(section_id, step)``. With ``DANCIFY_PERF=1`` each finished step is
written to logger ``dancify.perf`` as::

    PERF section=users step=fetch outcome=ok 132.4ms

Steps that end with an exception are always logged with their outcome
(``error:ContentFetchError``, ``cancelled``), whatever their duration; slow
successful steps only above ``threshold_ms``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

ENABLED = os.environ.get("DANCIFY_PERF", "").strip().lower() in ("1", "true", "yes", "on")

log = logging.getLogger("dancify.perf")


def is_enabled() -> bool:
    return ENABLED


@dataclass
class StepTiming:
    section_id: str
    step: str
    outcome: str = "ok"
    elapsed_ms: float = 0.0


def _outcome(exc: BaseException) -> str:
    if isinstance(exc, asyncio.CancelledError):
        return "cancelled"
    return f"error:{type(exc).__name__}"


@contextmanager
def span(section_id: str, step: str, *, threshold_ms: float = 50.0) -> Iterator[StepTiming]:
    """Time one load step of *section_id*. The block may ``await``."""
    timing = StepTiming(section_id=str(section_id), step=str(step))
    if not ENABLED:
        yield timing
        return
    t0 = time.perf_counter()
    try:
        yield timing
    except BaseException as exc:
        timing.outcome = _outcome(exc)
        raise
    finally:
        timing.elapsed_ms = (time.perf_counter() - t0) * 1000.0
        if timing.outcome != "ok" or timing.elapsed_ms >= float(threshold_ms or 0.0):
            log.info(
                "PERF section=%s step=%s outcome=%s %.1fms",
                timing.section_id, timing.step, timing.outcome, timing.elapsed_ms,
            )
