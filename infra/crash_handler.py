# -*- coding: utf-8 -*-
"""Global crash/exception handlers.

Covers three places an exception can escape without anyone awaiting it:
- sys.excepthook (Qt slots, main thread)
- threading.excepthook (executor threads used by HTTP fetches)
- the asyncio loop exception handler (fire-and-forget navigation tasks)

This module is safe to import before QApplication is created.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from types import TracebackType
from typing import Any, Dict, Optional, Type

log = logging.getLogger(__name__)

_handling_exception = False


def _log_exception(exc_type: Type[BaseException], exc: BaseException, tb: Optional[TracebackType]) -> None:
    global _handling_exception
    if _handling_exception:
        sys.__stderr__.write("Unhandled exception (suppressed)\n")
        return

    _handling_exception = True
    try:
        log.critical("Unhandled exception", exc_info=(exc_type, exc, tb))
    finally:
        _handling_exception = False


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    exc = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if exc is not None:
        log.error("%s", message, exc_info=(type(exc), exc, exc.__traceback__))
    else:
        log.error("%s", message)


def install_global_exception_handlers() -> None:
    """Install sys/thread exception hooks to ensure crashes are logged."""
    logging.raiseExceptions = False
    sys.excepthook = _log_exception  # type: ignore[assignment]

    def _thread_hook(args):  # pragma: no cover
        _log_exception(args.exc_type, args.exc_value, args.exc_traceback)

    threading.excepthook = _thread_hook  # type: ignore[assignment]


def install_loop_exception_handler(loop: asyncio.AbstractEventLoop) -> None:
    loop.set_exception_handler(_loop_exception_handler)
