# -*- coding: utf-8 -*-
"""Run an asyncio loop inside the Qt event loop.

A QTimer drains the asyncio loop's ready callbacks on every tick, so
coroutines spawned from Qt slots (sidebar clicks) make progress while
QApplication.exec_() owns the thread. Executor results (HTTP fetches) arrive
through call_soon_threadsafe and are picked up on the next tick.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Optional

from PyQt5.QtCore import QObject, QTimer

from infra.crash_handler import install_loop_exception_handler

log = logging.getLogger(__name__)


class AsyncioPump(QObject):
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, *, interval_ms: int = 10, parent=None):
        super().__init__(parent)
        self.loop = loop or asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)
        install_loop_exception_handler(self.loop)
        self._timer = QTimer(self)
        self._timer.setInterval(int(interval_ms))
        self._timer.timeout.connect(self._tick)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        return self.loop.create_task(coro)

    def _tick(self) -> None:
        if self.loop.is_closed():
            self._timer.stop()
            return
        self.loop.call_soon(self.loop.stop)
        self.loop.run_forever()

    def close(self) -> None:
        self.stop()
        if self.loop.is_closed():
            return
        pending = [t for t in asyncio.all_tasks(self.loop) if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            self.loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
        self.loop.run_until_complete(self.loop.shutdown_default_executor())
        self.loop.close()
