# -*- coding: utf-8 -*-
"""Main window: sidebar + content host wired to the section loader.

All navigation (sidebar clicks, shortcuts, menu actions, startup default)
goes through SectionNavigator.navigate(), spawned on the asyncio loop that
AsyncioPump drives from the Qt event loop.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import QAction, QHBoxLayout, QMainWindow, QShortcut, QWidget

from app.bootstrap import build_section_loader
from app.events import EventBus, SectionActivated, SectionLoadFailed, SectionLoadStarted, SectionRejected
from app.section_catalog import SECTION_CATALOG
from core.errors import SectionFailedError
from core.sections import LoadState
from infra.settings import update_setting
from services.navigation import SectionNavigator
from ui.async_bridge import AsyncioPump
from ui.common import dialogs
from ui.qt_view_tree import QtViewTree
from ui.widgets.sidebar import Sidebar

log = logging.getLogger(__name__)

APP_TITLE = "Dancify Admin"


class MainWindow(QMainWindow):
    def __init__(self, settings: Dict[str, Any], *, pump: Optional[AsyncioPump] = None, providers=None):
        super().__init__()
        self.settings = dict(settings)
        self.pump = pump or AsyncioPump(parent=self)
        self.event_bus = EventBus()

        self.sidebar = Sidebar(SECTION_CATALOG)
        self.sidebar.set_collapsed(bool(self.settings.get("sidebar_collapsed", False)))
        self.view_tree = QtViewTree()

        self.loader = build_section_loader(
            view_tree=self.view_tree,
            settings=self.settings,
            nav_indicator=self.sidebar,
            event_bus=self.event_bus,
            providers=providers,
            on_error=self._show_error,
        )
        self.navigator = SectionNavigator(self.loader, on_error=self._show_navigation_error)

        central = QWidget(self)
        lay = QHBoxLayout(central)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(0)
        lay.addWidget(self.sidebar)
        lay.addWidget(self.view_tree.host, 1)
        self.setCentralWidget(central)
        self.setWindowTitle(APP_TITLE)
        self.resize(1200, 800)

        self.sidebar.navigate_requested.connect(self.open_section)
        self.event_bus.subscribe(SectionLoadStarted, self._on_load_started)
        self.event_bus.subscribe(SectionActivated, self._on_activated)
        self.event_bus.subscribe(SectionLoadFailed, self._on_load_failed)
        self.event_bus.subscribe(SectionRejected, self._on_rejected)

        self._create_menus()
        self._create_shortcuts()

    # ---------------- navigation ----------------
    def start(self) -> None:
        self.pump.start()
        self.open_section(str(self.settings.get("default_section") or SECTION_CATALOG[0].id))

    def open_section(self, section_id: str) -> None:
        self.pump.spawn(self.navigator.navigate(section_id))

    def reload_current(self, *, everything: bool = False) -> None:
        """Re-fetch the active section; with *everything*, mark all loaded sections stale first."""
        sid = self.loader.active_section
        if everything:
            self.loader.invalidate_all()
        elif sid is not None:
            self.loader.invalidate(sid)
        if sid is not None:
            self.open_section(sid)

    def go_back(self) -> None:
        self.pump.spawn(self.navigator.navigate_back())

    def go_to_index(self, index: int) -> None:
        self.pump.spawn(self.navigator.navigate_by_index(index))

    def go_to_section(self) -> None:
        query = dialogs.ask_section_query(self, APP_TITLE, [d.title for d in SECTION_CATALOG])
        if query is None:
            return
        matches = self.navigator.search(query)
        if not matches:
            self.statusBar().showMessage(f"No section matches \"{query}\"", 3000)
            return
        self.open_section(matches[0].id)

    def show_loader_status(self) -> None:
        dialogs.show_status(self, APP_TITLE, self.navigator.stats())

    def reset_failed(self) -> None:
        failed = [sid for sid, st in self.loader.snapshot().items() if st.state is LoadState.FAILED]
        titles = [self.loader.descriptor(sid).title for sid in failed]
        if not dialogs.confirm_retry(self, APP_TITLE, titles):
            return
        for sid in failed:
            self.loader.reset(sid)
        log.info("Reset failed sections: %s", ", ".join(failed))

    # ---------------- event handlers ----------------
    def _on_load_started(self, event: SectionLoadStarted) -> None:
        title = self.loader.descriptor(event.section).title
        self.statusBar().showMessage(f"Loading {title}...")

    def _on_activated(self, event: SectionActivated) -> None:
        desc = self.loader.descriptor(event.section)
        self.setWindowTitle(f"{APP_TITLE} - {desc.title}")
        self.statusBar().showMessage(desc.title, 3000)

    def _on_load_failed(self, event: SectionLoadFailed) -> None:
        title = self.loader.descriptor(event.section).title
        if event.terminal:
            self.statusBar().showMessage(f"{title} is unavailable (Section > Retry failed sections)")
        else:
            left = self.loader.max_attempts - event.attempts
            self.statusBar().showMessage(f"Failed to load {title}; {left} attempt(s) left", 5000)

    def _on_rejected(self, event: SectionRejected) -> None:
        busy = self.loader.descriptor(event.busy_with).title if event.busy_with else ""
        self.statusBar().showMessage(f"Still loading {busy}, try again", 2000)

    def _show_navigation_error(self, title: str, message: str) -> None:
        terminal = isinstance(self.navigator.last_error, SectionFailedError)
        dialogs.load_failed(self, title, message, terminal=terminal)

    def _show_error(self, title: str, message: str) -> None:
        dialogs.load_failed(self, title, message)

    # ---------------- menus ----------------
    def _create_menus(self) -> None:
        menu = self.menuBar().addMenu("&Section")

        act_reload = QAction("Reload current", self)
        act_reload.setShortcut(QKeySequence("F5"))
        act_reload.triggered.connect(lambda: self.reload_current())
        menu.addAction(act_reload)

        act_reload_all = QAction("Reload all sections", self)
        act_reload_all.setShortcut(QKeySequence("Ctrl+F5"))
        act_reload_all.triggered.connect(lambda: self.reload_current(everything=True))
        menu.addAction(act_reload_all)

        act_back = QAction("Back", self)
        act_back.setShortcut(QKeySequence("Ctrl+B"))
        act_back.triggered.connect(self.go_back)
        menu.addAction(act_back)

        act_goto = QAction("Go to section...", self)
        act_goto.setShortcut(QKeySequence("Ctrl+K"))
        act_goto.triggered.connect(self.go_to_section)
        menu.addAction(act_goto)

        menu.addSeparator()

        act_reset = QAction("Retry failed sections", self)
        act_reset.triggered.connect(self.reset_failed)
        menu.addAction(act_reset)

        act_status = QAction("Loader status", self)
        act_status.triggered.connect(self.show_loader_status)
        menu.addAction(act_status)

        menu.addSeparator()
        act_collapse = QAction("Collapse sidebar", self, checkable=True)
        act_collapse.setChecked(bool(self.settings.get("sidebar_collapsed", False)))
        act_collapse.toggled.connect(self._set_sidebar_collapsed)
        menu.addAction(act_collapse)

    def _create_shortcuts(self) -> None:
        QShortcut(QKeySequence("Ctrl+PgDown"), self, activated=lambda: self.pump.spawn(self.navigator.navigate_next()))
        QShortcut(QKeySequence("Ctrl+PgUp"), self, activated=lambda: self.pump.spawn(self.navigator.navigate_previous()))
        # Ctrl+1..Ctrl+N jump to the Nth section in sidebar order.
        for i in range(min(9, len(SECTION_CATALOG))):
            QShortcut(QKeySequence(f"Ctrl+{i + 1}"), self, activated=lambda i=i: self.go_to_index(i))

    def _set_sidebar_collapsed(self, collapsed: bool) -> None:
        self.sidebar.set_collapsed(collapsed)
        self.settings = update_setting("sidebar_collapsed", bool(collapsed))

    def closeEvent(self, event):
        self.loader.dispose()
        self.pump.close()
        super().closeEvent(event)


def create_main_window(settings: Dict[str, Any]) -> MainWindow:
    return MainWindow(settings)
