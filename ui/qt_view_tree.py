# -*- coding: utf-8 -*-
"""PyQt5 view tree.

Section containers are QTextBrowser children of a host widget, named after
their section id (objectName) and tagged with the ``sectionContainer``
property. Only ContentMaterializer creates or removes them.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QTextBrowser, QVBoxLayout, QWidget

log = logging.getLogger(__name__)

_CONTAINER_PROP = "sectionContainer"


class QtViewTree:
    def __init__(self, host: Optional[QWidget] = None) -> None:
        self.host = host if host is not None else QWidget()
        self.host.setObjectName("ContentHost")
        layout = self.host.layout()
        if layout is None:
            layout = QVBoxLayout(self.host)
            layout.setContentsMargins(0, 0, 0, 0)
            layout.setSpacing(0)
        self._layout = layout

    def _containers(self) -> List[QTextBrowser]:
        children = self.host.findChildren(QTextBrowser, "", Qt.FindDirectChildrenOnly)
        return [w for w in children if bool(w.property(_CONTAINER_PROP))]

    def find_containers(self, section_id: str) -> List[QTextBrowser]:
        return [w for w in self._containers() if w.objectName() == section_id]

    def all_containers(self) -> List[QTextBrowser]:
        return self._containers()

    def create_container(self, section_id: str) -> QTextBrowser:
        browser = QTextBrowser(self.host)
        browser.setObjectName(str(section_id))
        browser.setProperty(_CONTAINER_PROP, True)
        browser.setOpenLinks(False)
        browser.setVisible(False)
        self._layout.addWidget(browser)
        return browser

    def remove_container(self, container: QTextBrowser) -> None:
        self._layout.removeWidget(container)
        # Detach now so findChildren() stops seeing it before deleteLater runs.
        container.setParent(None)
        container.deleteLater()

    def set_content(self, container: QTextBrowser, body: str) -> None:
        container.setHtml(str(body))

    def set_visible(self, container: QTextBrowser, visible: bool) -> None:
        container.setVisible(bool(visible))
