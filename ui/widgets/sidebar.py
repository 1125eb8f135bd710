# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Dict, Iterable, Optional

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import QFrame, QLabel, QToolButton, QVBoxLayout

from core.sections import SectionDescriptor


class Sidebar(QFrame):
    """Section navigation. Also the loader's navigation indicator (set_active)."""

    navigate_requested = pyqtSignal(str)

    def __init__(self, sections: Iterable[SectionDescriptor], parent=None):
        super().__init__(parent)
        self.setObjectName("Sidebar")
        self._collapsed = False
        self._buttons: Dict[str, QToolButton] = {}
        self._labels: Dict[str, str] = {}
        self._icons: Dict[str, str] = {}
        self._headers = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._collapse_btn = QToolButton(self)
        self._collapse_btn.setObjectName("SidebarItem")
        self._collapse_btn.setText("Hide")
        self._collapse_btn.clicked.connect(self._toggle_collapsed)
        layout.addWidget(self._collapse_btn)

        group = None
        for desc in sections:
            if desc.group and desc.group != group:
                group = desc.group
                header = QLabel(group, self)
                header.setObjectName("SidebarHeader")
                layout.addWidget(header)
                self._headers.append(header)
            btn = QToolButton(self)
            btn.setObjectName("SidebarItem")
            btn.setText(f"{desc.icon} {desc.title}".strip())
            btn.setToolTip(desc.description)
            btn.clicked.connect(lambda _=False, sid=desc.id: self.navigate_requested.emit(sid))
            layout.addWidget(btn)
            self._buttons[desc.id] = btn
            self._labels[desc.id] = desc.title
            self._icons[desc.id] = desc.icon

        layout.addStretch(1)
        self.setMinimumWidth(220)
        self.setMaximumWidth(220)

    def _toggle_collapsed(self) -> None:
        self.set_collapsed(not self._collapsed)

    def set_active(self, section_id: Optional[str]) -> None:
        for sid, btn in self._buttons.items():
            btn.setProperty("active", sid == section_id)
            btn.style().unpolish(btn)
            btn.style().polish(btn)
            btn.update()

    def set_collapsed(self, collapsed: bool) -> None:
        self._collapsed = bool(collapsed)
        width = 56 if self._collapsed else 220
        self.setMinimumWidth(width)
        self.setMaximumWidth(width)
        self._collapse_btn.setText(">" if self._collapsed else "Hide")
        for header in self._headers:
            header.setVisible(not self._collapsed)
        for sid, btn in self._buttons.items():
            title = self._labels.get(sid, "")
            if self._collapsed:
                btn.setText(self._icons.get(sid) or title[:1])
                btn.setToolTip(title)
            else:
                btn.setText(f"{self._icons.get(sid, '')} {title}".strip())
                btn.setToolTip("")
