# -*- coding: utf-8 -*-
"""Message boxes for section navigation.

All of them are modal and return once the user has answered.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from PyQt5.QtWidgets import QInputDialog, QMessageBox, QWidget


def load_failed(parent: Optional[QWidget], title: str, message: str, *, terminal: bool = False) -> None:
    text = message
    if terminal:
        text += "\n\nThe section will not be retried until you choose Section > Retry failed sections."
    QMessageBox.critical(parent, title, text)


def confirm_retry(parent: Optional[QWidget], app_title: str, section_titles: Sequence[str]) -> bool:
    """Ask before clearing terminal failures. Nothing to retry -> info box, False."""
    if not section_titles:
        QMessageBox.information(parent, app_title, "No failed sections.")
        return False
    listing = "\n".join(f"  - {t}" for t in section_titles)
    r = QMessageBox.question(
        parent,
        app_title,
        f"Retry loading these sections?\n\n{listing}",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.Yes,
    )
    return r == QMessageBox.Yes


def ask_section_query(parent: Optional[QWidget], app_title: str, suggestions: Sequence[str]) -> Optional[str]:
    """Editable picker: returns the chosen or typed text, None on cancel."""
    text, ok = QInputDialog.getItem(parent, app_title, "Go to section:", list(suggestions), 0, True)
    text = str(text or "").strip()
    return text if ok and text else None


def show_status(parent: Optional[QWidget], app_title: str, stats: Mapping[str, Any]) -> None:
    def _fmt(ids) -> str:
        return ", ".join(ids) if ids else "none"

    lines = [
        f"Active: {stats.get('active_section') or 'none'}",
        f"Loading: {stats.get('busy_with') or 'idle'}",
        f"Loaded: {_fmt(stats.get('loaded'))}",
        f"Failed: {_fmt(stats.get('failed'))}",
        f"Sections: {stats.get('total_sections', 0)}, back history: {stats.get('history_length', 0)}",
    ]
    QMessageBox.information(parent, f"{app_title} - loader status", "\n".join(lines))
