# -*- coding: utf-8 -*-
"""
User settings stored in a per-user writable folder (no admin).

Keys:
- content_base      directory or http(s) URL section markup is fetched from
- max_attempts      automatic load attempts before a section fails for good
- fetch_timeout_s   HTTP fetch timeout
- default_section   section shown at startup
- sidebar_collapsed UI preference
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from app import config
from infra.paths import settings_file

log = logging.getLogger(__name__)


def _defaults() -> Dict[str, Any]:
    return {
        "content_base": config.CONTENT_BASE,
        "max_attempts": config.MAX_LOAD_ATTEMPTS,
        "fetch_timeout_s": config.FETCH_TIMEOUT_S,
        "default_section": config.DEFAULT_SECTION,
        "sidebar_collapsed": False,
    }


def _coerce(data: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(data)
    try:
        out["max_attempts"] = max(1, int(out.get("max_attempts", config.MAX_LOAD_ATTEMPTS)))
    except (TypeError, ValueError):
        log.warning("Invalid max_attempts %r; using default", out.get("max_attempts"))
        out["max_attempts"] = config.MAX_LOAD_ATTEMPTS
    try:
        out["fetch_timeout_s"] = float(out.get("fetch_timeout_s", config.FETCH_TIMEOUT_S))
    except (TypeError, ValueError):
        log.warning("Invalid fetch_timeout_s %r; using default", out.get("fetch_timeout_s"))
        out["fetch_timeout_s"] = config.FETCH_TIMEOUT_S
    out["content_base"] = str(out.get("content_base") or "")
    out["default_section"] = str(out.get("default_section") or config.DEFAULT_SECTION)
    out["sidebar_collapsed"] = bool(out.get("sidebar_collapsed", False))
    return out


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = Path(path) if path is not None else settings_file()
    defaults = _defaults()
    if not path.exists():
        save_settings(defaults.copy(), path)
        return defaults.copy()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        merged = defaults.copy()
        if isinstance(data, dict):
            merged.update({k: v for k, v in data.items() if v is not None})
        return _coerce(merged)
    except (OSError, ValueError):
        # Recover from corruption gracefully
        log.warning("Settings file %s unreadable; restoring defaults", path, exc_info=True)
        save_settings(defaults.copy(), path)
        return defaults.copy()


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = Path(path) if path is not None else settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def update_setting(key: str, value: Any, path: Optional[Path] = None) -> Dict[str, Any]:
    s = load_settings(path)
    s[str(key)] = value
    save_settings(s, path)
    return s


def repair_user_space(path: Optional[Path] = None) -> Dict[str, Any]:
    """Reset settings to defaults (installer 'Repair' shortcut)."""
    path = Path(path) if path is not None else settings_file()
    try:
        if path.exists():
            path.unlink()
    except OSError:
        log.warning("Could not remove %s", path, exc_info=True)
    return load_settings(path)
