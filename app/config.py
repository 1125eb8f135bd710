# -*- coding: utf-8 -*-
"""Build-time configuration.

This module is intentionally tiny and *import-safe*.

Per-user overrides (content location, attempts, timeouts) live in
``infra/settings.py``; the values here are the defaults those settings fall
back to.
"""

from __future__ import annotations

# Automatic load attempts per section before it is marked failed (terminal).
MAX_LOAD_ATTEMPTS: int = 3

# Section shown at startup.
DEFAULT_SECTION: str = "dashboard"

# Where section markup comes from. Empty means the packaged resources/ folder;
# an http(s) URL switches to the HTTP content source.
CONTENT_BASE: str = ""

# Timeout for a single HTTP content fetch.
FETCH_TIMEOUT_S: float = 10.0


# --- Build overrides (optional) ---
# When packaging, the build pipeline may include a `build_config.json` resource.
try:
    import json
    from infra.paths import resource_path
    _bc_path = resource_path("build_config.json")
    if _bc_path.exists():
        with open(_bc_path, "r", encoding="utf-8") as _f:
            _bc = json.load(_f) or {}
        MAX_LOAD_ATTEMPTS = int(_bc.get("MAX_LOAD_ATTEMPTS", MAX_LOAD_ATTEMPTS))
        DEFAULT_SECTION = str(_bc.get("DEFAULT_SECTION", DEFAULT_SECTION))
        CONTENT_BASE = str(_bc.get("CONTENT_BASE", CONTENT_BASE))
        FETCH_TIMEOUT_S = float(_bc.get("FETCH_TIMEOUT_S", FETCH_TIMEOUT_S))
except Exception:
    # Never crash on config overrides.
    pass
