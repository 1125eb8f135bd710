# -*- coding: utf-8 -*-

"""Pytest configuration.

This project is a simple app folder layout (app/, core/, services/, ...).
For local testing we add the repository root to sys.path so that imports like
`from services...` work reliably, and point per-user data at a temp folder.
"""

from __future__ import annotations

import os
import sys

import pytest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def _isolated_user_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("DANCIFY_HOME", str(tmp_path / "user"))
