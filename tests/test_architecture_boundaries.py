# -*- coding: utf-8 -*-
"""The loader core must stay importable without Qt."""

from __future__ import annotations

from scripts.check_architecture import find_violations


def test_core_services_infra_do_not_import_ui():
    assert find_violations() == []


def test_checker_flags_forbidden_imports(tmp_path):
    (tmp_path / "services").mkdir()
    (tmp_path / "services" / "bad.py").write_text("from PyQt5.QtWidgets import QWidget\n", encoding="utf-8")
    (tmp_path / "core").mkdir()
    (tmp_path / "core" / "ok.py").write_text("import logging\n", encoding="utf-8")

    violations = find_violations(tmp_path)

    assert len(violations) == 1
    assert "services/bad.py:1 imports 'PyQt5'" in violations[0]
