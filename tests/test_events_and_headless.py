# -*- coding: utf-8 -*-
from __future__ import annotations

import asyncio

from app.base_controller import SectionController
from app.events import EventBus, SectionActivated, SectionLoaded
from infra.settings import load_settings


def test_event_bus_isolates_broken_handlers():
    bus = EventBus()
    seen = []

    def broken(_event):
        raise RuntimeError("listener bug")

    bus.subscribe(SectionActivated, broken)
    bus.subscribe(SectionActivated, lambda e: seen.append(e.section))
    bus.emit(SectionActivated("users"))
    bus.emit(SectionLoaded("users"))

    assert seen == ["users"]

    bus.unsubscribe(SectionActivated, broken)
    bus.emit(SectionActivated("dashboard"))
    assert seen == ["users", "dashboard"]


def test_section_controller_reports_errors_best_effort():
    reported = []
    ctl = SectionController("users", on_error=lambda t, m: reported.append((t, m)))
    ctl.report_error("Users", "could not load")
    assert reported == [("Users", "could not load")]

    def broken(_t, _m):
        raise ValueError("dialog gone")

    SectionController("users", on_error=broken).report_error("x", "y")


def test_headless_run_loads_packaged_sections(tmp_path, capsys):
    import main

    settings = load_settings(tmp_path / "settings.json")
    code = asyncio.run(main._run_headless(settings, ["users", "dashboard"]))

    out = capsys.readouterr().out
    assert code == 0
    assert "active: dashboard" in out
    assert "users" in out and "loaded" in out


def test_headless_run_reports_failure(tmp_path, capsys):
    import main

    settings = load_settings(tmp_path / "settings.json")
    settings["content_base"] = str(tmp_path / "empty")
    code = asyncio.run(main._run_headless(settings, ["users"]))

    out = capsys.readouterr().out
    assert code == 1
    assert "attempts=1" in out
    assert "active: None" in out
