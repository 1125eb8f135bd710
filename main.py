# -*- coding: utf-8 -*-
"""Dancify admin entrypoint.

Intentionally minimal:
- bootstrap (logging, crash handlers, settings)
- --headless: load sections into an in-memory view tree and print their state
- otherwise: QApplication + main window
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="dancify-admin", description="Dancify admin console")
    p.add_argument("--headless", nargs="*", metavar="SECTION", default=None,
                   help="load the given sections without a window and print the loader state")
    p.add_argument("--repair", action="store_true", help="reset per-user settings to defaults")
    return p.parse_args(argv)


async def _run_headless(settings, section_ids: List[str]) -> int:
    from app.bootstrap import build_section_loader
    from services.navigation import SectionNavigator
    from services.view_tree import MemoryNavIndicator, MemoryViewTree

    loader = build_section_loader(
        view_tree=MemoryViewTree(),
        settings=settings,
        nav_indicator=MemoryNavIndicator(),
    )
    navigator = SectionNavigator(loader)
    ok = True
    for sid in section_ids or [str(settings["default_section"])]:
        ok = await navigator.navigate(sid) and ok
    for sid, status in loader.snapshot().items():
        err = f"  ({status.last_error})" if status.last_error else ""
        print(f"{sid:<26} {status.state.value:<11} attempts={status.attempts}{err}")
    print(f"active: {loader.active_section}")
    return 0 if ok else 1


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)

    from app.bootstrap import bootstrap
    from infra.settings import repair_user_space

    if args.repair:
        repair_user_space()
        print("Settings reset to defaults.")
        return

    settings = bootstrap()

    if args.headless is not None:
        sys.exit(asyncio.run(_run_headless(settings, list(args.headless))))

    try:
        from PyQt5.QtWidgets import QApplication
    except ImportError:
        print(
            "PyQt5 is required for the admin window. Install it with: pip install -e .\n"
            "Or run without a window: python -m dancify --headless dashboard",
            file=sys.stderr,
        )
        sys.exit(1)

    from app.controller import create_main_window

    app = QApplication(sys.argv if argv is None else [sys.argv[0], *argv])
    window = create_main_window(settings)
    window.show()
    window.start()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
