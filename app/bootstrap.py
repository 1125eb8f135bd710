# -*- coding: utf-8 -*-
"""
Application bootstrap (runs before UI):
- Init logging
- Install crash handlers
- Load per-user settings
- Wire a SectionLoader from the catalog + settings
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from app.events import EventBus
from app.section_catalog import SECTION_CATALOG, validate_catalog
from app.section_registry import build_controller_factories
from infra.crash_handler import install_global_exception_handlers
from infra.logging_setup import init_logging, init_perf_logging
from infra.perf import is_enabled as perf_enabled
from infra.settings import load_settings
from services.content_source import FileContentSource, build_content_source
from services.section_loader import SectionLoader
from services.view_tree import NavIndicator, ViewTree

log = logging.getLogger(__name__)


def bootstrap() -> Dict[str, Any]:
    init_logging()
    if perf_enabled():
        init_perf_logging()
    install_global_exception_handlers()
    settings = load_settings()
    log.info("Settings loaded (content_base=%r, max_attempts=%s)", settings["content_base"], settings["max_attempts"])
    return settings


def build_section_loader(
    *,
    view_tree: ViewTree,
    settings: Mapping[str, Any],
    nav_indicator: Optional[NavIndicator] = None,
    event_bus: Optional[EventBus] = None,
    providers: Optional[Mapping[str, Any]] = None,
    on_error=None,
) -> SectionLoader:
    source = build_content_source(dict(settings))
    content_root = source.base_dir if isinstance(source, FileContentSource) else None
    validate_catalog(SECTION_CATALOG, content_root=content_root)

    return SectionLoader(
        sections=SECTION_CATALOG,
        view_tree=view_tree,
        content_source=source,
        controller_factories=build_controller_factories(providers=providers, on_error=on_error),
        nav_indicator=nav_indicator,
        max_attempts=int(settings.get("max_attempts", 3)),
        event_bus=event_bus,
    )
