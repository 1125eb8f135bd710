# -*- coding: utf-8 -*-
"""Section registry

Centralizes the controller factory for each section so the loader never
grows a per-section switch statement again.

Sections missing from the mapping simply have no controller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from app.base_controller import DashboardController, Provider, ResourceListController

log = logging.getLogger(__name__)

# section id -> provider key understood by build_controller_factories()
RESOURCE_SECTIONS: Dict[str, str] = {
    "users": "users",
    "move-management": "moves",
    "dance-style-management": "dance_styles",
    "move-submissions": "submissions",
}


def build_controller_factories(
    *,
    providers: Optional[Mapping[str, Provider]] = None,
    on_error: Optional[Callable[[str, str], None]] = None,
) -> Dict[str, Callable[[], Any]]:
    """Return mapping: section id -> zero-arg controller factory.

    *providers* maps "stats" and resource names ("moves", "users", ...) to
    async callables supplied by the API layer. Missing providers give
    controllers that load nothing.
    """
    providers = dict(providers or {})

    def make_dashboard():
        return DashboardController(stats_provider=providers.get("stats"), on_error=on_error)

    factories: Dict[str, Callable[[], Any]] = {"dashboard": make_dashboard}

    for section_id, resource in RESOURCE_SECTIONS.items():
        def make_resource(section_id=section_id, resource=resource):
            return ResourceListController(section_id, items_provider=providers.get(resource), on_error=on_error)

        factories[section_id] = make_resource

    unknown = set(providers) - set(RESOURCE_SECTIONS.values()) - {"stats"}
    if unknown:
        log.warning("Ignoring unknown providers: %s", ", ".join(sorted(unknown)))
    return factories
