# -*- coding: utf-8 -*-
"""ActivationSwitch

Makes exactly one section container visible and keeps the single
``active_section`` pointer. activate() is a plain (non-async) method: the
whole check-and-set runs without yielding to the event loop, so rapid calls
can never leave two containers visible.
"""

from __future__ import annotations

import logging
from typing import Optional

from services.view_tree import NavIndicator, ViewTree

log = logging.getLogger(__name__)


class ActivationSwitch:
    def __init__(self, *, view_tree: ViewTree, nav_indicator: Optional[NavIndicator] = None) -> None:
        self.view_tree = view_tree
        self.nav_indicator = nav_indicator
        self._active: Optional[str] = None

    @property
    def active_section(self) -> Optional[str]:
        return self._active

    def activate(self, section_id: str) -> None:
        found = self.view_tree.find_containers(section_id)
        if not found:
            raise LookupError(f"No container materialized for section {section_id!r}")
        target = found[0]

        tree = self.view_tree
        for container in tree.all_containers():
            if container is not target:
                tree.set_visible(container, False)
        tree.set_visible(target, True)

        previous, self._active = self._active, section_id
        if self.nav_indicator is not None:
            self.nav_indicator.set_active(section_id)
        if previous != section_id:
            log.info("Active section: %s -> %s", previous, section_id)

    def clear(self) -> None:
        for container in self.view_tree.all_containers():
            self.view_tree.set_visible(container, False)
        self._active = None
        if self.nav_indicator is not None:
            self.nav_indicator.set_active(None)
