# -*- coding: utf-8 -*-
"""Section descriptors and load-state keys (single source of truth).

Keep these types stable. They are used by:
- app.section_catalog SECTION_CATALOG
- services.section_loader SectionLoader bookkeeping
- services.navigation SectionNavigator
- ui.widgets.sidebar (titles/icons)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class SectionDescriptor:
    """Immutable description of one top-level navigable view."""
    id: str
    content_locator: str
    title: str
    icon: str = ""
    description: str = ""
    group: str = ""


class LoadState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class SectionStatus:
    """Read-only snapshot of the loader bookkeeping for one section."""
    state: LoadState = LoadState.NOT_LOADED
    attempts: int = 0
    stale: bool = False
    last_error: Optional[BaseException] = None

    @property
    def is_terminal(self) -> bool:
        return self.state is LoadState.FAILED
