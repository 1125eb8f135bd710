# -*- coding: utf-8 -*-
"""Section catalog (official descriptors + guardrails).

This module is the *single source of truth* for:
- Which sections exist, in navigation order
- Where each section's markup lives (content locator)
- Title/icon/description shown by the sidebar and breadcrumbs

Adding a section is a new SectionDescriptor here plus, if it needs one, a
controller factory in app/section_registry.py.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from core.sections import SectionDescriptor

log = logging.getLogger(__name__)

GROUP_MAIN = "Main"
GROUP_CONTENT = "Content Management"

SECTION_CATALOG: Tuple[SectionDescriptor, ...] = (
    SectionDescriptor(
        id="dashboard",
        content_locator="sections/dashboard.html",
        title="Dashboard",
        icon="📊",
        description="Overview and analytics",
        group=GROUP_MAIN,
    ),
    SectionDescriptor(
        id="users",
        content_locator="sections/users.html",
        title="User Management",
        icon="👥",
        description="User management and profiles",
        group=GROUP_MAIN,
    ),
    SectionDescriptor(
        id="move-management",
        content_locator="sections/move-management.html",
        title="Move Management",
        icon="🕺",
        description="Create and manage dance moves",
        group=GROUP_CONTENT,
    ),
    SectionDescriptor(
        id="dance-style-management",
        content_locator="sections/dance-style-management.html",
        title="Dance Styles",
        icon="🎭",
        description="Manage dance categories",
        group=GROUP_CONTENT,
    ),
    SectionDescriptor(
        id="move-submissions",
        content_locator="sections/move-submissions.html",
        title="Move Submissions",
        icon="📹",
        description="Review user video submissions",
        group=GROUP_CONTENT,
    ),
)


def find_section(section_id: str, catalog: Iterable[SectionDescriptor] = SECTION_CATALOG) -> Optional[SectionDescriptor]:
    for desc in catalog:
        if desc.id == section_id:
            return desc
    return None


def groups(catalog: Iterable[SectionDescriptor] = SECTION_CATALOG) -> Dict[str, List[SectionDescriptor]]:
    """Group descriptors by sidebar heading, keeping catalog order."""
    out: Dict[str, List[SectionDescriptor]] = {}
    for desc in catalog:
        out.setdefault(desc.group or GROUP_MAIN, []).append(desc)
    return out


def validate_catalog(
    catalog: Iterable[SectionDescriptor] = SECTION_CATALOG,
    *,
    content_root: Optional[Path] = None,
) -> List[str]:
    """Return a list of catalog problems (empty when healthy).

    With *content_root*, also checks that each locator exists on disk.
    This is a guardrail: callers decide whether problems are fatal.
    """
    problems: List[str] = []
    seen = set()
    for desc in catalog:
        if not isinstance(desc, SectionDescriptor):
            problems.append(f"Catalog entry must be SectionDescriptor, got {type(desc).__name__}: {desc!r}")
            continue
        if not desc.id or desc.id != desc.id.strip():
            problems.append(f"Invalid section id: {desc.id!r}")
        if desc.id in seen:
            problems.append(f"Duplicate section id: {desc.id}")
        seen.add(desc.id)
        if not desc.content_locator:
            problems.append(f"Section {desc.id}: empty content locator")
        elif content_root is not None and not (Path(content_root) / desc.content_locator).is_file():
            problems.append(f"Section {desc.id}: missing content {desc.content_locator}")
    for msg in problems:
        log.warning("Section catalog: %s", msg)
    return problems
