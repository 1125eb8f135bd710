# -*- coding: utf-8 -*-
"""ContentMaterializer

The only component allowed to create or remove section containers.

ensure_content(descriptor):
1) drop duplicates left behind by anything that bypassed the loader gate
2) fetch markup (the suspension point)
3) drop duplicates again, create the container if none exists
4) write content in place, so references a controller holds stay valid
5) drop duplicates once more and return the canonical container
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from core.errors import ContentFetchError
from core.sections import SectionDescriptor
from infra.perf import span as perf_span
from services.content_source import STATUS_NETWORK_ERROR, ContentSource
from services.view_tree import ViewTree

log = logging.getLogger(__name__)


class ContentMaterializer:
    def __init__(self, *, view_tree: ViewTree, content_source: ContentSource) -> None:
        self.view_tree = view_tree
        self.content_source = content_source

    # ---------------- public API ----------------
    async def ensure_content(self, descriptor: SectionDescriptor) -> Any:
        sid = descriptor.id
        self.dedupe(sid)

        with perf_span(sid, "fetch", threshold_ms=100.0):
            try:
                result = await self.content_source.fetch(descriptor.content_locator)
            except Exception as exc:
                # Exceptions from a source count as failed fetches.
                log.debug("Content source raised for section %s", sid, exc_info=True)
                raise ContentFetchError(sid, STATUS_NETWORK_ERROR, descriptor.content_locator, str(exc)) from exc
            if not result.ok:
                raise ContentFetchError(sid, result.status, descriptor.content_locator, result.reason)

        container = self.dedupe(sid)
        if container is None:
            container = self.view_tree.create_container(sid)
            log.debug("Created container for section %s", sid)
        self.view_tree.set_content(container, result.body)

        canonical = self.dedupe(sid)
        return canonical if canonical is not None else container

    def canonical(self, section_id: str) -> Optional[Any]:
        found = self.view_tree.find_containers(section_id)
        return found[0] if found else None

    def dedupe(self, section_id: str) -> Optional[Any]:
        """Keep the first container for *section_id*, remove the rest."""
        found = list(self.view_tree.find_containers(section_id))
        if not found:
            return None
        keep, extra = found[0], found[1:]
        if extra:
            log.warning("Removing %d duplicate container(s) for section %s", len(extra), section_id)
            for container in extra:
                self.view_tree.remove_container(container)
        return keep
