# -*- coding: utf-8 -*-
"""Content sources for section markup.

A content source answers ``await source.fetch(locator) -> FetchResult``.
Any status outside 2xx is a failure; the materializer turns it into
ContentFetchError. Sources never raise for I/O problems they can map to a
status (missing file -> 404, network error -> 0).
"""

from __future__ import annotations

import asyncio
import logging
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

log = logging.getLogger(__name__)

# Network errors (DNS, refused connection, timeout) have no HTTP status.
STATUS_NETWORK_ERROR = 0


@dataclass(frozen=True)
class FetchResult:
    status: int
    body: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= int(self.status) < 300


class ContentSource(Protocol):
    async def fetch(self, locator: str) -> FetchResult:
        ...


class FileContentSource:
    """Reads section markup from a resource directory."""

    def __init__(self, base_dir: Path, *, encoding: str = "utf-8") -> None:
        self.base_dir = Path(base_dir)
        self._encoding = encoding

    def _resolve(self, locator: str) -> Optional[Path]:
        base = self.base_dir.resolve()
        path = (base / str(locator)).resolve()
        # Locators must stay inside the resource directory.
        if base != path and base not in path.parents:
            return None
        return path

    async def fetch(self, locator: str) -> FetchResult:
        path = self._resolve(locator)
        if path is None:
            return FetchResult(status=403, reason="outside content root")
        if not path.is_file():
            return FetchResult(status=404, reason="not found")
        try:
            body = path.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            log.debug("Failed to read %s", path, exc_info=True)
            return FetchResult(status=500, reason=str(exc))
        return FetchResult(status=200, body=body)


def _decode(raw: bytes, charset: Optional[str]) -> str:
    try:
        return raw.decode(charset or "utf-8", errors="replace")
    except LookupError:
        log.warning("Unknown charset %r in response; decoding as utf-8", charset)
        return raw.decode("utf-8", errors="replace")


class HttpContentSource:
    """Fetches section markup over HTTP with urllib (run in an executor)."""

    def __init__(self, base_url: str, *, timeout_s: float = 10.0, headers: Optional[Dict[str, str]] = None) -> None:
        self.base_url = str(base_url).rstrip("/") + "/"
        self.timeout_s = float(timeout_s)
        self._headers = {"User-Agent": "Dancify/SectionLoader"}
        if headers:
            self._headers.update(headers)

    def url_for(self, locator: str) -> str:
        return urllib.parse.urljoin(self.base_url, str(locator).lstrip("/"))

    def _fetch_blocking(self, url: str) -> FetchResult:
        req = urllib.request.Request(url, headers=self._headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_s) as resp:
                body = _decode(resp.read(), resp.headers.get_content_charset())
                return FetchResult(status=int(resp.status), body=body)
        except urllib.error.HTTPError as exc:
            return FetchResult(status=int(exc.code), reason=str(exc.reason))
        except (urllib.error.URLError, OSError) as exc:
            log.debug("Network error fetching %s", url, exc_info=True)
            return FetchResult(status=STATUS_NETWORK_ERROR, reason=str(exc))

    async def fetch(self, locator: str) -> FetchResult:
        url = self.url_for(locator)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._fetch_blocking, url)


def build_content_source(settings: Dict[str, Any]) -> ContentSource:
    """Pick a source from settings: http(s) URLs use HTTP, anything else is a directory."""
    base = str(settings.get("content_base", "") or "")
    if base.startswith(("http://", "https://")):
        return HttpContentSource(base, timeout_s=float(settings.get("fetch_timeout_s", 10.0)))
    if not base:
        from infra.paths import resource_path
        base = str(resource_path("."))
    return FileContentSource(Path(base).expanduser())
