# -*- coding: utf-8 -*-
"""core/errors.py

Error taxonomy for the section loader (no UI dependency).

Retryable errors (ContentFetchError, ControllerInitError) are counted per
section by the loader. ConcurrencyRejected never consumes an attempt.
"""

from __future__ import annotations

from typing import Optional


class SectionLoaderError(Exception):
    """Base class for every error raised by the section loader."""

    def __init__(self, section_id: str, message: str = "") -> None:
        self.section_id = str(section_id)
        super().__init__(message or self.section_id)


class UnknownSectionError(SectionLoaderError, LookupError):
    def __init__(self, section_id: str) -> None:
        super().__init__(section_id, f"Unknown section: {section_id!r}")


class RetryableSectionError(SectionLoaderError):
    """Marker base for failures counted against the attempt budget."""


class ContentFetchError(RetryableSectionError):
    def __init__(self, section_id: str, status: int, locator: str = "", reason: str = "") -> None:
        self.status = int(status)
        self.locator = str(locator)
        self.reason = str(reason)
        msg = f"Failed to fetch content for {section_id!r}: HTTP {self.status}"
        if self.reason:
            msg += f" ({self.reason})"
        super().__init__(section_id, msg)


class ControllerInitError(RetryableSectionError):
    def __init__(self, section_id: str, cause: Optional[BaseException] = None, *, phase: str = "initialize") -> None:
        self.cause = cause
        self.phase = str(phase)
        detail = f": {cause}" if cause is not None else ""
        super().__init__(section_id, f"Controller {self.phase} failed for {section_id!r}{detail}")


class ConcurrencyRejected(SectionLoaderError):
    """Another section pipeline holds the gate; the caller may retry later."""

    def __init__(self, section_id: str, busy_with: str) -> None:
        self.busy_with = str(busy_with)
        super().__init__(
            section_id,
            f"Cannot load {section_id!r} while {self.busy_with!r} is loading",
        )


class SectionFailedError(SectionLoaderError):
    """Terminal failure: no automatic retry until the section is reset."""

    def __init__(self, section_id: str, attempts: int, last_error: Optional[BaseException] = None) -> None:
        self.attempts = int(attempts)
        self.last_error = last_error
        detail = f"; last error: {last_error}" if last_error is not None else ""
        super().__init__(
            section_id,
            f"Section {section_id!r} failed after {self.attempts} attempts{detail}",
        )


class LoaderDisposedError(SectionLoaderError):
    def __init__(self, section_id: str) -> None:
        super().__init__(section_id, f"Section loader disposed; cannot load {section_id!r}")
