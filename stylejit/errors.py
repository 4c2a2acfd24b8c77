"""Exception hierarchy for stylejit."""

from __future__ import annotations


class StyleJITError(Exception):
    """Base class for every error raised by stylejit."""


class ConfigurationError(StyleJITError):
    """Missing or invalid build inputs (arguments, stylesheet path)."""


class FetchError(StyleJITError):
    """The runtime could not load its stylesheet."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
