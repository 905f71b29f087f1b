"""
Exception hierarchy for pageprobe.

    PageProbeError
    ├── SnapshotFormatError
    ├── BrowserNotStartedError
    └── ConfigError

Validation and extraction failures reach the user as display text; these
exceptions cover programming errors and payloads that fail validation.
"""

from __future__ import annotations


class PageProbeError(Exception):
    """Base class for every pageprobe error."""


class SnapshotFormatError(PageProbeError):
    """A payload from page script does not have the PageSnapshot shape."""


class BrowserNotStartedError(PageProbeError):
    def __init__(self, message: str = "BrowserComponent is not started") -> None:
        super().__init__(message)


class ConfigError(PageProbeError):
    """An environment value could not be parsed."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name}={value!r} is not a valid {expected}")
