"""Abstract base extractor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol


class ScriptTarget(Protocol):
    """Anything that can evaluate a script with one argument: a Page or a BrowserComponent."""

    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...


class BaseExtractor(ABC):
    """Extractors run inside the page and report through the bridge, not via return value."""

    @abstractmethod
    async def run(self, target: ScriptTarget, page_number: int, token: str = "") -> str:
        """Invoke the extractor and return its delivery status.

        token is echoed back with the bridge call this invocation makes.
        """
