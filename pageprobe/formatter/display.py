"""InfoDisplay: the text view the host writes into."""

from __future__ import annotations

import logging
from typing import Callable

from pageprobe.formatter.formatter import INITIAL_PROMPT

logger = logging.getLogger(__name__)


class InfoDisplay:
    """Holds the current display text and notifies listeners on every change."""

    def __init__(self, initial: str = INITIAL_PROMPT) -> None:
        self._text = initial
        self._listeners: list[Callable[[str], None]] = []

    @property
    def text(self) -> str:
        return self._text

    def show(self, text: str) -> None:
        self._text = text
        logger.debug("Display: %s", text.splitlines()[0] if text else "")
        for listener in list(self._listeners):
            listener(text)

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)
