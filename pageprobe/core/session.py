"""CaptureSession: host-held accumulation of snapshots for the current URL."""

from __future__ import annotations

from pageprobe.core.types import SessionState


class CaptureSession:
    """
    Ordered history of raw snapshot JSON for one URL.

    len(history) == capture_count holds after every operation.
    """

    def __init__(self) -> None:
        self.current_url: str = ""
        self._history: list[str] = []

    @property
    def capture_count(self) -> int:
        return len(self._history)

    @property
    def history(self) -> list[str]:
        return list(self._history)

    @property
    def next_page_number(self) -> int:
        return self.capture_count + 1

    @property
    def state(self) -> SessionState:
        return SessionState.LOADED if self.current_url else SessionState.IDLE

    def record(self, raw_snapshot: str) -> int:
        """Append one capture and return the new count."""
        self._history.append(raw_snapshot)
        return self.capture_count

    def reset(self, url: str = "") -> None:
        self.current_url = url
        self._history = []
