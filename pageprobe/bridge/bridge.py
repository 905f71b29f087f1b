"""PageBridge: the host-side receiver that page script delivers snapshots to."""

from __future__ import annotations

import logging
import secrets
from typing import Any

from pageprobe.core.session import CaptureSession
from pageprobe.core.types import PageSnapshot
from pageprobe.errors import SnapshotFormatError
from pageprobe.formatter.display import InfoDisplay
from pageprobe.formatter.formatter import UNKNOWN_ERROR, format_capture, format_error

logger = logging.getLogger(__name__)

# Global identifier page script sees
BRIDGE_NAME = "PageProbe"

# Exposed Playwright functions the global forwards to
PAGE_INFO_BINDING = "__pageprobeOnPageInfo"
ERROR_BINDING = "__pageprobeOnError"

# Installs a frozen object with exactly two methods. Idempotent, so it can run
# both as an init script and against an already-loaded document. The exposed
# functions are captured once here; page script can reassign the window
# properties afterwards without redirecting the bridge.
BRIDGE_INSTALL_JS = """() => {
    if (window.__NAME__) return false;
    const info = window.__INFO__;
    const error = window.__ERROR__;
    if (typeof info !== 'function' || typeof error !== 'function') return false;
    const tag = (token) => (token === undefined || token === null ? null : String(token));
    const bridge = Object.freeze({
        onPageInfo: (json, token) => info(String(json), tag(token)),
        onError: (message, token) => error(String(message), tag(token)),
    });
    Object.defineProperty(window, '__NAME__', {
        value: bridge, writable: false, configurable: false, enumerable: false,
    });
    return true;
}""".replace("__NAME__", BRIDGE_NAME).replace("__INFO__", PAGE_INFO_BINDING).replace(
    "__ERROR__", ERROR_BINDING
)


class PageBridge:
    """
    Two capability methods callable from untrusted page script.

    Handlers run on the host event loop, which owns the display; Playwright
    dispatches exposed-function calls there. The bridge never navigates and
    never triggers an extraction itself.
    """

    def __init__(
        self,
        session: CaptureSession,
        display: InfoDisplay,
        *,
        max_payload_chars: int = 1_000_000,
        max_error_chars: int = 2000,
    ) -> None:
        self._session = session
        self._display = display
        self._max_payload_chars = max_payload_chars
        self._max_error_chars = max_error_chars
        self.deliveries = 0
        self._issued: set[str] = set()
        self._delivered: set[str] = set()

    def issue_token(self) -> str:
        """A fresh token for one extraction; the page echoes it back with its call."""
        token = secrets.token_hex(16)
        self._issued.add(token)
        return token

    def claim(self, token: str) -> bool:
        """Retire token and report whether a bridge call carrying it arrived."""
        self._issued.discard(token)
        if token in self._delivered:
            self._delivered.discard(token)
            return True
        return False

    def on_page_info(self, payload: Any, token: Any = None) -> None:
        self._mark(token)
        if not isinstance(payload, str):
            self._reject(f"page info must be a string, got {type(payload).__name__}")
            return
        if len(payload) > self._max_payload_chars:
            self._reject(
                f"page info exceeds {self._max_payload_chars} characters ({len(payload)})"
            )
            return
        try:
            snapshot = PageSnapshot.from_json(payload)
        except SnapshotFormatError as exc:
            self._reject(f"malformed page info: {exc}")
            return

        count = self._session.record(payload)
        if snapshot.is_empty:
            logger.debug("Received page %d (%s): no interactive elements", count, snapshot.url)
        else:
            logger.debug(
                "Received page %d (%s): %d inputs, %d buttons, %d selects",
                count,
                snapshot.url,
                len(snapshot.inputs),
                len(snapshot.buttons),
                len(snapshot.selects),
            )
        self._display.show(format_capture(count, payload))

    def on_error(self, message: Any, token: Any = None) -> None:
        self._mark(token)
        text = "" if message is None else str(message)
        if len(text) > self._max_error_chars:
            text = text[: self._max_error_chars] + "..."
        text = text or UNKNOWN_ERROR
        logger.warning("Extraction error: %s", text)
        self._display.show(format_error(text))

    def _mark(self, token: Any) -> None:
        self.deliveries += 1
        # Tokens not handed out by issue_token are ignored.
        if isinstance(token, str) and token in self._issued:
            self._delivered.add(token)

    def _reject(self, reason: str) -> None:
        logger.warning("Rejected page info: %s", reason)
        self._display.show(format_error(reason))
