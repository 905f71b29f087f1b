"""CaptureHost: drives load, settle and extract for the get-info and clear actions."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from playwright.async_api import Error as PlaywrightError

from pageprobe.bridge.bridge import PageBridge
from pageprobe.config import ProbeConfig
from pageprobe.core.session import CaptureSession
from pageprobe.core.timer import DeferredTimer
from pageprobe.extractors.base import BaseExtractor
from pageprobe.extractors.interactive import STATUS_NO_BRIDGE, InteractiveExtractor
from pageprobe.formatter.display import InfoDisplay
from pageprobe.formatter.formatter import (
    BAD_SCHEME,
    EMPTY_URL,
    INITIAL_PROMPT,
    LOADING,
    RECAPTURING,
)

logger = logging.getLogger(__name__)

_SCHEMES = ("http://", "https://")


class BrowserLike(Protocol):
    """The slice of BrowserComponent the host needs."""

    def load(self, url: str) -> None: ...

    async def load_blank(self) -> None: ...

    async def clear_history(self) -> None: ...

    async def ensure_bridge(self) -> None: ...

    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...


class CaptureHost:
    """
    Owns the CaptureSession and sequences user actions.

    Usage:
        host = CaptureHost(browser)
        await browser.install_bridge(host.bridge)
        host.get_info("https://example.com")
        await host.timer.wait_idle()
        print(host.display.text)
    """

    def __init__(
        self,
        browser: BrowserLike,
        *,
        config: ProbeConfig | None = None,
        extractor: BaseExtractor | None = None,
        display: InfoDisplay | None = None,
    ) -> None:
        self.config = config or ProbeConfig()
        self.browser = browser
        self.session = CaptureSession()
        self.display = display or InfoDisplay()
        self.bridge = PageBridge(
            self.session,
            self.display,
            max_payload_chars=self.config.max_payload_chars,
            max_error_chars=self.config.max_error_chars,
        )
        self.extractor = extractor or InteractiveExtractor()
        self.timer = DeferredTimer()

    def get_info(self, text: str) -> bool:
        """
        Handle the get-info action. Returns False when the URL is rejected.

        A new URL resets the session, loads it and captures after the long
        settle delay. The same URL re-captures the current DOM after the short
        one, which is how pages reached inside a single-page app are collected.
        """
        url = text.strip()
        if not url:
            logger.info("Rejected empty URL")
            self.display.show(EMPTY_URL)
            return False
        if not url.startswith(_SCHEMES):
            logger.info("Rejected URL without http(s) scheme: %s", url)
            self.display.show(BAD_SCHEME)
            return False

        if url != self.session.current_url:
            self.session.reset(url)
            self.display.show(LOADING)
            self.browser.load(url)
            self.timer.schedule(self.config.new_url_delay_ms, self.extract_page_info)
        else:
            self.display.show(RECAPTURING)
            self.timer.schedule(self.config.repeat_delay_ms, self.extract_page_info)
        return True

    async def clear(self) -> None:
        self.display.show(INITIAL_PROMPT)
        self.session.reset()
        await self.browser.clear_history()
        await self.browser.load_blank()

    async def extract_page_info(self) -> None:
        """
        Run the extractor once; guarantee one displayed outcome.

        Each run carries its own token, so overlapping runs cannot mistake
        each other's bridge calls for their own. A run whose token never came
        back is reported through the error entry point.
        """
        page_number = self.session.next_page_number
        token = self.bridge.issue_token()
        try:
            await self.browser.ensure_bridge()
            status = await self.extractor.run(self.browser, page_number, token)
        except PlaywrightError as exc:
            if self.bridge.claim(token):
                logger.warning("Extraction for page %d raised after delivery: %s", page_number, exc)
            else:
                self.bridge.on_error(exc.message)
            return
        if self.bridge.claim(token):
            return
        if status == STATUS_NO_BRIDGE:
            self.bridge.on_error("page bridge is not available")
        else:
            logger.warning("Extraction for page %d returned %r without reaching the bridge", page_number, status)
            self.bridge.on_error("page info did not reach the host")
