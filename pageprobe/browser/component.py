"""Thin async wrapper around Playwright: the browser widget the host drives."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)
from playwright.async_api import Error as PlaywrightError

from pageprobe.bridge.bridge import (
    BRIDGE_INSTALL_JS,
    ERROR_BINDING,
    PAGE_INFO_BINDING,
    PageBridge,
)
from pageprobe.config import ProbeConfig
from pageprobe.errors import BrowserNotStartedError

logger = logging.getLogger(__name__)

BLANK_URL = "about:blank"


class BrowserComponent:
    """
    Owns a Playwright browser/context/page triple.

    Script execution is enabled; local storage and the HTTP cache keep
    Playwright's defaults, which are both on.
    """

    def __init__(self, config: ProbeConfig | None = None) -> None:
        self.config = config or ProbeConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._navigations: set[asyncio.Task] = set()

    async def __aenter__(self) -> BrowserComponent:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.config.headless)
        self._context = await self._browser.new_context(
            java_script_enabled=True,
            viewport={
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
        )
        self._context.set_default_navigation_timeout(self.config.navigation_timeout_ms)
        self._page = await self._new_page()

    @property
    def page(self) -> Page:
        if self._page is None:
            raise BrowserNotStartedError()
        return self._page

    @property
    def context(self) -> BrowserContext:
        if self._context is None:
            raise BrowserNotStartedError()
        return self._context

    @property
    def url(self) -> str:
        return self.page.url

    async def install_bridge(self, bridge: PageBridge) -> None:
        """Expose the bridge to every page of the context, current and future."""
        await self.context.expose_function(PAGE_INFO_BINDING, bridge.on_page_info)
        await self.context.expose_function(ERROR_BINDING, bridge.on_error)
        await self.context.add_init_script(script=f"({BRIDGE_INSTALL_JS})();")
        await self.ensure_bridge()

    async def ensure_bridge(self) -> None:
        """Install the bridge global into the current document if it is missing."""
        await self.page.evaluate(BRIDGE_INSTALL_JS)

    def load(self, url: str) -> None:
        """Start navigating to url without waiting for it to finish."""
        task = asyncio.get_running_loop().create_task(self._navigate(url))
        self._navigations.add(task)
        task.add_done_callback(self._navigations.discard)

    async def _navigate(self, url: str) -> None:
        try:
            await self.page.goto(url)
        except PlaywrightError as exc:
            # No distinct handling: the next extraction captures whatever loaded.
            logger.warning("Navigation to %s failed: %s", url, exc)

    async def load_blank(self) -> None:
        await self.page.goto(BLANK_URL)

    async def clear_history(self) -> None:
        """Drop back/forward history by replacing the page with a fresh one."""
        old = self.page
        self._page = await self._new_page()
        await old.close()

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        return await self.page.evaluate(expression, arg)

    async def _new_page(self) -> Page:
        page = await self.context.new_page()
        page.on("load", lambda p: logger.debug("Page loaded: %s", p.url))
        return page

    async def close(self) -> None:
        for task in list(self._navigations):
            task.cancel()
        if self._context:
            await self._context.close()
            self._context = None
            self._page = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
