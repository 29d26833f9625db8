"""Process-wide headless Chromium shared by concurrent PDF requests."""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright

from painguide.config import settings

logger = logging.getLogger(__name__)


class BrowserPool:
    """One lazily launched browser handing out exclusive pages.

    At most ``max_pages`` pages exist at once; further callers wait. The
    browser is relaunched when it has disconnected, or when it sat idle
    longer than ``idle_seconds`` while no page was checked out. Callers only
    ever close their own page.
    """

    def __init__(
        self,
        max_pages: Optional[int] = None,
        idle_seconds: Optional[float] = None,
        launch_args: Optional[List[str]] = None,
    ) -> None:
        self.max_pages = max_pages or settings.browser_max_pages
        self.idle_seconds = settings.browser_idle_seconds if idle_seconds is None else idle_seconds
        self.launch_args = list(launch_args if launch_args is not None else settings.browser_args)
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._semaphore = asyncio.Semaphore(self.max_pages)
        self._lock = asyncio.Lock()
        self._active = 0
        self._last_used = 0.0

    @property
    def active_pages(self) -> int:
        return self._active

    def _is_stale(self) -> bool:
        if self._browser is None or not self._browser.is_connected():
            return True
        idle = time.monotonic() - self._last_used
        return self._active == 0 and idle > self.idle_seconds

    async def _launch(self) -> Browser:
        if self._playwright is None:
            self._playwright = await async_playwright().start()
        browser = await self._playwright.chromium.launch(headless=True, args=self.launch_args)
        logger.info("Launched headless Chromium (%s)", browser.version)
        return browser

    async def _close_browser(self) -> None:
        browser, self._browser = self._browser, None
        if browser is not None and browser.is_connected():
            try:
                await browser.close()
            except Exception as exc:
                logger.warning("Error closing stale browser: %s", exc)

    async def get_browser(self) -> Browser:
        async with self._lock:
            if self._is_stale():
                if self._browser is not None:
                    logger.info("Recycling browser (disconnected or idle)")
                await self._close_browser()
                self._browser = await self._launch()
            self._last_used = time.monotonic()
            return self._browser

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Check out a fresh page; it is closed on exit, the browser is not."""
        async with self._semaphore:
            browser = await self.get_browser()
            page = await browser.new_page()
            self._active += 1
            try:
                yield page
            finally:
                self._active -= 1
                self._last_used = time.monotonic()
                try:
                    await page.close()
                except Exception as exc:
                    logger.warning("Error closing page: %s", exc)

    async def close(self) -> None:
        async with self._lock:
            await self._close_browser()
            playwright, self._playwright = self._playwright, None
            if playwright is not None:
                await playwright.stop()
        logger.info("Browser pool closed")
