import asyncio
import time

import pytest
from playwright.async_api import Error as PlaywrightError

from painguide.rendering.browser_pool import BrowserPool


class _StubBrowser:
    def __init__(self, connected=True):
        self.connected = connected

    def is_connected(self):
        return self.connected


def test_pool_defaults_come_from_settings():
    pool = BrowserPool()

    assert pool.max_pages == 4
    assert pool.idle_seconds == 300.0
    assert "--no-sandbox" in pool.launch_args


def test_stale_when_missing_or_disconnected():
    pool = BrowserPool()
    assert pool._is_stale()

    pool._browser = _StubBrowser(connected=False)
    assert pool._is_stale()


def test_idle_browser_recycled_only_without_checked_out_pages():
    pool = BrowserPool(idle_seconds=10)
    pool._browser = _StubBrowser()
    pool._last_used = time.monotonic() - 60

    assert pool._is_stale()

    pool._active = 1
    assert not pool._is_stale()

    pool._active = 0
    pool._last_used = time.monotonic()
    assert not pool._is_stale()


def test_page_is_closed_but_browser_survives_errors():
    async def run():
        pool = BrowserPool(max_pages=2)
        try:
            try:
                browser = await pool.get_browser()
            except PlaywrightError as exc:
                pytest.skip(f"Chromium not available: {exc}")
            with pytest.raises(RuntimeError):
                async with pool.page() as page:
                    assert pool.active_pages == 1
                    raise RuntimeError("render failed")
            assert page.is_closed()
            assert pool.active_pages == 0
            assert browser.is_connected()
            async with pool.page() as second:
                assert await second.evaluate("() => 1 + 1") == 2
            assert await pool.get_browser() is browser
        finally:
            await pool.close()

    asyncio.run(run())
