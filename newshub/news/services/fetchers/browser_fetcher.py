"""
Headless browser fetcher used when a static scrape finds nothing
Each call launches its own Chromium, renders the page and always closes the
browser again, whatever happened in between
"""

from typing import List, Optional

import structlog
from playwright.async_api import (
    Error as PlaywrightError,
    Route,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

logger = structlog.get_logger(__name__)

BLOCKED_RESOURCE_TYPES = frozenset(["image", "font", "stylesheet", "media"])

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class BrowserPageFetcher:

    def __init__(
        self,
        user_agent: str,
        navigation_timeout_seconds: float = 60.0,
        selector_wait_seconds: float = 5.0,
        executable_path: Optional[str] = None,
        launch_args: Optional[List[str]] = None,
    ):
        self.user_agent = user_agent
        self.navigation_timeout_ms = int(navigation_timeout_seconds * 1000)
        self.selector_wait_ms = int(selector_wait_seconds * 1000)
        self.executable_path = executable_path
        self.launch_args = launch_args or CHROMIUM_ARGS

    async def fetch_markup(
        self,
        url: str,
        wait_for_selector: Optional[str] = None,
        source_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Render a page in headless Chromium and return the resulting markup.

        Args:
            url: Page to render
            wait_for_selector: Optional selector to wait for; a timeout here is not fatal
            source_id: Only used for log context

        Returns:
            Rendered HTML, or None if launching or navigating failed
        """
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(
                    headless=True,
                    args=self.launch_args,
                    executable_path=self.executable_path,
                )
                try:
                    context = await browser.new_context(user_agent=self.user_agent)
                    page = await context.new_page()
                    await page.route("**/*", self._block_heavy_resources)

                    logger.info("browser_fetch_started", source_id=source_id, url=url)
                    await page.goto(url, wait_until="domcontentloaded", timeout=self.navigation_timeout_ms)

                    if wait_for_selector:
                        try:
                            await page.wait_for_selector(wait_for_selector, timeout=self.selector_wait_ms)
                        except PlaywrightTimeoutError:
                            logger.info(
                                "browser_selector_wait_timed_out",
                                source_id=source_id,
                                selector=wait_for_selector
                            )

                    markup = await page.content()
                    logger.info("browser_fetch_completed", source_id=source_id, length=len(markup))
                    return markup
                finally:
                    await browser.close()

        except PlaywrightTimeoutError:
            logger.warning("browser_fetch_timed_out", source_id=source_id, url=url, status="timeout")
        except PlaywrightError as e:
            logger.warning("browser_fetch_failed", source_id=source_id, url=url, error=str(e))
        return None

    @staticmethod
    async def _block_heavy_resources(route: Route) -> None:
        if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
            await route.abort()
        else:
            await route.continue_()
