"""Browser session management using patchright.

Rules:
  - Single browser, context and active page per run
  - Synchronous API: one test thread owns the session
  - Everything launched in __enter__ is released in __exit__, on every path
"""

import logging
from types import TracebackType
from typing import Any

from patchright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from careers_e2e.core.config import BrowserConfig, TimeoutsConfig
from careers_e2e.core.errors import SessionError

logger = logging.getLogger(__name__)

CHROME_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-infobars",
    "--disable-extensions",
)


def launch_args(config: BrowserConfig) -> list[str]:
    """Chromium command-line flags for ``config``."""
    return [*CHROME_ARGS, f"--window-size={config.window_size}"]


def launch_options(config: BrowserConfig) -> dict[str, Any]:
    """Keyword arguments for ``chromium.launch``."""
    options: dict[str, Any] = {"headless": config.headless, "args": launch_args(config)}
    if config.name == "chrome":
        options["channel"] = "chrome"
    return options


class BrowserSession:
    """Context manager that owns one patchright browser + context + page.

    Usage::

        with BrowserSession(settings.browser, settings.timeouts) as session:
            session.navigate("https://...")
    """

    def __init__(self, config: BrowserConfig, timeouts: TimeoutsConfig | None = None) -> None:
        self._config = config
        self._timeouts = timeouts or TimeoutsConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        """The active page for this session. Raises if not entered."""
        if self._page is None:
            msg = "BrowserSession not entered; use 'with'"
            raise RuntimeError(msg)
        return self._page

    def __enter__(self) -> "BrowserSession":
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(**launch_options(self._config))
            self._context = self._browser.new_context(viewport=self._config.viewport)
            self._context.set_default_timeout(self._timeouts.implicit_wait * 1000)
            self._context.set_default_navigation_timeout(self._timeouts.page_load_timeout * 1000)
            self._page = self._context.new_page()
        except Exception as e:
            logger.error("Failed to initialize browser '%s': %s", self._config.name, e)
            self.close()
            raise SessionError("INITIALIZATION", str(e)) from e

        logger.info(
            "Browser initialized: %s (headless=%s, window=%s)",
            self._config.name, self._config.headless, self._config.window_size,
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release context, browser and driver. Errors are logged, not raised."""
        for name, resource in (
            ("context", self._context),
            ("browser", self._browser),
        ):
            if resource is None:
                continue
            try:
                resource.close()
            except Exception:
                logger.warning("Error while closing %s", name, exc_info=True)
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception:
                logger.warning("Error while stopping patchright", exc_info=True)
            else:
                logger.info("Browser session closed")
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None

    def navigate(self, url: str) -> None:
        try:
            self.page.goto(url, wait_until="domcontentloaded")
        except Exception as e:
            logger.error("Failed to navigate to: %s", url)
            raise SessionError("NAVIGATION", f"{url}: {e}") from e
        logger.info("Navigated to: %s", url)

    def open_pages(self) -> list[Page]:
        if self._context is None:
            return []
        return list(self._context.pages)

    def switch_to_latest_page(self) -> Page:
        """Make the most recently opened tab the active page."""
        pages = self.open_pages()
        if not pages:
            msg = "no open pages to switch to"
            raise SessionError("SWITCH_TAB", msg)
        latest = pages[-1]
        if latest is not self._page:
            latest.bring_to_front()
            self._page = latest
            logger.info("Switched to new tab: %s", latest.url)
        return latest
