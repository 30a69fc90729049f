"""Home page object."""

import logging

from careers_e2e.browser.interactions import ElementInteractions
from careers_e2e.browser.locators import target
from careers_e2e.core.config import Settings
from careers_e2e.core.errors import InteractionError
from careers_e2e.pages.base import SessionLike, check, page_step

logger = logging.getLogger(__name__)

PAGE = "Home Page"
COMPANY_MENU = "Company Menu"
CAREERS_LINK = "Careers Link"


class HomePage:
    def __init__(self, session: SessionLike, ui: ElementInteractions, settings: Settings) -> None:
        self._session = session
        self._ui = ui
        self._urls = settings.urls
        self._hover_settle_s = settings.timeouts.hover_settle_s
        self.company_menu = target(settings.locators.home_company_menu, COMPANY_MENU)
        self.careers_link = target(settings.locators.home_careers_link, CAREERS_LINK)

    def navigate(self) -> None:
        with page_step(self._ui, PAGE, "Navigation", "home_page_navigation_error"):
            self._session.navigate(self._urls.base)
            self._ui.wait_for_page_ready()

    def verify_loaded(self) -> None:
        with page_step(self._ui, PAGE, "Page Load", "home_page_verification_error"):
            self._ui.wait_for_page_ready()
            url = self._ui.current_url()
            check(
                self._urls.home_domain in url,
                f"Home page URL verification failed. Expected to contain "
                f"'{self._urls.home_domain}', Actual: {url}",
            )
            title = self._ui.title()
            check(bool(title.strip()), "Home page title is empty")
        logger.info("ASSERTION: Home page loaded - URL: %s, Title: %s", url, title)

    def is_company_menu_displayed(self) -> bool:
        return self._ui.is_displayed(self.company_menu)

    def _hover_menu(self) -> None:
        """Hover the Company menu and give its dropdown time to open.

        Only used inside probes, so failures are not captured.
        """
        self._ui.scroll_into_view(self.company_menu, capture=False)
        menu = self._ui.wait_visible(self.company_menu, capture=False)
        self._ui.hover(menu, COMPANY_MENU, capture=False)
        self._ui.pause(self._hover_settle_s)

    def is_careers_link_displayed(self) -> bool:
        """Hover the Company menu, then probe for the Careers link."""
        try:
            self._hover_menu()
        except InteractionError:
            logger.warning("Careers link not displayed after hovering %s", COMPANY_MENU)
            return False
        return self._ui.is_displayed(self.careers_link)

    def open_careers(self) -> None:
        """Company menu > Careers."""
        with page_step(self._ui, PAGE, CAREERS_LINK, "careers_link_click_error"):
            check(
                self.is_company_menu_displayed(),
                "Company menu is not displayed, cannot click Careers link",
            )
            check(
                self.is_careers_link_displayed(),
                "Careers link is not displayed after hovering over Company menu",
            )
            self._ui.click(self.careers_link)
            self._ui.wait_for_page_ready()
        logger.info("Navigated to Careers page: %s", self._ui.current_url())
