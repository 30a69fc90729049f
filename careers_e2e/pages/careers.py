"""Careers page object: page checks plus the Locations / Teams / Life at Insider blocks."""

import logging

from careers_e2e.browser.interactions import ElementInteractions
from careers_e2e.browser.locators import NamedTarget, target
from careers_e2e.core.config import Settings
from careers_e2e.pages.base import SessionLike, check, page_step

logger = logging.getLogger(__name__)

PAGE = "Careers Page"


class CareersPage:
    def __init__(self, session: SessionLike, ui: ElementInteractions, settings: Settings) -> None:
        self._session = session
        self._ui = ui
        self._urls = settings.urls
        locators = settings.locators
        self.sections: tuple[NamedTarget, ...] = (
            target(locators.careers_locations_section, "Locations Section"),
            target(locators.careers_teams_section, "Teams Section"),
            target(locators.careers_life_at_insider_section, "Life at Insider Section"),
        )

    def navigate(self) -> None:
        with page_step(self._ui, PAGE, "Navigation", "careers_page_navigation_error"):
            self._session.navigate(self._urls.careers)
            self._ui.wait_for_page_ready()

    def verify_loaded(self) -> None:
        with page_step(self._ui, PAGE, "URL and Title", "careers_page_verification_error"):
            self._ui.wait_for_page_ready()
            url = self._ui.current_url()
            check(
                "careers" in url,
                f"Careers page URL verification failed. Expected to contain 'careers', Actual: {url}",
            )
            title = self._ui.title()
            check(
                "careers" in title.lower(),
                f"Careers page title verification failed. Expected to contain 'careers', Actual: {title}",
            )
        logger.info("ASSERTION: Careers page loaded - URL: %s, Title: %s", url, title)

    def verify_section_displayed(self, section: NamedTarget) -> None:
        """Scroll to ``section``; it must be visible and have text."""
        name = section.display_name
        context = name.lower().replace(" ", "_") + "_error"
        with page_step(self._ui, PAGE, name, context):
            self._ui.scroll_into_view(section)
            check(self._ui.is_displayed(section), f"{name} is not displayed on careers page")
            text = self._ui.read_text(section)
            check(bool(text), f"{name} appears to be empty")
        logger.info("%s content: %s...", name, text[:100])
        logger.info("ASSERTION: %s is displayed and has content", name)

    def verify_all_sections_displayed(self) -> None:
        """Check every section in order; the first failure aborts."""
        for section in self.sections:
            self.verify_section_displayed(section)
        logger.info(
            "ASSERTION: All career page sections (%s) are displayed",
            ", ".join(s.display_name for s in self.sections),
        )
