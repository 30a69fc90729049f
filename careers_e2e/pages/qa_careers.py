"""QA careers page object: job listing, filters, row validation, View Role redirect.

Job cards are re-queried on every access. Filtering re-renders the list, so
element handles from an earlier query can go stale.
"""

import logging
from typing import Any
from urllib.parse import urlparse

from careers_e2e.browser.filters import FilterControl, FilterResolver
from careers_e2e.browser.interactions import SCROLL_INTO_VIEW_JS, ElementInteractions
from careers_e2e.browser.locators import Locator, target
from careers_e2e.browser.waits import WaitCondition
from careers_e2e.core.config import Settings
from careers_e2e.core.errors import FilterKind, RowMismatchError, WaitTimeoutError
from careers_e2e.core.schemas import ExpectedJob, JobRecord
from careers_e2e.pages.base import SessionLike, check, page_step

logger = logging.getLogger(__name__)

PAGE = "QA Careers Page"
SEE_ALL_QA_JOBS_BUTTON = "See All QA Jobs Button"
JOB_LIST_CONTAINER = "Job List Container"
JOB_CARD = "Job Card"
VIEW_ROLE_BUTTON = "View Role Button"
APPLICATION_FORM = "Lever Application Form"


class QACareersPage:
    def __init__(
        self,
        session: SessionLike,
        ui: ElementInteractions,
        settings: Settings,
        resolver: FilterResolver | None = None,
    ) -> None:
        self._session = session
        self._ui = ui
        self._urls = settings.urls
        loc = settings.locators

        self.loading_indicator = target(loc.loading_indicator, "Loading Indicator")
        self._resolver = resolver or FilterResolver(
            ui,
            settle_delay_s=settings.timeouts.filter_settle_s,
            loading_indicator=self.loading_indicator,
        )

        self.see_all_jobs_button = target(loc.qa_see_all_jobs_button, SEE_ALL_QA_JOBS_BUTTON)
        self.job_list = target(loc.job_list_container, JOB_LIST_CONTAINER)
        self.job_card = target(loc.job_card, JOB_CARD)
        self.application_form = target(loc.application_form, APPLICATION_FORM)
        self._position = Locator.parse(loc.job_position)
        self._department = Locator.parse(loc.job_department)
        self._location = Locator.parse(loc.job_location)
        self._view_role = Locator.parse(loc.view_role_button)

        fallback = loc.filter_fallback_option
        self.location_filter = FilterControl(
            kind=FilterKind.LOCATION,
            control=target(loc.location_filter_control, "Location Filter Dropdown"),
            option=target(loc.location_filter_option, "Location Option"),
            fallback=target(fallback, "Alternative Location Filter"),
        )
        self.department_filter = FilterControl(
            kind=FilterKind.DEPARTMENT,
            control=target(loc.department_filter_control, "Department Filter Dropdown"),
            option=target(loc.department_filter_option, "Department Option"),
            fallback=target(fallback, "Alternative Department Filter"),
        )

    # --- navigation ---

    def navigate(self) -> None:
        with page_step(self._ui, PAGE, "Navigation", "qa_careers_navigation_error"):
            self._session.navigate(self._urls.qa_careers)
            self._ui.wait_for_page_ready()

    def verify_loaded(self) -> None:
        expected_path = urlparse(self._urls.qa_careers).path.rstrip("/")
        with page_step(self._ui, PAGE, "Page Load", "qa_careers_verification_error"):
            self._ui.wait_for_page_ready()
            url = self._ui.current_url()
            check(
                expected_path in url,
                f"QA careers page URL verification failed. Expected to contain "
                f"'{expected_path}', Actual: {url}",
            )
            check(bool(self._ui.title().strip()), "QA careers page title is empty")

    def show_all_jobs(self) -> None:
        """Click "See all QA jobs"."""
        with page_step(self._ui, PAGE, SEE_ALL_QA_JOBS_BUTTON, "see_all_qa_jobs_error"):
            self._ui.scroll_into_view(self.see_all_jobs_button)
            self._ui.click(self.see_all_jobs_button)
            self._ui.wait_for_page_ready()
        logger.info("Clicked on 'See all QA jobs' button")

    # --- filters ---

    def apply_filters(self, location: str, department: str) -> None:
        """Location first, then department."""
        logger.info("Applying job filters...")
        with page_step(self._ui, PAGE, "Job Filters", "job_filters_error"):
            self._resolver.apply(self.location_filter, location)
            self._resolver.apply(self.department_filter, department)
        logger.info("Applied location '%s' and department '%s' filters", location, department)

    # --- job list ---

    def job_cards(self) -> list[Any]:
        """Fresh query of the job cards; waits for the list container first."""
        self._ui.wait_visible(self.job_list)
        cards = self._ui.find_all(self.job_card)
        logger.debug("Found %d job cards", len(cards))
        return cards

    def job_count(self) -> int:
        return len(self.job_cards())

    def verify_job_list_displayed(self) -> int:
        """The job list must be visible and hold at least one card. Returns the count."""
        with page_step(self._ui, PAGE, JOB_LIST_CONTAINER, "job_list_verification_error"):
            self._ui.wait_until_hidden(self.loading_indicator)
            check(
                self._ui.is_displayed(self.job_list),
                "Job list is not displayed after applying filters",
            )
            count = self.job_count()
            check(count > 0, "No job cards found in the job list")
        logger.info("ASSERTION: Job list is displayed with %d job cards", count)
        return count

    def read_job(self, index: int) -> JobRecord:
        """Read the card at zero-based ``index`` from a fresh query."""
        cards = self._ui.find_all(self.job_card)
        if index >= len(cards):
            msg = f"job card {index + 1} no longer present ({len(cards)} cards listed)"
            raise IndexError(msg)
        card = cards[index]
        return JobRecord(
            position=_sub_text(card, self._position),
            department=_sub_text(card, self._department),
            location=_sub_text(card, self._location),
            has_view_action=_sub_element(card, self._view_role) is not None,
        )

    def validate_all_rows(self, expected: ExpectedJob) -> int:
        """Every job must contain the expected position, department and location.

        Raises on the first mismatch; the cause is a RowMismatchError carrying
        the 1-based row number. Returns the number of rows validated.
        """
        with page_step(self._ui, PAGE, "Job Data", "job_data_validation_error"):
            total = self.job_count()
            check(total > 0, "No job cards found for validation")
            for index in range(total):
                row = index + 1
                job = self.read_job(index)
                for field, want, got in (
                    ("position", expected.position, job.position),
                    ("department", expected.department, job.department),
                    ("location", expected.location, job.location),
                ):
                    if want not in got:
                        raise RowMismatchError(row, field, want, got)
                logger.info(
                    "Job %d validation passed - Position: %s, Department: %s, Location: %s",
                    row, job.position, job.department, job.location,
                )
        logger.info(
            "ASSERTION: All %d jobs validated. Position contains '%s', Department "
            "contains '%s', Location contains '%s'",
            total, expected.position, expected.department, expected.location,
        )
        return total

    # --- View Role ---

    def click_first_available_action(self) -> int:
        """Click View Role on the first card that has one. Returns its 1-based row."""
        with page_step(self._ui, PAGE, VIEW_ROLE_BUTTON, "view_role_click_error"):
            total = self.job_count()
            check(total > 0, "No job cards available to click View Role button")
            for index in range(total):
                cards = self._ui.find_all(self.job_card)
                if index >= len(cards):
                    break
                if self._try_click_view_role(cards[index], index + 1):
                    return index + 1
            msg = "No View Role button found in any job card"
            raise AssertionError(msg)

    def _try_click_view_role(self, card: Any, row: int) -> bool:
        button = _sub_element(card, self._view_role)
        if button is None:
            logger.warning("View Role button not found for job %d, trying next job", row)
            return False
        pages_before = len(self._session.open_pages())
        try:
            button.evaluate(SCROLL_INTO_VIEW_JS)
            button.click()
        except Exception as e:
            logger.warning("View Role click failed for job %d (%s), trying next job", row, e)
            return False
        logger.info("Clicked View Role button for job %d", row)
        self._follow_redirect(pages_before)
        return True

    def _follow_redirect(self, pages_before: int) -> None:
        """Wait for the redirect; switch tabs if View Role opened a new one."""
        domain = self._urls.application_domain

        def redirected(_page: Any) -> bool:
            return len(self._session.open_pages()) > pages_before or domain in self._ui.current_url()

        try:
            self._ui.waits.wait_for(
                redirected,
                self._ui.waits.spec(WaitCondition.CUSTOM_PREDICATE),
                description="View Role redirect",
            )
        except WaitTimeoutError:
            logger.warning("No redirect observed after View Role click")
            return
        if len(self._session.open_pages()) > pages_before:
            self._ui.page = self._session.switch_to_latest_page()

    def verify_application_redirect(self) -> None:
        domain = self._urls.application_domain
        with page_step(self._ui, PAGE, APPLICATION_FORM, "lever_redirect_error"):
            self._ui.wait_for_page_ready()
            url = self._ui.current_url()
            check(
                domain in url,
                f"Not redirected to Lever application form. Expected URL to contain "
                f"'{domain}', Actual: {url}",
            )
            check(
                self._ui.is_displayed(self.application_form),
                "Lever application form is not displayed",
            )
        logger.info("ASSERTION: Redirected to Lever application form: %s", url)


def _sub_element(card: Any, locator: Locator) -> Any:
    for candidate in locator.candidates():
        element = card.query_selector(candidate.selector())
        if element is not None:
            return element
    return None


def _sub_text(card: Any, locator: Locator) -> str:
    element = _sub_element(card, locator)
    if element is None:
        return ""
    return str(element.inner_text() or "").strip()

