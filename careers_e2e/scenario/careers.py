"""The Insider careers scenario: five dependent steps from home page to Lever form."""

import logging
from dataclasses import dataclass
from typing import Any

from careers_e2e.browser.diagnostics import DiagnosticsCapturer
from careers_e2e.browser.interactions import ElementInteractions
from careers_e2e.browser.waits import WaitEngine, WaitSpec
from careers_e2e.core.config import Settings
from careers_e2e.pages.base import SessionLike
from careers_e2e.pages.careers import CareersPage
from careers_e2e.pages.home import HomePage
from careers_e2e.pages.qa_careers import QACareersPage
from careers_e2e.scenario.runner import ScenarioRunner, Step

logger = logging.getLogger(__name__)

SCENARIO_NAME = "Insider Careers Test"


def build_interactions(page: Any, settings: Settings, **kwargs: Any) -> ElementInteractions:
    """Wire wait engine, diagnostics and interaction layer for ``page``.

    Extra keyword arguments (``clock``, ``sleep``) go to the wait engine; a
    ``sleep`` is shared with the interaction layer's pauses.
    """
    timeouts = settings.timeouts
    spec = WaitSpec(
        timeout_ms=timeouts.explicit_wait * 1000,
        poll_interval_ms=timeouts.poll_interval_ms,
    )
    waits = WaitEngine(page, spec, **kwargs)
    diagnostics = DiagnosticsCapturer(page, settings.diagnostics.screenshots_dir)
    extra = {"sleep": kwargs["sleep"]} if "sleep" in kwargs else {}
    return ElementInteractions(
        page,
        waits,
        diagnostics,
        page_load_timeout_ms=timeouts.page_load_timeout * 1000,
        **extra,
    )


@dataclass
class CareersPages:
    ui: ElementInteractions
    home: HomePage
    careers: CareersPage
    qa: QACareersPage


def build_pages(session: SessionLike, settings: Settings, **kwargs: Any) -> CareersPages:
    ui = build_interactions(session.page, settings, **kwargs)
    return CareersPages(
        ui=ui,
        home=HomePage(session, ui, settings),
        careers=CareersPage(session, ui, settings),
        qa=QACareersPage(session, ui, settings),
    )


def build_careers_scenario(
    session: SessionLike, settings: Settings, **kwargs: Any,
) -> ScenarioRunner:
    """Assemble the five-step scenario against an entered browser session."""
    pages = build_pages(session, settings, **kwargs)
    home, careers, qa = pages.home, pages.careers, pages.qa

    def open_home() -> None:
        home.navigate()
        home.verify_loaded()

    def verify_careers() -> None:
        home.open_careers()
        careers.verify_loaded()
        careers.verify_all_sections_displayed()

    def filter_qa_jobs() -> None:
        qa.navigate()
        qa.show_all_jobs()
        qa.apply_filters(settings.filters.location, settings.filters.department)
        count = qa.verify_job_list_displayed()
        logger.info("Found %d jobs after applying filters", count)

    def validate_jobs() -> None:
        qa.validate_all_rows(settings.expected_job)

    def view_role() -> None:
        qa.click_first_available_action()
        qa.verify_application_redirect()

    steps = [
        Step("home_page", "Navigate to Insider home page and verify it is opened", open_home),
        Step(
            "career_sections",
            "Navigate to Careers page and verify Locations, Teams and Life at Insider sections",
            verify_careers,
        ),
        Step(
            "qa_jobs_filtering",
            "Navigate to QA careers page, apply filters and verify job list",
            filter_qa_jobs,
        ),
        Step(
            "job_data_validation",
            "Validate all jobs contain expected position, department and location",
            validate_jobs,
        ),
        Step(
            "view_role_redirect",
            "Click View Role button and verify Lever application redirect",
            view_role,
        ),
    ]
    return ScenarioRunner(SCENARIO_NAME, steps)
