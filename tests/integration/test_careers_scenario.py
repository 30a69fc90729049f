"""Integration test: the full five-step careers scenario over an in-memory site.

Everything below the session is real: locators, wait engine, diagnostics,
interaction layer, filter resolver, page objects and the scenario runner.
Only the browser is faked, and time is driven by a fake clock.
"""

from pathlib import Path

import pytest

from careers_e2e.core.schemas import ScenarioReport, StepStatus
from careers_e2e.pages import selectors
from careers_e2e.scenario.careers import SCENARIO_NAME, build_careers_scenario
from fakes import (
    FakeClock,
    FakeElement,
    FakePage,
    FakeSession,
    job_card,
    make_settings,
    populate_insider_site,
    sel,
)

JOBS = [
    ("Senior Software Quality Assurance Engineer", "Quality Assurance", "Istanbul, Turkey"),
    ("Software Quality Assurance Engineer (Remote)", "Quality Assurance", "Istanbul, Turkey"),
    ("Quality Assurance Engineer - Testinium", "Quality Assurance", "Istanbul, Turkey"),
]
STEP_NAMES = [
    "home_page",
    "career_sections",
    "qa_jobs_filtering",
    "job_data_validation",
    "view_role_redirect",
]


class Harness:
    def __init__(self, tmp_path: Path) -> None:
        self.page = FakePage()
        self.session = FakeSession(self.page)
        self.settings = make_settings(tmp_path)
        self.lever = populate_insider_site(self.page, self.session, self.settings, JOBS)
        self.clock = FakeClock()
        self.screenshots_dir = tmp_path / "shots"

    def run(self) -> ScenarioReport:
        runner = build_careers_scenario(
            self.session, self.settings, clock=self.clock, sleep=self.clock.sleep,
        )
        return runner.run()


@pytest.fixture()
def harness(tmp_path: Path) -> Harness:
    return Harness(tmp_path)


# ---------------------------------------------------------------------------
# TestHappyPath
# ---------------------------------------------------------------------------


class TestHappyPath:
    def test_all_five_steps_pass(self, harness: Harness) -> None:
        report = harness.run()
        assert report.name == SCENARIO_NAME
        assert [s.name for s in report.steps] == STEP_NAMES
        assert report.passed, report.first_failure
        assert harness.session.page is harness.lever
        assert not harness.screenshots_dir.exists()

    def test_navigation_order(self, harness: Harness) -> None:
        harness.run()
        urls = harness.settings.urls
        assert harness.session.navigations == [urls.base, urls.qa_careers]

    def test_filters_applied_with_configured_values(self, harness: Harness) -> None:
        harness.run()
        location = harness.page.elements[sel(selectors.LOCATION_FILTER_CONTROL)][0]
        department = harness.page.elements[sel(selectors.DEPARTMENT_FILTER_CONTROL)][0]
        assert location.selected_labels == ["Istanbul, Turkey"]
        assert department.selected_labels == ["Quality Assurance"]

    def test_filter_fallback_path(self, harness: Harness) -> None:
        """Markup without a native select still filters through the text match."""
        harness.page.remove(sel(selectors.LOCATION_FILTER_CONTROL))
        link = harness.page.add(
            sel(selectors.FILTER_FALLBACK_OPTION, value="Istanbul, Turkey"),
            FakeElement("a", "Istanbul, Turkey"),
        )
        report = harness.run()
        assert report.passed, report.first_failure
        assert link.clicks == 1


# ---------------------------------------------------------------------------
# TestFailFast
# ---------------------------------------------------------------------------


class TestFailFast:
    def test_row_mismatch_fails_step_four_and_skips_five(self, harness: Harness) -> None:
        cards = sel(selectors.JOB_CARD)
        harness.page.elements[cards][2] = job_card(
            "Quality Assurance Engineer - Testinium", "Quality Assurance", "Ankara, Turkey",
        )
        report = harness.run()
        statuses = [s.status for s in report.steps]
        assert statuses == [StepStatus.PASSED] * 3 + [StepStatus.FAILED, StepStatus.SKIPPED]

        failed = report.steps[3]
        assert "Job 3 location does not contain expected text" in failed.reason
        assert "Expected: Istanbul, Turkey, Actual: Ankara, Turkey" in failed.reason
        assert len(failed.screenshots) == 1
        assert Path(failed.screenshots[0]).exists()
        assert report.steps[4].reason == "Skipped: depends on step 4 (job_data_validation) which failed"
        assert harness.lever.brought_to_front == 0

    def test_missing_section_fails_step_two(self, harness: Harness) -> None:
        harness.page.remove(sel(selectors.CAREERS_LOCATIONS_SECTION))
        report = harness.run()
        failed = report.first_failure
        assert failed is not None
        assert failed.index == 2
        assert "Careers Page - Section: Locations Section" in failed.reason
        assert any(c.startswith("InteractionError") for c in failed.causes)
        assert failed.screenshots == [str(p) for p in sorted(harness.screenshots_dir.iterdir())]
        assert [s.status for s in report.steps[2:]] == [StepStatus.SKIPPED] * 3

    def test_no_jobs_after_filtering(self, harness: Harness) -> None:
        harness.page.remove(sel(selectors.JOB_CARD))
        report = harness.run()
        failed = report.first_failure
        assert failed is not None
        assert failed.name == "qa_jobs_filtering"
        assert "No job cards found in the job list" in failed.reason
