"""Tests for the fail-fast scenario runner and failure reporting."""

from collections.abc import Callable

import pytest

from careers_e2e.core.errors import InteractionError, InteractionKind, PageVerificationError, cause_chain
from careers_e2e.core.schemas import StepStatus
from careers_e2e.scenario.runner import ScenarioRunner, Step, describe_failure


def _ok() -> None:
    pass


def _fail_with_chain() -> None:
    try:
        try:
            raise TimeoutError("no element")
        except TimeoutError as e:
            raise InteractionError(InteractionKind.CLICK, "Careers Link", str(e), "shots/click.png") from e
    except InteractionError as e:
        raise PageVerificationError("Home Page", "Careers Link", str(e), e.screenshot_path) from e


class Recorder:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def step(self, name: str, action: Callable[[], None] = _ok) -> Step:
        def run() -> None:
            self.calls.append(name)
            action()

        return Step(name, f"{name} description", run)


# ---------------------------------------------------------------------------
# TestScenarioRunner
# ---------------------------------------------------------------------------


class TestScenarioRunner:
    def test_all_steps_pass(self) -> None:
        rec = Recorder()
        runner = ScenarioRunner("demo", [rec.step("a"), rec.step("b"), rec.step("c")])
        report = runner.run()
        assert rec.calls == ["a", "b", "c"]
        assert report.passed
        assert [s.status for s in report.steps] == [StepStatus.PASSED] * 3
        assert [s.index for s in report.steps] == [1, 2, 3]
        assert report.finished_at is not None

    def test_failure_skips_the_rest(self) -> None:
        rec = Recorder()
        runner = ScenarioRunner(
            "demo",
            [rec.step("a"), rec.step("b", _fail_with_chain), rec.step("c"), rec.step("d")],
        )
        report = runner.run()
        assert rec.calls == ["a", "b"]
        assert not report.passed
        statuses = [s.status for s in report.steps]
        assert statuses == [StepStatus.PASSED, StepStatus.FAILED, StepStatus.SKIPPED, StepStatus.SKIPPED]
        assert report.steps[2].reason == "Skipped: depends on step 2 (b) which failed"
        assert report.steps[3].reason == "Skipped: depends on step 2 (b) which failed"

    def test_failed_step_keeps_full_cause_chain(self) -> None:
        rec = Recorder()
        runner = ScenarioRunner("demo", [rec.step("open", _fail_with_chain)])
        failure = runner.run().first_failure
        assert failure is not None
        assert failure.reason.startswith("Step 1 failed: open description - PageVerificationError: Home Page - Section: Careers Link")
        assert [c.split(":")[0] for c in failure.causes] == [
            "PageVerificationError", "InteractionError", "TimeoutError",
        ]
        assert failure.screenshots == ["shots/click.png"]

    def test_assertion_error_fails_step(self) -> None:
        def broken() -> None:
            raise AssertionError("Job 3 location does not contain expected text")

        runner = ScenarioRunner("demo", [Step("x", "validate", broken)])
        result = runner.run_step("x")
        assert result.status == StepStatus.FAILED
        assert "Job 3 location" in result.reason

    def test_run_step_runs_predecessors_first(self) -> None:
        rec = Recorder()
        runner = ScenarioRunner("demo", [rec.step("a"), rec.step("b"), rec.step("c")])
        result = runner.run_step("c")
        assert result.status == StepStatus.PASSED
        assert rec.calls == ["a", "b", "c"]

    def test_steps_run_once(self) -> None:
        rec = Recorder()
        runner = ScenarioRunner("demo", [rec.step("a"), rec.step("b")])
        runner.run_step("a")
        runner.run_step("b")
        runner.run()
        assert rec.calls == ["a", "b"]

    def test_skips_name_the_first_failed_step(self) -> None:
        rec = Recorder()
        runner = ScenarioRunner("demo", [rec.step("a", _fail_with_chain), rec.step("b"), rec.step("c")])
        runner.run()
        assert runner.result("b").reason == "Skipped: depends on step 1 (a) which failed"
        assert runner.result("c").reason == "Skipped: depends on step 1 (a) which failed"

    def test_unknown_step(self) -> None:
        runner = ScenarioRunner("demo", [Step("a", "", _ok)])
        with pytest.raises(KeyError):
            runner.run_step("zzz")

    def test_empty_or_duplicate_steps_rejected(self) -> None:
        with pytest.raises(ValueError):
            ScenarioRunner("demo", [])
        with pytest.raises(ValueError, match="unique"):
            ScenarioRunner("demo", [Step("a", "", _ok), Step("a", "", _ok)])

    def test_report_without_steps_is_not_passed(self) -> None:
        runner = ScenarioRunner("demo", [Step("a", "", _ok)])
        assert runner.report.passed is False
        assert runner.report.first_failure is None


# ---------------------------------------------------------------------------
# TestCauseChain
# ---------------------------------------------------------------------------


class TestCauseChain:
    def test_explicit_cause_followed(self) -> None:
        with pytest.raises(PageVerificationError) as exc_info:
            _fail_with_chain()
        chain = cause_chain(exc_info.value)
        assert [type(e).__name__ for e in chain] == [
            "PageVerificationError", "InteractionError", "TimeoutError",
        ]

    def test_implicit_context_followed(self) -> None:
        try:
            try:
                raise KeyError("inner")
            except KeyError:
                raise RuntimeError("outer")
        except RuntimeError as e:
            chain = cause_chain(e)
        assert [type(e).__name__ for e in chain] == ["RuntimeError", "KeyError"]

    def test_suppressed_context_not_followed(self) -> None:
        try:
            try:
                raise KeyError("inner")
            except KeyError:
                raise RuntimeError("outer") from None
        except RuntimeError as e:
            chain = cause_chain(e)
        assert len(chain) == 1

    def test_describe_failure_deduplicates_screenshots(self) -> None:
        with pytest.raises(PageVerificationError) as exc_info:
            _fail_with_chain()
        reason, causes, screenshots = describe_failure(exc_info.value)
        assert reason.count(" <- caused by: ") == 2
        assert len(causes) == 3
        assert screenshots == ["shots/click.png"]
