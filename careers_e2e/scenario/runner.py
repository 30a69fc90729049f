"""Fail-fast runner for ordered, dependent scenario steps.

Each step consumes the postcondition of the one before it, so once a step
fails every later step is reported SKIPPED instead of being run.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from careers_e2e.core.errors import cause_chain
from careers_e2e.core.schemas import ScenarioReport, StepResult, StepStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    name: str
    description: str
    action: Callable[[], None]


def describe_failure(error: BaseException) -> tuple[str, list[str], list[str]]:
    """Human-readable reason, cause messages and screenshot paths for ``error``."""
    causes: list[str] = []
    screenshots: list[str] = []
    for err in cause_chain(error):
        causes.append(f"{type(err).__name__}: {err}")
        path = getattr(err, "screenshot_path", None)
        if path and path not in screenshots:
            screenshots.append(path)
    reason = " <- caused by: ".join(causes)
    return reason, causes, screenshots


class ScenarioRunner:
    """Runs steps in order and records a StepResult for each."""

    def __init__(self, name: str, steps: list[Step]) -> None:
        if not steps:
            msg = "a scenario needs at least one step"
            raise ValueError(msg)
        names = [s.name for s in steps]
        if len(set(names)) != len(names):
            msg = f"step names must be unique: {names}"
            raise ValueError(msg)
        self.name = name
        self.steps = steps
        self.report = ScenarioReport(name=name, started_at=datetime.now())
        self._results: dict[str, StepResult] = {}

    def run(self) -> ScenarioReport:
        """Run every step not yet run, in order."""
        logger.info("========== STARTING SCENARIO: %s ==========", self.name)
        for step in self.steps:
            if step.name not in self._results:
                self.run_step(step.name)
        self.report.finished_at = datetime.now()
        outcome = "PASSED" if self.report.passed else "FAILED"
        logger.info("========== COMPLETED SCENARIO: %s (%s) ==========", self.name, outcome)
        return self.report

    def run_step(self, name: str) -> StepResult:
        """Run one step, honouring the dependency chain.

        A step whose predecessors have not all passed is recorded as SKIPPED;
        predecessors that were never run are run first.
        """
        if name in self._results:
            return self._results[name]
        index = self._index_of(name)
        step = self.steps[index]

        for earlier in self.steps[:index]:
            result = self.run_step(earlier.name)
            if result.status != StepStatus.PASSED:
                return self._record(StepResult(
                    index=index + 1,
                    name=step.name,
                    description=step.description,
                    status=StepStatus.SKIPPED,
                    reason=f"Skipped: depends on step {result.index} ({result.name}) which {result.status.value.lower()}",
                ))

        logger.info("STEP %d: %s", index + 1, step.description)
        started = time.monotonic()
        try:
            step.action()
        except Exception as e:
            duration = time.monotonic() - started
            reason, causes, screenshots = describe_failure(e)
            logger.error("Step %d failed: %s - %s", index + 1, step.name, reason, exc_info=True)
            return self._record(StepResult(
                index=index + 1,
                name=step.name,
                description=step.description,
                status=StepStatus.FAILED,
                reason=f"Step {index + 1} failed: {step.description} - {reason}",
                causes=causes,
                screenshots=screenshots,
                duration_s=duration,
            ))

        duration = time.monotonic() - started
        logger.info("ASSERTION: %s - Step %d PASSED (%.1fs)", step.description, index + 1, duration)
        return self._record(StepResult(
            index=index + 1,
            name=step.name,
            description=step.description,
            status=StepStatus.PASSED,
            duration_s=duration,
        ))

    def result(self, name: str) -> StepResult | None:
        return self._results.get(name)

    def _index_of(self, name: str) -> int:
        for i, step in enumerate(self.steps):
            if step.name == name:
                return i
        msg = f"unknown step '{name}'"
        raise KeyError(msg)

    def _record(self, result: StepResult) -> StepResult:
        self._results[result.name] = result
        self.report.steps = sorted(self._results.values(), key=lambda r: r.index)
        return result
