"""Core data models for the careers E2E suite."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class JobRecord(BaseModel):
    """Metadata read from one job card.

    Frozen and transient: rebuilt from the card's sub-locators on every
    validation pass, never cached across interactions.
    """

    model_config = ConfigDict(frozen=True)

    position: str = ""
    department: str = ""
    location: str = ""
    has_view_action: bool = False


class ExpectedJob(BaseModel):
    """Substrings every listed job must contain."""

    model_config = ConfigDict(frozen=True)

    position: str
    department: str
    location: str


class StepStatus(str, Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class StepResult(BaseModel):
    """Outcome of a single scenario step."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)
    name: str
    description: str = ""
    status: StepStatus
    reason: str = ""
    causes: list[str] = Field(default_factory=list)
    screenshots: list[str] = Field(default_factory=list)
    duration_s: float = Field(default=0.0, ge=0.0)


class ScenarioReport(BaseModel):
    """Summary of a scenario run."""

    name: str
    started_at: datetime
    finished_at: datetime | None = None
    steps: list[StepResult] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return bool(self.steps) and all(s.status == StepStatus.PASSED for s in self.steps)

    @property
    def first_failure(self) -> StepResult | None:
        for step in self.steps:
            if step.status == StepStatus.FAILED:
                return step
        return None
