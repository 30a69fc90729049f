"""Configuration models and YAML loader for the careers E2E suite."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from careers_e2e.browser.locators import Locator
from careers_e2e.core.errors import ConfigurationError
from careers_e2e.core.schemas import ExpectedJob
from careers_e2e.pages import selectors

LocatorValue = str | tuple[str, ...]


def _not_blank(v: str) -> str:
    if not v.strip():
        msg = "must not be empty"
        raise ValueError(msg)
    return v.strip()


class UrlsConfig(BaseModel):
    """Site entry points and the domains used to verify where we landed."""

    base: str
    careers: str
    qa_careers: str
    home_domain: str = "useinsider.com"
    application_domain: str = "jobs.lever.co"

    @field_validator("*")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _not_blank(v)


class FiltersConfig(BaseModel):
    """Values applied to the job listing filters."""

    location: str
    department: str

    @field_validator("*")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _not_blank(v)


class ExpectedConfig(BaseModel):
    """Substrings every filtered job must contain."""

    position: str
    department: str
    location: str

    @field_validator("*")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _not_blank(v)


class TimeoutsConfig(BaseModel):
    """Durations. Waits are whole seconds, like the original properties file."""

    implicit_wait: int = Field(default=10, gt=0)
    explicit_wait: int = Field(default=15, gt=0)
    page_load_timeout: int = Field(default=30, gt=0)
    poll_interval_ms: int = Field(default=500, gt=0)
    filter_settle_s: float = Field(default=2.0, ge=0.0)
    hover_settle_s: float = Field(default=1.0, ge=0.0)

    @model_validator(mode="after")
    def poll_below_timeout(self) -> "TimeoutsConfig":
        if self.poll_interval_ms >= self.explicit_wait * 1000:
            msg = "poll_interval_ms must be smaller than explicit_wait"
            raise ValueError(msg)
        return self


class BrowserConfig(BaseModel):
    """Browser session configuration."""

    name: str = "chrome"
    headless: bool = False
    window_size: str = "1920,1080"

    @field_validator("name")
    @classmethod
    def supported_browser(cls, v: str) -> str:
        name = v.strip().lower()
        if name not in ("chrome", "chromium"):
            msg = f"unsupported browser '{v}' (supported: chrome, chromium)"
            raise ValueError(msg)
        return name

    @field_validator("window_size")
    @classmethod
    def window_size_format(cls, v: str) -> str:
        parts = [p.strip() for p in v.replace("x", ",").split(",")]
        if len(parts) != 2 or not all(p.isdigit() and int(p) > 0 for p in parts):
            msg = f"window_size must look like '1920,1080', got '{v}'"
            raise ValueError(msg)
        return f"{parts[0]},{parts[1]}"

    @property
    def viewport(self) -> dict[str, int]:
        width, height = self.window_size.split(",")
        return {"width": int(width), "height": int(height)}


class DiagnosticsConfig(BaseModel):
    screenshots_dir: str = "screenshots"


class LocatorsConfig(BaseModel):
    """Locator overrides; defaults come from ``careers_e2e.pages.selectors``."""

    home_company_menu: LocatorValue = selectors.HOME_COMPANY_MENU
    home_careers_link: LocatorValue = selectors.HOME_CAREERS_LINK
    careers_locations_section: LocatorValue = selectors.CAREERS_LOCATIONS_SECTION
    careers_teams_section: LocatorValue = selectors.CAREERS_TEAMS_SECTION
    careers_life_at_insider_section: LocatorValue = selectors.CAREERS_LIFE_AT_INSIDER_SECTION
    qa_see_all_jobs_button: LocatorValue = selectors.QA_SEE_ALL_JOBS_BUTTON
    location_filter_control: LocatorValue = selectors.LOCATION_FILTER_CONTROL
    department_filter_control: LocatorValue = selectors.DEPARTMENT_FILTER_CONTROL
    location_filter_option: LocatorValue = selectors.LOCATION_FILTER_OPTION
    department_filter_option: LocatorValue = selectors.DEPARTMENT_FILTER_OPTION
    filter_fallback_option: LocatorValue = selectors.FILTER_FALLBACK_OPTION
    job_list_container: LocatorValue = selectors.JOB_LIST_CONTAINER
    job_card: LocatorValue = selectors.JOB_CARD
    job_position: LocatorValue = selectors.JOB_POSITION
    job_department: LocatorValue = selectors.JOB_DEPARTMENT
    job_location: LocatorValue = selectors.JOB_LOCATION
    view_role_button: LocatorValue = selectors.VIEW_ROLE_BUTTON
    loading_indicator: LocatorValue = selectors.LOADING_INDICATOR
    application_form: LocatorValue = selectors.APPLICATION_FORM

    @field_validator("*")
    @classmethod
    def parseable(cls, v: LocatorValue) -> LocatorValue:
        Locator.parse(v)
        return v

    @model_validator(mode="after")
    def templates_have_value_slot(self) -> "LocatorsConfig":
        for name in ("location_filter_option", "department_filter_option", "filter_fallback_option"):
            slots = Locator.parse(getattr(self, name)).param_slots
            if slots != ("value",):
                msg = f"{name} must contain exactly one '{{value}}' slot"
                raise ValueError(msg)
        return self


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    urls: UrlsConfig
    filters: FiltersConfig
    expected: ExpectedConfig
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)
    locators: LocatorsConfig = Field(default_factory=LocatorsConfig)

    @property
    def expected_job(self) -> ExpectedJob:
        return ExpectedJob(
            position=self.expected.position,
            department=self.expected.department,
            location=self.expected.location,
        )

    @classmethod
    def from_mapping(cls, raw: Any) -> "Settings":
        """Validate a parsed mapping; errors name the offending dotted key."""
        if not isinstance(raw, dict):
            msg = f"expected a mapping at the top level, got {type(raw).__name__}"
            raise ConfigurationError("<root>", msg)
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"]) or "<root>"
            message = "required key is missing" if first["type"] == "missing" else first["msg"]
            raise ConfigurationError(key, message) from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: Any = yaml.safe_load(path.read_text()) or {}
        return cls.from_mapping(raw)
