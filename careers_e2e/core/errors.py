"""Error taxonomy for the careers E2E suite.

Propagation (low to high):
  WaitTimeoutError        raised by the wait engine
  InteractionError        interaction layer, wraps the wait error as __cause__
  FilterApplicationError  both filter tiers failed
  PageVerificationError   page object, carries page/section context
The scenario runner turns any of these into a failed step report.
"""

from enum import Enum


class InteractionKind(str, Enum):
    CLICK = "CLICK"
    JS_CLICK = "JS_CLICK"
    GET_TEXT = "GET_TEXT"
    SCROLL = "SCROLL"
    HOVER = "HOVER"
    WAIT_VISIBLE = "WAIT_VISIBLE"
    WAIT_CLICKABLE = "WAIT_CLICKABLE"
    WAIT_PRESENT = "WAIT_PRESENT"
    PAGE_LOAD = "PAGE_LOAD"
    SELECT = "SELECT"


class FilterKind(str, Enum):
    LOCATION = "LOCATION"
    DEPARTMENT = "DEPARTMENT"


class CareersSuiteError(Exception):
    """Base class for every error raised by the suite."""

    screenshot_path: str | None = None


class WaitTimeoutError(CareersSuiteError):
    """A wait condition did not hold before its timeout."""

    def __init__(self, target: str, condition: str, elapsed_ms: int) -> None:
        self.target = target
        self.condition = condition
        self.elapsed_ms = elapsed_ms
        super().__init__(
            f"Timed out after {elapsed_ms} ms waiting for '{target}' to be {condition}"
        )


class InteractionError(CareersSuiteError):
    """An element operation failed after its wait window."""

    def __init__(
        self,
        kind: InteractionKind,
        target_name: str,
        message: str,
        screenshot_path: str | None = None,
    ) -> None:
        self.kind = kind
        self.target_name = target_name
        self.screenshot_path = screenshot_path
        super().__init__(
            f"Element operation failed - Element: {target_name}, "
            f"Operation: {kind.value}, Error: {message}"
        )


class FilterApplicationError(CareersSuiteError):
    """Neither the primary nor the fallback filter strategy applied the value."""

    def __init__(self, kind: FilterKind, value: str, screenshot_path: str | None = None) -> None:
        self.kind = kind
        self.value = value
        self.screenshot_path = screenshot_path
        super().__init__(f"Failed to apply {kind.value.lower()} filter: {value}")


class PageVerificationError(CareersSuiteError):
    """A page-level verb failed; names the page and the section involved."""

    def __init__(
        self,
        page: str,
        section: str,
        message: str,
        screenshot_path: str | None = None,
    ) -> None:
        self.page = page
        self.section = section
        self.screenshot_path = screenshot_path
        super().__init__(f"{page} - Section: {section}, Error: {message}")


class RowMismatchError(CareersSuiteError, AssertionError):
    """A listed row does not contain the expected text for one of its fields."""

    def __init__(self, row: int, field: str, expected: str, actual: str) -> None:
        self.row = row
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Job {row} {field} does not contain expected text. "
            f"Expected: {expected}, Actual: {actual}"
        )


class ConfigurationError(CareersSuiteError, ValueError):
    """Configuration is missing a required key or holds an invalid value."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"Invalid configuration for '{key}': {message}")


class SessionError(CareersSuiteError):
    """The browser session could not perform a lifecycle operation."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"Browser session operation {operation} failed: {message}")


def cause_chain(error: BaseException) -> list[BaseException]:
    """Return ``error`` followed by its ``__cause__``/``__context__`` ancestors."""
    chain: list[BaseException] = []
    current: BaseException | None = error
    while current is not None and current not in chain:
        chain.append(current)
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__
    return chain
