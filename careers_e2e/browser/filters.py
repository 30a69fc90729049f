"""Two-tier filter resolver for job-listing filter controls.

The filter markup is not known up front: it may be a native ``<select>`` or a
button that opens a custom menu. Page objects only ever see "applied" or a
FilterApplicationError.

  Tier 1  control is a <select>  -> select by visible text
          otherwise              -> click control, click matching option
  Tier 2  click any a/button/option on the page whose text contains the value
There is no third attempt.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from careers_e2e.browser.interactions import ElementInteractions
from careers_e2e.browser.locators import NamedTarget
from careers_e2e.core.errors import FilterApplicationError, FilterKind, InteractionError

logger = logging.getLogger(__name__)

# Filtering re-renders the job list asynchronously; document.readyState stays
# "complete" throughout, so a fixed settle delay precedes the ready checks.
DEFAULT_SETTLE_DELAY_S = 2.0


class FilterPath(str, Enum):
    NATIVE_CONTROL = "native control"
    BUTTON_MENU = "button menu"
    FALLBACK_TEXT_MATCH = "fallback text match"


@dataclass(frozen=True)
class FilterAttemptResult:
    applied: bool
    path_taken: FilterPath | None = None
    reason: str = ""


@dataclass(frozen=True)
class FilterControl:
    """Locators describing one filter dimension.

    ``option`` and ``fallback`` are templates with a ``{value}`` slot.
    """

    kind: FilterKind
    control: NamedTarget
    option: NamedTarget
    fallback: NamedTarget


class FilterResolver:
    """Applies a filter value through whichever control shape the page has."""

    def __init__(
        self,
        interactions: ElementInteractions,
        *,
        settle_delay_s: float = DEFAULT_SETTLE_DELAY_S,
        loading_indicator: NamedTarget | None = None,
    ) -> None:
        self._ui = interactions
        self._settle_delay_s = settle_delay_s
        self._loading_indicator = loading_indicator

    def apply(self, control: FilterControl, value: str) -> bool:
        """Apply ``value`` to ``control``.

        Returns True once applied; raises FilterApplicationError when both
        tiers fail.
        """
        attempt = self._try_primary(control, value)
        if not attempt.applied:
            logger.warning(
                "Standard %s filter approach failed (%s), trying alternative methods",
                control.kind.value.lower(), attempt.reason,
            )
            attempt = self._apply_fallback(control, value)

        self._settle()
        logger.info(
            "Applied %s filter: %s via %s",
            control.kind.value.lower(), value, attempt.path_taken.value if attempt.path_taken else "?",
        )
        return attempt.applied

    def _try_primary(self, control: FilterControl, value: str) -> FilterAttemptResult:
        """Native select or button menu. Failure here is an expected outcome."""
        try:
            element = self._ui.wait_visible(control.control, capture=False)
            if self._ui.tag_name(element) == "select":
                self._ui.select_by_visible_text(
                    element, value, control.control.display_name, capture=False,
                )
                return FilterAttemptResult(True, FilterPath.NATIVE_CONTROL)

            self._ui.click(control.control, capture=False)
            self._ui.click(control.option.bind(value=value), capture=False)
            return FilterAttemptResult(True, FilterPath.BUTTON_MENU)
        except InteractionError as e:
            return FilterAttemptResult(False, reason=str(e))

    def _apply_fallback(self, control: FilterControl, value: str) -> FilterAttemptResult:
        fallback = control.fallback.bind(value=value)
        try:
            element = self._ui.wait_present(fallback)
            if self._ui.tag_name(element) == "option":
                self._ui.select_option_via_script(element, fallback.display_name)
            else:
                self._ui.click(fallback)
        except Exception as e:
            logger.error("Both %s filter strategies failed for '%s'", control.kind.value.lower(), value)
            path = e.screenshot_path if isinstance(e, InteractionError) else None
            raise FilterApplicationError(control.kind, value, path) from e
        return FilterAttemptResult(True, FilterPath.FALLBACK_TEXT_MATCH)

    def _settle(self) -> None:
        self._ui.pause(self._settle_delay_s)
        self._ui.wait_for_page_ready()
        if self._loading_indicator is not None:
            self._ui.wait_until_hidden(self._loading_indicator)
