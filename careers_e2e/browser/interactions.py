"""Element interaction layer.

Every primitive waits through the WaitEngine, then acts. On failure it
captures one screenshot tagged with the target's display name and raises an
InteractionError carrying the original error as ``__cause__``.
``is_displayed`` is the exception: absence is a valid answer, not an error.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from careers_e2e.browser.diagnostics import DiagnosticsCapturer
from careers_e2e.browser.locators import NamedTarget
from careers_e2e.browser.waits import WaitCondition, WaitEngine, page_ready
from careers_e2e.core.errors import InteractionError, InteractionKind, WaitTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

JS_CLICK_JS = "el => el.click()"
SCROLL_INTO_VIEW_JS = "el => el.scrollIntoView(true)"
TAG_NAME_JS = "el => el.tagName.toLowerCase()"
SELECT_OPTION_JS = """el => {
    const select = el.closest('select');
    if (!select) { el.click(); return; }
    select.value = el.value;
    select.dispatchEvent(new Event('input', {bubbles: true}));
    select.dispatchEvent(new Event('change', {bubbles: true}));
}"""


class ElementInteractions:
    """Click, hover, read and scroll primitives with failure diagnostics.

    One instance is shared by every page object of a browser session.
    """

    def __init__(
        self,
        page: Any,
        waits: WaitEngine,
        diagnostics: DiagnosticsCapturer,
        *,
        page_load_timeout_ms: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._page = page
        self.waits = waits
        self.diagnostics = diagnostics
        self._page_load_timeout_ms = page_load_timeout_ms
        self._sleep = sleep

    @property
    def page(self) -> Any:
        return self._page

    @page.setter
    def page(self, page: Any) -> None:
        """Retarget every collaborator, e.g. after switching to a new tab."""
        self._page = page
        self.waits.page = page
        self.diagnostics.page = page

    # --- page-level helpers ---

    def current_url(self) -> str:
        return str(self._page.url)

    def title(self) -> str:
        return str(self._page.title() or "")

    def pause(self, seconds: float) -> None:
        if seconds > 0:
            self._sleep(seconds)

    def capture_diagnostic(self, label: str) -> str | None:
        """Best-effort screenshot; returns the path or None, never raises."""
        return self.diagnostics.capture(label)

    def find_all(self, target: NamedTarget) -> list[Any]:
        """All current matches of the first alternative that matches anything.

        Does not wait.
        """
        for candidate in target.locator.candidates():
            elements = self._page.query_selector_all(candidate.selector())
            if elements:
                return list(elements)
        return []

    # --- waits ---

    def wait_visible(self, target: NamedTarget, *, capture: bool = True) -> Any:
        return self._perform(
            InteractionKind.WAIT_VISIBLE, target.display_name, "wait_error", capture,
            lambda: self.waits.wait_for(target, self.waits.spec(WaitCondition.VISIBLE)),
        )

    def wait_clickable(self, target: NamedTarget, *, capture: bool = True) -> Any:
        return self._perform(
            InteractionKind.WAIT_CLICKABLE, target.display_name, "wait_clickable_error", capture,
            lambda: self.waits.wait_for(target, self.waits.spec(WaitCondition.CLICKABLE)),
        )

    def wait_present(self, target: NamedTarget, *, capture: bool = True) -> Any:
        return self._perform(
            InteractionKind.WAIT_PRESENT, target.display_name, "wait_present_error", capture,
            lambda: self.waits.wait_for(target, self.waits.spec(WaitCondition.PRESENT)),
        )

    def wait_for_page_ready(self, *, capture: bool = True) -> None:
        spec = self.waits.spec(WaitCondition.CUSTOM_PREDICATE, self._page_load_timeout_ms)
        self._perform(
            InteractionKind.PAGE_LOAD, "PAGE", "page_load_error", capture,
            lambda: self.waits.wait_for(page_ready, spec, description="document ready"),
        )
        logger.debug("Page loaded completely: %s", self.current_url())

    def wait_until_hidden(self, target: NamedTarget, timeout_ms: int | None = None) -> bool:
        """Wait until no match of ``target`` is visible.

        Loading indicators are heuristic, so a timeout is logged and reported
        as False rather than raised.
        """

        def hidden(_page: Any) -> bool:
            return not any(el.is_visible() for el in self.find_all(target))

        spec = self.waits.spec(WaitCondition.CUSTOM_PREDICATE, timeout_ms)
        try:
            self.waits.wait_for(hidden, spec, description=f"{target.display_name} hidden")
        except WaitTimeoutError:
            logger.warning("%s still visible after %d ms", target.display_name, spec.timeout_ms)
            return False
        return True

    def is_displayed(self, target: NamedTarget, timeout_ms: int | None = None) -> bool:
        """Visibility probe. Never raises and never captures a screenshot."""
        try:
            self.waits.wait_for(target, self.waits.spec(WaitCondition.VISIBLE, timeout_ms))
        except WaitTimeoutError:
            logger.warning("Element not displayed: %s", target.display_name)
            return False
        logger.info("Element displayed: %s", target.display_name)
        return True

    # --- actions ---

    def click(self, target: NamedTarget, *, capture: bool = True) -> None:
        def action() -> None:
            element = self.waits.wait_for(target, self.waits.spec(WaitCondition.CLICKABLE))
            element.click()

        self._perform(InteractionKind.CLICK, target.display_name, "click_error", capture, action)
        logger.info("Clicked on element: %s", target.display_name)

    def click_via_script(self, target: NamedTarget, *, capture: bool = True) -> None:
        """Click through ``el.click()`` in the page, bypassing overlays."""

        def action() -> None:
            element = self.waits.wait_for(target, self.waits.spec(WaitCondition.PRESENT))
            element.evaluate(JS_CLICK_JS)

        self._perform(InteractionKind.JS_CLICK, target.display_name, "js_click_error", capture, action)
        logger.info("Clicked on element with JavaScript: %s", target.display_name)

    def read_text(self, target: NamedTarget, *, capture: bool = True) -> str:
        def action() -> str:
            element = self.waits.wait_for(target, self.waits.spec(WaitCondition.VISIBLE))
            return str(element.inner_text() or "").strip()

        text = self._perform(InteractionKind.GET_TEXT, target.display_name, "get_text_error", capture, action)
        logger.debug("Retrieved text from element: %s - Text: %s", target.display_name, text)
        return text

    def scroll_into_view(self, target: NamedTarget, *, capture: bool = True) -> None:
        def action() -> None:
            element = self.waits.wait_for(target, self.waits.spec(WaitCondition.PRESENT))
            element.evaluate(SCROLL_INTO_VIEW_JS)

        self._perform(InteractionKind.SCROLL, target.display_name, "scroll_error", capture, action)
        logger.debug("Scrolled to element: %s", target.display_name)

    def hover(self, element: Any, name: str, *, capture: bool = True) -> None:
        self._perform(InteractionKind.HOVER, name, "hover_error", capture, element.hover)
        logger.info("Hovered over element: %s", name)

    def select_by_visible_text(
        self, element: Any, text: str, name: str, *, capture: bool = True,
    ) -> None:
        """Select the option of a native ``<select>`` whose label is ``text``."""
        self._perform(
            InteractionKind.SELECT, name, "select_error", capture,
            lambda: element.select_option(label=text),
        )
        logger.info("Selected '%s' in %s", text, name)

    def select_option_via_script(self, option: Any, name: str, *, capture: bool = True) -> None:
        """Select an ``<option>`` through its parent ``<select>`` and fire change events."""
        self._perform(
            InteractionKind.JS_CLICK, name, "js_select_error", capture,
            lambda: option.evaluate(SELECT_OPTION_JS),
        )
        logger.info("Selected option with JavaScript: %s", name)

    def tag_name(self, element: Any) -> str:
        return str(element.evaluate(TAG_NAME_JS))

    # --- internals ---

    def _perform(
        self,
        kind: InteractionKind,
        name: str,
        context: str,
        capture: bool,
        action: Callable[[], T],
    ) -> T:
        try:
            return action()
        except Exception as e:
            log = logger.error if capture else logger.debug
            log("%s failed on element '%s': %s", kind.value, name, e)
            path = self.capture_diagnostic(f"{context}_{name}") if capture else None
            raise InteractionError(kind, name, str(e), path) from e
