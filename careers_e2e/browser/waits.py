"""Polling wait engine.

Blocks the calling thread until a condition over the page holds or the
timeout elapses. The engine never retries beyond its own polling; retry
policy belongs to callers.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from careers_e2e.browser.locators import NamedTarget
from careers_e2e.core.errors import WaitTimeoutError

logger = logging.getLogger(__name__)

# Centre-point hit test: the element (or a descendant) must receive a click
# at its centre. Off-viewport elements report no hit and count as unobscured.
HIT_TEST_JS = """el => {
    const r = el.getBoundingClientRect();
    const hit = document.elementFromPoint(r.left + r.width / 2, r.top + r.height / 2);
    return hit === null || el === hit || el.contains(hit);
}"""

READY_STATE_JS = "() => document.readyState"


class WaitCondition(str, Enum):
    PRESENT = "present"
    VISIBLE = "visible"
    CLICKABLE = "clickable"
    CUSTOM_PREDICATE = "custom predicate"


@dataclass(frozen=True)
class WaitSpec:
    """Timeout, poll interval and condition for a single wait."""

    timeout_ms: int
    poll_interval_ms: int = 500
    condition: WaitCondition = WaitCondition.VISIBLE

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            msg = f"timeout_ms must be positive, got {self.timeout_ms}"
            raise ValueError(msg)
        if not 0 < self.poll_interval_ms < self.timeout_ms:
            msg = (
                f"poll_interval_ms must be between 0 and timeout_ms "
                f"({self.timeout_ms}), got {self.poll_interval_ms}"
            )
            raise ValueError(msg)

    def with_condition(self, condition: WaitCondition) -> "WaitSpec":
        return replace(self, condition=condition)

    def with_timeout(self, timeout_ms: int) -> "WaitSpec":
        """Same condition with another timeout; the poll interval shrinks to fit."""
        timeout_ms = max(timeout_ms, 2)
        poll = max(1, min(self.poll_interval_ms, timeout_ms // 2))
        return replace(self, timeout_ms=timeout_ms, poll_interval_ms=poll)


PagePredicate = Callable[[Any], Any]


class WaitEngine:
    """Polls a page until an element condition or a custom predicate holds.

    ``clock`` and ``sleep`` are injectable so tests can drive time.
    """

    def __init__(
        self,
        page: Any,
        default_spec: WaitSpec,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._page = page
        self.default_spec = default_spec
        self._clock = clock
        self._sleep = sleep

    @property
    def page(self) -> Any:
        return self._page

    @page.setter
    def page(self, page: Any) -> None:
        self._page = page

    def spec(self, condition: WaitCondition, timeout_ms: int | None = None) -> WaitSpec:
        """Default spec for ``condition``, optionally with another timeout."""
        spec = self.default_spec.with_condition(condition)
        if timeout_ms is not None:
            spec = spec.with_timeout(timeout_ms)
        return spec

    def wait_for(
        self,
        target: NamedTarget | PagePredicate,
        spec: WaitSpec | None = None,
        *,
        description: str | None = None,
    ) -> Any:
        """Block until the condition holds.

        Returns the matching element handle for element conditions, ``True``
        for custom predicates. Raises WaitTimeoutError on timeout.
        """
        if spec is None:
            condition = (
                WaitCondition.VISIBLE
                if isinstance(target, NamedTarget)
                else WaitCondition.CUSTOM_PREDICATE
            )
            spec = self.spec(condition)

        if isinstance(target, NamedTarget):
            if spec.condition == WaitCondition.CUSTOM_PREDICATE:
                msg = "CUSTOM_PREDICATE waits take a callable, not a NamedTarget"
                raise ValueError(msg)
            if target.locator.is_template:
                msg = f"'{target.display_name}' is a template locator; bind it before waiting"
                raise ValueError(msg)
            name = description or target.display_name

            def probe() -> Any:
                return self._probe_element(target, spec.condition)
        else:
            name = description or getattr(target, "__name__", "page predicate")

            def probe() -> Any:
                return True if target(self._page) else None

        started = self._clock()
        timeout_s = spec.timeout_ms / 1000
        poll_s = spec.poll_interval_ms / 1000
        attempts = 0

        while True:
            attempts += 1
            try:
                result = probe()
            except Exception as e:
                # Detached nodes and in-flight navigations are "not yet".
                logger.debug("Probe for '%s' raised %s; treating as not ready", name, e)
                result = None
            if result is not None:
                logger.debug("'%s' is %s after %d attempt(s)", name, spec.condition.value, attempts)
                return result

            elapsed = self._clock() - started
            remaining = timeout_s - elapsed
            if remaining <= 0:
                elapsed_ms = int(elapsed * 1000)
                raise WaitTimeoutError(name, spec.condition.value, elapsed_ms)
            self._sleep(min(poll_s, remaining))

    def _probe_element(self, target: NamedTarget, condition: WaitCondition) -> Any:
        """Return the first element satisfying ``condition``, or None."""
        for candidate in target.locator.candidates():
            elements = self._page.query_selector_all(candidate.selector())
            for element in elements:
                if condition == WaitCondition.PRESENT:
                    return element
                if not element.is_visible():
                    continue
                if condition == WaitCondition.VISIBLE:
                    return element
                if element.is_enabled() and element.evaluate(HIT_TEST_JS):
                    return element
        return None


def page_ready(page: Any) -> bool:
    """Custom predicate: the document has finished loading."""
    return page.evaluate(READY_STATE_JS) == "complete"
