"""Shared page-object plumbing: the Page protocol and failure wrapping."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol, runtime_checkable

from careers_e2e.browser.interactions import ElementInteractions
from careers_e2e.core.errors import PageVerificationError

logger = logging.getLogger(__name__)


@runtime_checkable
class Page(Protocol):
    """Capability every page object provides."""

    def navigate(self) -> None: ...
    def verify_loaded(self) -> None: ...


class SessionLike(Protocol):
    """The parts of BrowserSession page objects rely on."""

    @property
    def page(self) -> Any: ...
    def navigate(self, url: str) -> None: ...
    def open_pages(self) -> list[Any]: ...
    def switch_to_latest_page(self) -> Any: ...


def check(condition: bool, message: str) -> None:
    """Raise AssertionError with ``message`` unless ``condition`` holds."""
    if not condition:
        raise AssertionError(message)


@contextmanager
def page_step(ui: ElementInteractions, page: str, section: str, context: str) -> Iterator[None]:
    """Re-raise any failure inside the block as a PageVerificationError.

    A nested PageVerificationError passes through untouched so the innermost
    section stays attached. The screenshot of the underlying failure is
    reused when there is one; otherwise one is captured here.
    """
    try:
        yield
    except PageVerificationError:
        raise
    except Exception as e:
        logger.error("%s: %s failed: %s", page, section, e)
        path = getattr(e, "screenshot_path", None) or ui.capture_diagnostic(context)
        raise PageVerificationError(page, section, str(e), path) from e
