"""Best-effort screenshot capture for failure diagnostics."""

import logging
import re
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def screenshot_name(context: str, when: datetime) -> str:
    """``{context}_{yyyyMMdd_HHmmss}.png`` with a filesystem-safe context."""
    safe = _UNSAFE_CHARS.sub("_", context).strip("_") or "screenshot"
    return f"{safe}_{when:%Y%m%d_%H%M%S}.png"


class DiagnosticsCapturer:
    """Writes PNG screenshots of the current page under ``directory``.

    Capture never raises: a failing screenshot must not mask the error that
    triggered it.
    """

    def __init__(
        self,
        page: Any,
        directory: str | Path = "screenshots",
        *,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.page = page
        self._directory = Path(directory)
        self._now = now

    @property
    def directory(self) -> Path:
        return self._directory

    def capture(self, context: str) -> str | None:
        """Save a screenshot and return its path, or None if capture failed."""
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path = self._unique_path(screenshot_name(context, self._now()))
            self.page.screenshot(path=str(path), full_page=False)
        except Exception:
            logger.warning("Failed to take screenshot: %s", context, exc_info=True)
            return None
        logger.info("Screenshot saved: %s", path)
        return str(path)

    def _unique_path(self, name: str) -> Path:
        path = self._directory / name
        counter = 2
        while path.exists():
            path = self._directory / f"{Path(name).stem}_{counter}.png"
            counter += 1
        return path
