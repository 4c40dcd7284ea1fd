"""
One-shot enumeration of every published item carrying the marker.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from ..config.constants import DEFAULT_MARKER
from .date_window import DateWindow, build_date_window
from .index import ContentIndex
from .query import marker_query

logger = logging.getLogger(__name__)


class BatchOutcome(str, Enum):
    """Kinds of report a batch run emits."""

    SEARCHING = "searching"
    NO_MATCHES = "no_matches"
    MATCHES = "matches"


@dataclass(frozen=True)
class BatchReport:
    """A caller-observable step of a batch run."""

    kind: BatchOutcome
    window: DateWindow
    marker: str
    ids: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "outcome": self.kind.value,
            "marker": self.marker,
            "date_after": self.window.after.isoformat(),
            "date_before": self.window.before.isoformat(),
            "ids": list(self.ids),
        }


class BatchSearcher:
    """
    Runs a single unbounded marker search over a publish-date window.

    Reports are delivered to ``on_report`` as they happen: one SEARCHING
    report once the window is known, then exactly one of NO_MATCHES or
    MATCHES. The final report is also returned from ``run``.
    """

    def __init__(
        self,
        index: ContentIndex,
        marker: str = DEFAULT_MARKER,
        on_report: Optional[Callable[[BatchReport], None]] = None,
    ):
        if not marker:
            raise ValueError("marker must not be empty")
        self.index = index
        self.marker = marker
        self.on_report = on_report

    def _emit(self, report: BatchReport) -> BatchReport:
        if self.on_report:
            self.on_report(report)
        return report

    def run(
        self,
        raw_after: Optional[str] = None,
        raw_before: Optional[str] = None,
        today: Optional[date] = None,
    ) -> BatchReport:
        """
        Enumerate every match in one index call.

        Args:
            raw_after: Lower bound as YYYY-MM-DD, or None
            raw_before: Upper bound as YYYY-MM-DD, or None
            today: Reference date for the default window

        Raises:
            InvalidDateFormatError: Before any index call, if a bound is malformed
            ContentIndexError: If the index call fails
        """
        window = build_date_window(raw_after, raw_before, today=today)
        self._emit(BatchReport(BatchOutcome.SEARCHING, window, self.marker))

        spec = marker_query(self.marker, window)
        logger.debug("Batch search for %r in %s", self.marker, window)
        result = self.index.query(spec)

        if not result.items:
            return self._emit(BatchReport(BatchOutcome.NO_MATCHES, window, self.marker))

        ids = result.ids
        logger.debug("Batch search matched %d item(s)", len(ids))
        return self._emit(BatchReport(BatchOutcome.MATCHES, window, self.marker, ids))
