"""
Dashboard aggregation.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, TypeVar

from ..core.records import SearchLogEntry
from ..core.store.base import DirectoryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

@dataclass
class DashboardSummary:
    total_persons: int = 0
    total_searches: int = 0
    recent_searches: List[SearchLogEntry] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "degraded" if self.errors else "active"

class DashboardService:
    """Read-only counts and recent activity for the admin dashboard."""

    def __init__(self, store: DirectoryStore, recent_limit: int = 5):
        self.store = store
        self.recent_limit = recent_limit

    def get_summary(self) -> DashboardSummary:
        """
        Run the three dashboard reads independently.

        A failing read falls back to its default (0 or an empty list) and is
        reported in ``errors``; the other reads are unaffected.
        """
        summary = DashboardSummary()
        summary.total_persons = self._read("total_persons", self.store.count_persons, 0, summary.errors)
        summary.total_searches = self._read("total_searches", self.store.count_search_logs, 0, summary.errors)
        summary.recent_searches = self._read(
            "recent_searches",
            lambda: self.store.recent_search_logs(self.recent_limit),
            [],
            summary.errors
        )
        return summary

    def _read(self, label: str, query: Callable[[], T], default: T, errors: List[str]) -> T:
        try:
            return query()
        except Exception as e:
            logger.error(f"Error reading {label}: {e}", exc_info=True)
            errors.append(f"{label}: {e}")
            return default
