"""Ordered composition of filters with optional per-stage statistics."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..models.result import ResultRecord
from ..utils.logging_config import StructuredLogger
from .base import Filter, retention_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StageStatistics:
    """Record counts around one stage of a filter chain."""
    index: int
    description: str
    before: int
    after: int

    @property
    def removed(self) -> int:
        return self.before - self.after

    @property
    def retention(self) -> float:
        return retention_rate(self.before, self.after)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "description": self.description,
            "before": self.before,
            "after": self.after,
            "removed": self.removed,
            "retention": round(self.retention, 1),
        }


@dataclass(frozen=True)
class ChainStatistics:
    """Per-stage and overall statistics of one chain run."""
    before: int
    after: int
    stages: List[StageStatistics] = field(default_factory=list)

    @property
    def removed(self) -> int:
        return self.before - self.after

    @property
    def retention(self) -> float:
        return retention_rate(self.before, self.after)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "before": self.before,
            "after": self.after,
            "removed": self.removed,
            "retention": round(self.retention, 1),
            "stages": [stage.to_dict() for stage in self.stages],
        }


class FilterChain(Filter):
    """
    Applies filters in order, each consuming the previous stage's output.

    The chain holds no filtering logic of its own; an empty chain passes
    its input through unchanged. Order is under caller control.
    """

    label = "Filter chain"

    def __init__(
        self,
        filters: Optional[Iterable[Filter]] = None,
        collect_statistics: bool = False
    ):
        """
        Initialize filter chain.

        Args:
            filters: Initial filters, applied in iteration order
            collect_statistics: Record and log per-stage statistics on every run
        """
        self._filters: List[Filter] = [f for f in (filters or []) if f is not None]
        self.collect_statistics = collect_statistics
        self.last_statistics: Optional[ChainStatistics] = None
        self._log = StructuredLogger(__name__)

    def filter(self, results: Optional[Sequence[ResultRecord]]) -> List[ResultRecord]:
        """Run every stage in order and return the surviving records."""
        current = list(results or [])
        initial_count = len(current)
        stages: List[StageStatistics] = []

        for index, stage_filter in enumerate(self._filters, 1):
            before = len(current)
            current = stage_filter.filter(current)

            if self.collect_statistics:
                stage = StageStatistics(
                    index=index,
                    description=stage_filter.description,
                    before=before,
                    after=len(current),
                )
                stages.append(stage)
                self._log.with_context(
                    stage=index, before=stage.before, after=stage.after,
                    removed=stage.removed, retention=f"{stage.retention:.1f}%"
                ).info(stage.description)

        if self.collect_statistics:
            self.last_statistics = ChainStatistics(
                before=initial_count, after=len(current), stages=stages
            )
            self._log.with_context(
                before=initial_count, after=len(current),
                retention=f"{self.last_statistics.retention:.1f}%"
            ).info("Filter chain finished")

        return current

    def add_filter(self, new_filter: Optional[Filter], index: Optional[int] = None) -> "FilterChain":
        """
        Append a filter, or insert it at ``index``.

        ``None`` filters and out-of-range indices are ignored.

        Returns:
            The chain itself, for call chaining
        """
        if new_filter is None:
            return self

        if index is None:
            self._filters.append(new_filter)
        elif 0 <= index <= len(self._filters):
            self._filters.insert(index, new_filter)
        else:
            logger.warning(f"Ignoring filter insert at out-of-range index {index}")

        return self

    def remove_filter(self, target: Union[Filter, int]) -> Union[Filter, bool, None]:
        """
        Remove a filter by reference or by position.

        Returns:
            For a filter: whether it was removed.
            For an index: the removed filter, or None if out of range.
        """
        if isinstance(target, int):
            if 0 <= target < len(self._filters):
                return self._filters.pop(target)
            return None

        for position, existing in enumerate(self._filters):
            if existing is target:
                del self._filters[position]
                return True
        return False

    def get_filter(self, index: int) -> Optional[Filter]:
        if 0 <= index < len(self._filters):
            return self._filters[index]
        return None

    @property
    def filters(self) -> List[Filter]:
        return list(self._filters)

    def clear_filters(self) -> None:
        self._filters.clear()

    @property
    def filter_count(self) -> int:
        return len(self._filters)

    def is_empty(self) -> bool:
        return not self._filters

    def __len__(self) -> int:
        return len(self._filters)

    @property
    def description(self) -> str:
        if not self._filters:
            return "Filter chain (empty)"
        return " -> ".join(f.description for f in self._filters)

    def __repr__(self) -> str:
        return f"FilterChain({self._filters!r}, collect_statistics={self.collect_statistics})"
