"""Filter abstraction and retention statistics."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.result import ResultRecord


def retention_rate(before: int, after: int) -> float:
    """Percentage of records kept; 0.0 when there was nothing to filter."""
    if before <= 0:
        return 0.0
    return after / before * 100.0


@dataclass(frozen=True)
class FilterStatistics:
    """
    Retention summary of a single filter run.

    Attributes:
        label: Filter kind shown in the report header
        original_count: Records before filtering
        filtered_count: Records after filtering
        criteria: Active constraints (districts or features)
        mode: Match mode description, if the filter has one
    """
    label: str
    original_count: int
    filtered_count: int
    criteria: Tuple[str, ...] = field(default_factory=tuple)
    mode: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate counts."""
        if self.original_count < 0 or self.filtered_count < 0:
            raise ValueError("Counts cannot be negative")
        if self.filtered_count > self.original_count:
            raise ValueError("Filtered count cannot exceed original count")

    @property
    def removed_count(self) -> int:
        return self.original_count - self.filtered_count

    @property
    def retention(self) -> float:
        return retention_rate(self.original_count, self.filtered_count)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "label": self.label,
            "original_count": self.original_count,
            "filtered_count": self.filtered_count,
            "removed_count": self.removed_count,
            "retention": round(self.retention, 1),
            "criteria": list(self.criteria),
            "mode": self.mode,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterStatistics":
        """Rebuild statistics from ``to_dict`` output."""
        return cls(
            label=data["label"],
            original_count=int(data["original_count"]),
            filtered_count=int(data["filtered_count"]),
            criteria=tuple(data.get("criteria") or ()),
            mode=data.get("mode"),
        )

    def to_report(self) -> str:
        """Human-readable multi-line report."""
        lines = [
            f"{self.label} statistics:",
            f"  original: {self.original_count}",
            f"  filtered: {self.filtered_count}",
            f"  removed: {self.removed_count}",
            f"  retention: {self.retention:.1f}%",
            f"  criteria: {', '.join(self.criteria)}",
        ]
        if self.mode:
            lines.append(f"  mode: {self.mode}")
        return "\n".join(lines)


class Filter(ABC):
    """
    A pure narrowing transform over a list of result records.

    Implementations must return a new list, keep the relative order of the
    surviving records, never mutate them, and pass everything through when
    no constraint is configured.
    """

    label = "filter"

    @abstractmethod
    def filter(self, results: Optional[Sequence[ResultRecord]]) -> List[ResultRecord]:
        """Return the subset of ``results`` that passes this filter."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description for diagnostics."""

    def apply(self, results: Optional[Sequence[ResultRecord]]) -> List[ResultRecord]:
        return self.filter(results)

    def __call__(self, results: Optional[Sequence[ResultRecord]]) -> List[ResultRecord]:
        return self.filter(results)

    def statistics(
        self,
        original: Sequence[ResultRecord],
        filtered: Sequence[ResultRecord],
    ) -> FilterStatistics:
        """Summarize how many records this filter kept."""
        return FilterStatistics(
            label=self.label,
            original_count=len(original),
            filtered_count=len(filtered),
        )

    def __str__(self) -> str:
        return self.description
