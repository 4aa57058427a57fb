"""Rating range filter."""

import logging
from typing import List, Optional, Sequence, Tuple

from ..models.result import ResultRecord
from .base import Filter, FilterStatistics

logger = logging.getLogger(__name__)

MIN_RATING = 0.0
MAX_RATING = 5.0


class RatingFilter(Filter):
    """
    Keeps records whose rating lies in an inclusive range.

    Either bound may be omitted. A record without a rating never passes once
    a bound is configured; with no bounds every record passes.
    """

    label = "Rating filter"

    def __init__(self, min_rating: Optional[float] = None, max_rating: Optional[float] = None):
        """
        Initialize rating filter.

        Args:
            min_rating: Lowest accepted rating (inclusive)
            max_rating: Highest accepted rating (inclusive)

        Raises:
            ValueError: If a bound is outside 0.0-5.0 or min exceeds max
        """
        self._min_rating: Optional[float] = None
        self._max_rating: Optional[float] = None
        self.set_range(min_rating, max_rating)

    @classmethod
    def at_least(cls, min_rating: float) -> "RatingFilter":
        return cls(min_rating=min_rating)

    def filter(self, results: Optional[Sequence[ResultRecord]]) -> List[ResultRecord]:
        """Keep records rated within the configured range."""
        if not results:
            return []
        if self.is_empty():
            return list(results)

        filtered = [r for r in results if self.matches(r.rating)]

        logger.debug(f"Rating filter kept {len(filtered)}/{len(results)} records")
        return filtered

    def matches(self, rating: Optional[float]) -> bool:
        if rating is None:
            return False
        if self._min_rating is not None and rating < self._min_rating:
            return False
        if self._max_rating is not None and rating > self._max_rating:
            return False
        return True

    def set_range(self, min_rating: Optional[float] = None, max_rating: Optional[float] = None) -> None:
        """Replace both bounds at once."""
        for bound in (min_rating, max_rating):
            if bound is not None and not MIN_RATING <= bound <= MAX_RATING:
                raise ValueError(f"Rating bound {bound} is outside {MIN_RATING}-{MAX_RATING}")
        if min_rating is not None and max_rating is not None and min_rating > max_rating:
            raise ValueError("Minimum rating cannot exceed maximum rating")

        self._min_rating = min_rating
        self._max_rating = max_rating

    @property
    def min_rating(self) -> Optional[float]:
        return self._min_rating

    @property
    def max_rating(self) -> Optional[float]:
        return self._max_rating

    def clear(self) -> None:
        self._min_rating = self._max_rating = None

    def is_empty(self) -> bool:
        return self._min_rating is None and self._max_rating is None

    def _criteria(self) -> Tuple[str, ...]:
        criteria = []
        if self._min_rating is not None:
            criteria.append(f">= {self._min_rating}")
        if self._max_rating is not None:
            criteria.append(f"<= {self._max_rating}")
        return tuple(criteria)

    def statistics(
        self,
        original: Sequence[ResultRecord],
        filtered: Sequence[ResultRecord],
    ) -> FilterStatistics:
        """Retention summary including the active bounds."""
        return FilterStatistics(
            label=self.label,
            original_count=len(original),
            filtered_count=len(filtered),
            criteria=self._criteria(),
        )

    @property
    def description(self) -> str:
        if self.is_empty():
            return "Rating filter (unrestricted)"
        return f"Rating filter ({', '.join(self._criteria())})"

    def copy(self) -> "RatingFilter":
        return RatingFilter(self._min_rating, self._max_rating)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RatingFilter):
            return NotImplemented
        return (self._min_rating, self._max_rating) == (other._min_rating, other._max_rating)

    def __hash__(self) -> int:
        return hash((RatingFilter, self._min_rating, self._max_rating))

    def __repr__(self) -> str:
        return f"RatingFilter(min_rating={self._min_rating!r}, max_rating={self._max_rating!r})"
