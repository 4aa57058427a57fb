"""District membership filter."""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..config import VALID_DISTRICTS
from ..models.result import ResultRecord
from .base import Filter, FilterStatistics

logger = logging.getLogger(__name__)


class DistrictFilter(Filter):
    """
    Keeps records located in any of the allowed districts (OR semantics).

    A record without a district never passes once a district is configured;
    with no districts configured every record passes.
    """

    label = "District filter"

    def __init__(self, districts: Union[str, Iterable[str], None] = None):
        """
        Initialize district filter.

        Args:
            districts: Allowed district name or names
        """
        self._districts: List[str] = []
        self.districts = districts

    def filter(self, results: Optional[Sequence[ResultRecord]]) -> List[ResultRecord]:
        """Keep records whose district exactly matches an allowed district."""
        if not results:
            return []
        if not self._districts:
            return list(results)

        allowed = set(self._districts)
        filtered = [r for r in results if r.district is not None and r.district in allowed]

        logger.debug(f"District filter kept {len(filtered)}/{len(results)} records")
        return filtered

    def add_district(self, district: str) -> None:
        if district and district not in self._districts:
            self._districts.append(district)

    def remove_district(self, district: str) -> None:
        if district in self._districts:
            self._districts.remove(district)

    @property
    def districts(self) -> List[str]:
        return list(self._districts)

    @districts.setter
    def districts(self, districts: Union[str, Iterable[str], None]) -> None:
        self._districts = []
        if districts is None:
            return
        if isinstance(districts, str):
            districts = [districts]
        for district in districts:
            self.add_district(district)

    def clear_districts(self) -> None:
        self._districts.clear()

    def contains_district(self, district: str) -> bool:
        return district in self._districts

    def __contains__(self, district: object) -> bool:
        return district in self._districts

    @property
    def district_count(self) -> int:
        return len(self._districts)

    def is_empty(self) -> bool:
        return not self._districts

    def statistics(
        self,
        original: Sequence[ResultRecord],
        filtered: Sequence[ResultRecord],
    ) -> FilterStatistics:
        """Retention summary including the active district list."""
        return FilterStatistics(
            label=self.label,
            original_count=len(original),
            filtered_count=len(filtered),
            criteria=tuple(self._districts),
        )

    @property
    def description(self) -> str:
        if not self._districts:
            return "District filter (unrestricted)"
        return f"District filter ({', '.join(self._districts)})"

    @staticmethod
    def is_valid_district(district: str) -> bool:
        """Whether the name is one of the known Taipei districts."""
        return district in VALID_DISTRICTS

    @staticmethod
    def all_valid_districts() -> Tuple[str, ...]:
        return VALID_DISTRICTS

    def copy(self) -> "DistrictFilter":
        return DistrictFilter(self._districts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistrictFilter):
            return NotImplemented
        return self._districts == other._districts

    def __hash__(self) -> int:
        return hash((DistrictFilter, tuple(self._districts)))

    def __repr__(self) -> str:
        return f"DistrictFilter({self._districts!r})"
