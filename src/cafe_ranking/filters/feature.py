"""Feature tag filter with match-all / match-any semantics."""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..config import FEATURE_CATEGORIES, VALID_FEATURES
from ..models.result import ResultRecord
from .base import Filter, FilterStatistics

logger = logging.getLogger(__name__)


class FeatureFilter(Filter):
    """
    Keeps records offering the required features.

    In match-all mode a record must have every required feature; in
    match-any mode one shared feature is enough. A record without features
    never passes once a feature is configured; with no features configured
    every record passes.
    """

    label = "Feature filter"

    def __init__(
        self,
        features: Union[str, Iterable[str], None] = None,
        match_all: bool = True
    ):
        """
        Initialize feature filter.

        Args:
            features: Required feature tag or tags
            match_all: True to require every feature, False for any
        """
        self._features: List[str] = []
        self.features = features
        self.match_all = match_all

    @classmethod
    def create_match_all(cls, features: Iterable[str]) -> "FeatureFilter":
        return cls(features, match_all=True)

    @classmethod
    def create_match_any(cls, features: Iterable[str]) -> "FeatureFilter":
        return cls(features, match_all=False)

    def filter(self, results: Optional[Sequence[ResultRecord]]) -> List[ResultRecord]:
        """Keep records whose features satisfy the configured match mode."""
        if not results:
            return []
        if not self._features:
            return list(results)

        filtered = [r for r in results if self._matches(r)]

        logger.debug(f"{self.label} kept {len(filtered)}/{len(results)} records")
        return filtered

    def _values(self, record: ResultRecord) -> Tuple[str, ...]:
        """Tags of the record this filter matches against."""
        return record.features or ()

    def _matches(self, record: ResultRecord) -> bool:
        available = set(self._values(record))
        if not available:
            return False

        if self.match_all:
            return available.issuperset(self._features)
        return not available.isdisjoint(self._features)

    def add_feature(self, feature: str) -> None:
        if feature and feature not in self._features:
            self._features.append(feature)

    def remove_feature(self, feature: str) -> None:
        if feature in self._features:
            self._features.remove(feature)

    @property
    def features(self) -> List[str]:
        return list(self._features)

    @features.setter
    def features(self, features: Union[str, Iterable[str], None]) -> None:
        self._features = []
        if features is None:
            return
        if isinstance(features, str):
            features = [features]
        for feature in features:
            self.add_feature(feature)

    def clear_features(self) -> None:
        self._features.clear()

    def contains_feature(self, feature: str) -> bool:
        return feature in self._features

    def __contains__(self, feature: object) -> bool:
        return feature in self._features

    @property
    def feature_count(self) -> int:
        return len(self._features)

    def is_empty(self) -> bool:
        return not self._features

    def count_matched_features(self, record: ResultRecord) -> int:
        """Number of required features the record offers."""
        available = set(self._values(record))
        return sum(1 for feature in self._features if feature in available)

    def get_missing_features(self, record: ResultRecord) -> List[str]:
        """Required features the record lacks, in configured order."""
        available = set(self._values(record))
        return [feature for feature in self._features if feature not in available]

    @property
    def mode_description(self) -> str:
        return "match all" if self.match_all else "match any"

    def statistics(
        self,
        original: Sequence[ResultRecord],
        filtered: Sequence[ResultRecord],
    ) -> FilterStatistics:
        """Retention summary including required features and match mode."""
        return FilterStatistics(
            label=self.label,
            original_count=len(original),
            filtered_count=len(filtered),
            criteria=tuple(self._features),
            mode=self.mode_description,
        )

    @property
    def description(self) -> str:
        if not self._features:
            return f"{self.label} (unrestricted)"
        return f"{self.label} ({', '.join(self._features)}) [{self.mode_description}]"

    @staticmethod
    def is_valid_feature(feature: str) -> bool:
        """Whether the tag is one of the known feature tags."""
        return feature in VALID_FEATURES

    @staticmethod
    def all_valid_features() -> Tuple[str, ...]:
        return VALID_FEATURES

    @staticmethod
    def features_by_category(category: str) -> Tuple[str, ...]:
        """Feature tags of a catalog category (environment, facility, service)."""
        if not category:
            return ()
        return FEATURE_CATEGORIES.get(category.lower(), ())

    def copy(self) -> "FeatureFilter":
        return type(self)(self._features, self.match_all)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureFilter):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.match_all == other.match_all
            and self._features == other._features
        )

    def __hash__(self) -> int:
        return hash((type(self), tuple(self._features), self.match_all))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._features!r}, match_all={self.match_all})"
