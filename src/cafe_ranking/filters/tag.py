"""Hashtag filter."""

from typing import Iterable, List, Tuple

from ..models.result import ResultRecord
from .feature import FeatureFilter


class TagFilter(FeatureFilter):
    """
    Keeps records carrying the required hashtags.

    Matching works exactly like FeatureFilter (match all or match any) but
    reads the free-form ``tags`` of a record instead of its catalog features.
    Tags are not validated against any catalog.
    """

    label = "Tag filter"

    def _values(self, record: ResultRecord) -> Tuple[str, ...]:
        return record.tags or ()

    @property
    def tags(self) -> List[str]:
        return self.features

    @tags.setter
    def tags(self, tags: Iterable[str]) -> None:
        self.features = tags

    def add_tag(self, tag: str) -> None:
        self.add_feature(tag)

    def remove_tag(self, tag: str) -> None:
        self.remove_feature(tag)
