"""Composable result filters."""

from .base import Filter, FilterStatistics
from .district import DistrictFilter
from .feature import FeatureFilter
from .rating import RatingFilter
from .tag import TagFilter
from .chain import FilterChain, StageStatistics, ChainStatistics

__all__ = [
    "Filter",
    "FilterStatistics",
    "DistrictFilter",
    "FeatureFilter",
    "RatingFilter",
    "TagFilter",
    "FilterChain",
    "StageStatistics",
    "ChainStatistics",
]
