"""
Cafe Ranking Core

Ranking and filtering engine for coffee shop search: keyword relevance
scores with a tree-depth discount, min-max normalized to 0-100, narrowed
by a composable district / feature filter pipeline.
"""

from .config import RankingSettings, DuplicatePolicy, VALID_DISTRICTS, VALID_FEATURES
from .models.entity import ScorableEntity, Cafe
from .models.keyword import Keyword, KeywordTier
from .models.result import ResultRecord
from .models.tree import PageTree, PageNode
from .models.request import RankingRequestModel
from .filters import Filter, DistrictFilter, FeatureFilter, RatingFilter, TagFilter, FilterChain
from .core.ranker import Ranker
from .api.service import RankingService, RankingResponse

__version__ = "1.0.0"

__all__ = [
    "RankingService",
    "RankingResponse",
    "RankingSettings",
    "RankingRequestModel",
    "Ranker",
    "ScorableEntity",
    "Cafe",
    "Keyword",
    "KeywordTier",
    "ResultRecord",
    "PageTree",
    "PageNode",
    "Filter",
    "DistrictFilter",
    "FeatureFilter",
    "RatingFilter",
    "TagFilter",
    "FilterChain",
    "DuplicatePolicy",
    "VALID_DISTRICTS",
    "VALID_FEATURES",
]
