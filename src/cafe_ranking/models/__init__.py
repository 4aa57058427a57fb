"""Data models for the ranking core."""

from .entity import ScorableEntity, Cafe, EntityModel
from .keyword import Keyword, KeywordTier, KeywordModel, as_weight_table
from .result import ResultRecord
from .tree import PageNode, PageTree
from .request import RankingRequestModel

__all__ = [
    "ScorableEntity", "Cafe", "EntityModel",
    "Keyword", "KeywordTier", "KeywordModel", "as_weight_table",
    "ResultRecord", "PageNode", "PageTree", "RankingRequestModel",
]
