"""Core ranking components."""

from .ranker import Ranker
from .exceptions import (
    CafeRankingError,
    ValidationError,
    DuplicateEntityError,
    RankingError,
    ConfigurationError
)

__all__ = [
    "Ranker",
    "CafeRankingError",
    "ValidationError",
    "DuplicateEntityError",
    "RankingError",
    "ConfigurationError"
]
