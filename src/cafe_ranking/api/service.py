"""High-level API service for ranking and filtering cafes."""

import logging
import threading
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import numpy as np
from pydantic import ValidationError as PydanticValidationError

from ..config import RankingSettings
from ..core.exceptions import CafeRankingError, ConfigurationError, RankingError, ValidationError
from ..core.ranker import Ranker
from ..filters.chain import ChainStatistics, FilterChain
from ..models.entity import ScorableEntity
from ..models.keyword import WeightTable, as_weight_table
from ..models.request import RankingRequestModel, build_filter_chain, split_delimited
from ..models.result import ResultRecord
from ..utils.logging_config import setup_logging
from ..utils.text_processing import KeywordCounter
from ..utils.validators import invalid_districts, invalid_features, validate_keyword_weights

logger = logging.getLogger(__name__)

# Number of features listed by suggest_filters
SUGGESTED_FEATURE_COUNT = 5

FilterValues = Union[str, Iterable[str], None]


@dataclass
class RankingResponse:
    """
    Final output of one ranking request.

    Attributes:
        results: Ranked, filtered records numbered from 1
        total_candidates: Entities handed to the ranker
        filtered_count: Records left after filtering, before the top-n cut
        chain_statistics: Per-stage statistics when collection is enabled
    """
    results: List[ResultRecord]
    total_candidates: int
    filtered_count: int
    chain_statistics: Optional[ChainStatistics] = None
    elapsed: float = field(default=0.0, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "results": [result.to_dict() for result in self.results],
            "total_candidates": self.total_candidates,
            "filtered_count": self.filtered_count,
            "returned_count": len(self.results),
            "chain_statistics": self.chain_statistics.to_dict() if self.chain_statistics else None,
        }


class RankingService:
    """
    Request-level facade over the ranker and filter pipeline.

    Every call builds a fresh Ranker and FilterChain. Besides its immutable
    settings the service only keeps request counters, which are updated
    under a lock so one instance can be shared between threads.
    """

    def __init__(self, settings: Optional[RankingSettings] = None, **overrides: Any):
        """
        Initialize ranking service.

        Args:
            settings: Base settings (defaults used when omitted)
            **overrides: Individual setting overrides (log_level, depth_factor, ...)

        Raises:
            ConfigurationError: If an override is unknown or invalid
        """
        base = settings or RankingSettings()
        try:
            self.settings = RankingSettings(**{**base.model_dump(), **overrides}) if overrides else base
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid ranking settings: {str(e)}") from e

        setup_logging(level=self.settings.log_level)

        self._stats = {
            'total_requests': 0,
            'avg_rank_time': 0.0
        }
        self._stats_lock = threading.Lock()

        logger.info("Ranking service initialized")

    def rank(
        self,
        entities: Optional[Iterable[ScorableEntity]],
        keyword_weights: WeightTable,
        depths: Optional[Mapping[str, int]] = None,
        districts: FilterValues = None,
        features: FilterValues = None,
        match_all: bool = True,
        top_n: Optional[int] = None,
        min_rating: Optional[float] = None,
        max_rating: Optional[float] = None,
        tags: FilterValues = None,
        match_all_tags: bool = True
    ) -> RankingResponse:
        """
        Score, normalize, rank and filter entities.

        Districts, features and tags may be given as lists or as
        comma-delimited strings.

        Args:
            entities: Candidate entities
            keyword_weights: Term -> weight table or iterable of Keyword
            depths: Optional entity id -> tree depth
            districts: Allowed districts (no constraint when empty)
            features: Required features (no constraint when empty)
            match_all: Require every feature instead of any
            top_n: Result limit; falls back to settings.default_top_n
            min_rating: Lowest accepted rating
            max_rating: Highest accepted rating
            tags: Required hashtags (no constraint when empty)
            match_all_tags: Require every tag instead of any

        Returns:
            Ranking response with renumbered results

        Raises:
            CafeRankingError: If input validation fails
            RankingError: If ranking fails unexpectedly
        """
        try:
            chain = build_filter_chain(
                districts=districts,
                features=features,
                match_all=match_all,
                min_rating=min_rating,
                max_rating=max_rating,
                tags=tags,
                match_all_tags=match_all_tags,
                collect_statistics=self.settings.collect_statistics,
            )
        except ValueError as e:
            logger.error(f"Ranking rejected: {str(e)}")
            raise ValidationError(str(e)) from e

        return self._run(entities, keyword_weights, depths, chain, top_n)

    def rank_request(self, request: RankingRequestModel) -> RankingResponse:
        """Rank a validated request model."""
        chain = request.to_filter_chain(collect_statistics=self.settings.collect_statistics)
        return self._run(
            request.to_entities(), request.keywords, request.depths, chain, request.top_n
        )

    def _run(
        self,
        entities: Optional[Iterable[ScorableEntity]],
        keyword_weights: WeightTable,
        depths: Optional[Mapping[str, int]],
        chain: FilterChain,
        top_n: Optional[int]
    ) -> RankingResponse:
        start_time = time.perf_counter()

        try:
            weights = as_weight_table(keyword_weights)
            validate_keyword_weights(weights)

            ranker = Ranker(
                entities,
                duplicate_policy=self.settings.duplicate_policy,
                depth_factor=self.settings.depth_factor
            )
            ranker.compute_final_scores(weights, depths)
            ranker.normalize_scores()

            ranked = ranker.get_ranked_results()
            filtered = chain.filter(ranked)

            limit = top_n if top_n is not None else self.settings.default_top_n
            selected = filtered[:max(limit, 0)] if limit is not None else filtered
            results = [record.with_rank(rank) for rank, record in enumerate(selected, 1)]

            elapsed = time.perf_counter() - start_time
            self._update_stats(elapsed)

            logger.info(
                f"Ranked {len(ranker)} entities: {len(filtered)} after filtering, "
                f"{len(results)} returned in {elapsed:.3f}s"
            )

            return RankingResponse(
                results=results,
                total_candidates=len(ranker),
                filtered_count=len(filtered),
                chain_statistics=chain.last_statistics,
                elapsed=elapsed
            )

        except CafeRankingError as e:
            logger.error(f"Ranking rejected: {str(e)}")
            raise
        except Exception as e:
            logger.error(f"Ranking failed: {str(e)}")
            raise RankingError(f"Ranking failed: {str(e)}") from e

    def validate_filters(
        self,
        districts: FilterValues = None,
        features: FilterValues = None
    ) -> bool:
        """Whether every district and feature is in the catalogs."""
        return (
            not invalid_districts(split_delimited(districts))
            and not invalid_features(split_delimited(features))
        )

    @staticmethod
    def suggest_filters(results: Sequence[ResultRecord]) -> Dict[str, Any]:
        """
        Suggest filter criteria from the shape of a result list.

        Returns:
            Dictionary with ``top_district`` (most frequent district, None
            when no result has one), ``district_distribution``,
            ``top_features`` (the most common feature tags) and
            ``feature_distribution``. Ties keep first-seen order.
        """
        district_counts = Counter(r.district for r in results if r.district is not None)
        feature_counts = Counter(feature for r in results for feature in r.features)

        top_district = district_counts.most_common(1)
        return {
            "top_district": top_district[0][0] if top_district else None,
            "district_distribution": dict(district_counts),
            "top_features": [
                feature for feature, _ in feature_counts.most_common(SUGGESTED_FEATURE_COUNT)
            ],
            "feature_distribution": dict(feature_counts),
        }

    @staticmethod
    def score_distribution(results: Sequence[ResultRecord]) -> Dict[str, float]:
        """Count, min, max, average and median of result scores."""
        if not results:
            return {"count": 0, "min": 0.0, "max": 0.0, "average": 0.0, "median": 0.0}

        scores = np.array([result.score for result in results], dtype=float)
        return {
            "count": len(results),
            "min": float(scores.min()),
            "max": float(scores.max()),
            "average": float(scores.mean()),
            "median": float(np.median(scores)),
        }

    @staticmethod
    def percentile(results: Sequence[ResultRecord], score: float) -> float:
        """Percentage of results scoring strictly below ``score``."""
        if not results:
            return 0.0
        below = sum(1 for result in results if result.score < score)
        return below / len(results) * 100.0

    @staticmethod
    def ranking_changes(
        old_results: Sequence[ResultRecord],
        new_results: Sequence[ResultRecord]
    ) -> Dict[str, int]:
        """
        Rank movement of entities present in both result lists.

        Positive values mean the entity moved up.
        """
        old_ranks = {result.entity_id: position for position, result in enumerate(old_results, 1)}
        return {
            result.entity_id: old_ranks[result.entity_id] - position
            for position, result in enumerate(new_results, 1)
            if result.entity_id in old_ranks
        }

    @staticmethod
    def keyword_contributions(entity: ScorableEntity, keyword_weights: WeightTable) -> Dict[str, float]:
        """Score contribution of every term for one entity."""
        return KeywordCounter(entity.content).contributions(as_weight_table(keyword_weights))

    def get_stats(self) -> Dict[str, Any]:
        """Get service statistics."""
        with self._stats_lock:
            stats = dict(self._stats)
        return {
            **stats,
            'settings': self.settings.to_dict()
        }

    def _update_stats(self, elapsed: float) -> None:
        with self._stats_lock:
            self._stats['total_requests'] += 1

            total = self._stats['total_requests']
            current_avg = self._stats['avg_rank_time']
            self._stats['avg_rank_time'] = (current_avg * (total - 1) + elapsed) / total
