"""Keyword and depth based ranking of scorable entities."""

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np

from ..config import (
    DEPTH_DISCOUNT_FACTOR,
    NORMALIZED_MAX,
    NORMALIZED_MIN,
    NOT_RANKED,
    TIED_SCORE,
    DuplicatePolicy,
)
from ..models.entity import ScorableEntity
from ..models.keyword import WeightTable, as_weight_table
from ..models.result import ResultRecord
from ..models.tree import PageNode
from .exceptions import DuplicateEntityError

logger = logging.getLogger(__name__)

EntityRef = Union[ScorableEntity, str]


class Ranker:
    """
    Scores, normalizes and orders a set of entities.

    Scores live in a side table keyed by entity id; entities themselves are
    never modified. A ranker holds mutable state and is meant to be created
    per request.

    Typical pass::

        ranker = Ranker(entities)
        ranker.compute_final_scores(weights, depths)
        ranker.normalize_scores()
        results = ranker.get_ranked_results()

    Entities with equal scores keep the order in which they were tracked.
    """

    def __init__(
        self,
        entities: Optional[Iterable[ScorableEntity]] = None,
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST,
        depth_factor: float = DEPTH_DISCOUNT_FACTOR
    ):
        """
        Initialize ranker.

        Args:
            entities: Entities to rank, in insertion order
            duplicate_policy: Handling of entities sharing an id
            depth_factor: Discount per level of depth

        Raises:
            DuplicateEntityError: If ids repeat and the policy is ERROR
        """
        if depth_factor <= 0:
            raise ValueError("Depth factor must be positive")

        self.duplicate_policy = DuplicatePolicy(duplicate_policy)
        self.depth_factor = depth_factor

        self._entities: Dict[str, ScorableEntity] = {}
        self._scores: Dict[str, float] = {}
        self._max_score = 0.0
        self._min_score = math.inf
        self._normalized = False

        for entity in entities or []:
            self._track(entity)

    def _track(self, entity: ScorableEntity) -> bool:
        if entity.id in self._entities:
            if self.duplicate_policy == DuplicatePolicy.ERROR:
                raise DuplicateEntityError(f"Duplicate entity ID found: {entity.id}")
            logger.debug(f"Skipping duplicate entity {entity.id}")
            return False

        self._entities[entity.id] = entity
        return True

    @property
    def entities(self) -> List[ScorableEntity]:
        """Tracked entities in insertion order."""
        return list(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)

    def compute_final_scores(
        self,
        keyword_weights: WeightTable,
        depths: Optional[Mapping[str, int]] = None
    ) -> None:
        """
        Compute base x depth scores for every tracked entity.

        Args:
            keyword_weights: Term -> weight mapping or iterable of Keyword
            depths: Optional entity id -> tree depth; missing ids use depth 0
        """
        weights = as_weight_table(keyword_weights)
        depths = depths or {}

        self.reset()

        for entity_id, entity in self._entities.items():
            base_score = entity.compute_base_score(weights)
            final_score = base_score * self.apply_depth_weight(depths.get(entity_id))

            self._scores[entity_id] = final_score

            if final_score > self._max_score:
                self._max_score = final_score
            if final_score < self._min_score:
                self._min_score = final_score

        logger.debug(
            f"Computed scores for {len(self._scores)} entities "
            f"(min={self._min_score}, max={self._max_score})"
        )

    def apply_depth_weight(self, depth: Union[int, PageNode, None]) -> float:
        """
        Depth discount multiplier ``1 / (1 + depth * factor)``.

        Args:
            depth: Tree depth, a PageNode, or None for root level

        Returns:
            Multiplier in (0, 1]; 1.0 for depth 0 or no annotation

        Raises:
            ValueError: If depth is negative
        """
        if depth is None:
            return 1.0
        if isinstance(depth, PageNode):
            depth = depth.depth
        if depth < 0:
            raise ValueError("Depth cannot be negative")
        return 1.0 / (1.0 + depth * self.depth_factor)

    def normalize_scores(self) -> None:
        """
        Rescale stored scores onto [0, 100] with min-max normalization.

        When every score is equal (including a single entity) all scores
        become exactly 50.0.
        """
        if not self._scores:
            return

        self._refresh_bounds()

        if self._max_score == self._min_score:
            for entity_id in self._scores:
                self._scores[entity_id] = TIED_SCORE
            self._max_score = self._min_score = TIED_SCORE
        else:
            span = self._max_score - self._min_score
            for entity_id, score in self._scores.items():
                self._scores[entity_id] = (score - self._min_score) / span * NORMALIZED_MAX
            self._max_score = NORMALIZED_MAX
            self._min_score = NORMALIZED_MIN

        self._normalized = True

    def _score_array(self, entity_ids: List[str]) -> np.ndarray:
        return np.array([self._scores.get(entity_id, 0.0) for entity_id in entity_ids], dtype=float)

    def sort_by_score(self) -> List[ScorableEntity]:
        """Entities by descending score; ties keep insertion order."""
        entity_ids = list(self._entities)
        if not entity_ids:
            return []

        order = np.argsort(-self._score_array(entity_ids), kind="stable")
        return [self._entities[entity_ids[i]] for i in order]

    def get_ranked_results(self) -> List[ResultRecord]:
        """Result records in ranked order, with cafe fields copied over."""
        return [
            ResultRecord.from_entity(entity, self._scores.get(entity.id, 0.0), rank)
            for rank, entity in enumerate(self.sort_by_score(), 1)
        ]

    def get_top_n(self, n: int) -> List[ScorableEntity]:
        """First ``min(n, size)`` entities of the sorted order."""
        if n <= 0:
            return []
        return self.sort_by_score()[:n]

    def filter_by_score_range(self, min_score: float, max_score: float) -> List[ScorableEntity]:
        """Entities whose current score lies in [min_score, max_score]."""
        entity_ids = list(self._entities)
        if not entity_ids:
            return []

        scores = self._score_array(entity_ids)
        mask = (scores >= min_score) & (scores <= max_score)
        return [self._entities[entity_ids[i]] for i in np.flatnonzero(mask)]

    def get_average_score(self) -> float:
        """Mean of stored scores; 0.0 when nothing has been scored."""
        if not self._scores:
            return 0.0
        return float(np.mean(list(self._scores.values())))

    def get_score(self, entity: EntityRef) -> float:
        return self._scores.get(self._entity_id(entity), 0.0)

    def get_rank(self, entity: EntityRef) -> int:
        """1-based rank of an entity, or NOT_RANKED if it is not tracked."""
        entity_id = self._entity_id(entity)
        if entity_id not in self._entities:
            return NOT_RANKED

        for rank, ranked in enumerate(self.sort_by_score(), 1):
            if ranked.id == entity_id:
                return rank
        return NOT_RANKED

    def add_page(self, entity: ScorableEntity) -> None:
        """Track an entity; no-op if its id is already tracked."""
        if entity.id in self._entities:
            return
        self._entities[entity.id] = entity

    def remove_page(self, entity: EntityRef) -> None:
        """Stop tracking an entity and drop its stored score."""
        entity_id = self._entity_id(entity)
        self._entities.pop(entity_id, None)
        if self._scores.pop(entity_id, None) is not None:
            self._refresh_bounds()

    def _refresh_bounds(self) -> None:
        if not self._scores:
            self._max_score = 0.0
            self._min_score = math.inf
            return

        scores = np.fromiter(self._scores.values(), dtype=float, count=len(self._scores))
        self._max_score = float(scores.max())
        self._min_score = float(scores.min())

    def reset(self) -> None:
        """Clear computed scores and min/max trackers; keep tracked entities."""
        self._scores.clear()
        self._max_score = 0.0
        self._min_score = math.inf
        self._normalized = False

    def get_stats(self) -> Dict[str, Any]:
        """Get ranking statistics."""
        return {
            "total_entities": len(self._entities),
            "scored_entities": len(self._scores),
            "max_score": self._max_score if self._scores else 0.0,
            "min_score": self._min_score if self._scores else 0.0,
            "average_score": self.get_average_score(),
            "normalized": self._normalized,
        }

    @staticmethod
    def _entity_id(entity: EntityRef) -> str:
        return entity if isinstance(entity, str) else entity.id
