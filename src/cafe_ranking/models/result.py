"""Ranked result record model."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .entity import Cafe, ScorableEntity


@dataclass(frozen=True)
class ResultRecord:
    """
    Read-only projection of a ranked entity.

    Attributes:
        entity_id: Identifier of the source entity
        name: Display name
        url: Location URL
        score: Final score (normalized to 0-100 once normalization ran)
        rank: Result ranking position (1-based)
        district: District for cafe entities, else None
        address: Address for cafe entities, else None
        phone: Phone for cafe entities, else None
        rating: Rating for cafe entities, else None
        features: Feature tags (empty for non-cafe entities)
        tags: Hashtags (empty for non-cafe entities)
    """
    entity_id: str
    name: str
    url: str
    score: float
    rank: int
    district: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    rating: Optional[float] = None
    features: Tuple[str, ...] = field(default_factory=tuple)
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate result record."""
        if self.rank <= 0:
            raise ValueError("Rank must be positive")
        if self.score < 0.0:
            raise ValueError("Score cannot be negative")

    @classmethod
    def from_entity(cls, entity: ScorableEntity, score: float, rank: int) -> "ResultRecord":
        """Project an entity, copying cafe fields when the entity carries them."""
        if isinstance(entity, Cafe):
            return cls(
                entity_id=entity.id,
                name=entity.name,
                url=entity.url,
                score=score,
                rank=rank,
                district=entity.district,
                address=entity.address,
                phone=entity.phone,
                rating=entity.rating,
                features=entity.features,
                tags=entity.tags,
            )
        return cls(entity_id=entity.id, name=entity.name, url=entity.url, score=score, rank=rank)

    def with_rank(self, rank: int) -> "ResultRecord":
        """Copy of this record at a different position."""
        return replace(self, rank=rank)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.entity_id,
            "name": self.name,
            "url": self.url,
            "score": round(self.score, 2),
            "rank": self.rank,
            "district": self.district,
            "address": self.address,
            "phone": self.phone,
            "rating": self.rating,
            "features": list(self.features),
            "tags": list(self.tags),
        }
