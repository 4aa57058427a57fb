"""Scorable entity data models with validation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from ..utils.text_processing import KeywordCounter


def _as_tuple(values: Any) -> Tuple[str, ...]:
    """Freeze a tag collection; a bare string is a single tag."""
    if not values:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class ScorableEntity:
    """
    A rankable page or site.

    Entities are immutable; the ranker keeps scores in its own table keyed
    by ``id`` and never writes back onto the entity.

    Attributes:
        id: Stable unique identifier
        name: Display name
        url: Location URL
        content: Text the keywords are counted in
    """
    id: str
    name: str
    url: str = ""
    content: str = ""

    def __post_init__(self) -> None:
        """Validate entity after initialization."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Entity ID cannot be empty")

    def compute_base_score(self, weights: Mapping[str, float]) -> float:
        """
        Compute the keyword relevance score of this entity.

        Args:
            weights: Term to weight mapping

        Returns:
            Non-negative base score (sum of occurrence count x weight)
        """
        if not weights:
            return 0.0
        return KeywordCounter(self.content).weighted_score(weights)

    @property
    def preview(self) -> str:
        """First 200 characters of content."""
        if len(self.content) <= 200:
            return self.content
        return self.content[:200] + "..."


@dataclass(frozen=True)
class Cafe(ScorableEntity):
    """
    Coffee shop entity with category-specific attributes.

    Attributes:
        phone: Contact phone number
        rating: Average rating (0.0-5.0)
        features: Feature tags used by FeatureFilter
        tags: Free-form hashtags
        district: Administrative district used by DistrictFilter
        address: Street address
        opening_hours: Opening hours text
        review_count: Number of user reviews
    """
    phone: Optional[str] = None
    rating: float = 0.0
    features: Tuple[str, ...] = field(default_factory=tuple)
    tags: Tuple[str, ...] = field(default_factory=tuple)
    district: Optional[str] = None
    address: Optional[str] = None
    opening_hours: Optional[str] = None
    review_count: int = 0

    def __post_init__(self) -> None:
        """Validate cafe and freeze collection fields."""
        super().__post_init__()
        if not 0.0 <= self.rating <= 5.0:
            raise ValueError("Rating must be between 0.0 and 5.0")
        if self.review_count < 0:
            raise ValueError("Review count cannot be negative")
        object.__setattr__(self, "features", _as_tuple(self.features))
        object.__setattr__(self, "tags", _as_tuple(self.tags))

    @property
    def google_map_url(self) -> str:
        """Google Maps search link for the address."""
        if not self.address:
            return ""
        return "https://www.google.com/maps/search/?api=1&query=" + self.address.replace(" ", "+")

    def has_feature(self, feature: str) -> bool:
        return feature in self.features


class EntityModel(BaseModel):
    """Pydantic model for entity validation in API contexts."""

    id: str = Field(..., min_length=1, description="Unique entity identifier")
    name: str = Field(..., description="Display name")
    url: str = Field("", description="Location URL")
    content: str = Field("", description="Page text content")
    phone: Optional[str] = Field(None, description="Contact phone")
    rating: Optional[float] = Field(None, ge=0.0, le=5.0, description="Average rating")
    features: List[str] = Field(default_factory=list, description="Feature tags")
    tags: List[str] = Field(default_factory=list, description="Hashtags")
    district: Optional[str] = Field(None, description="District name")
    address: Optional[str] = Field(None, description="Street address")
    opening_hours: Optional[str] = Field(None, description="Opening hours")
    review_count: int = Field(0, ge=0, description="Number of reviews")

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Ensure id is not just whitespace."""
        if not v.strip():
            raise ValueError('Entity ID cannot be empty or whitespace only')
        return v.strip()

    @property
    def is_cafe(self) -> bool:
        """Whether any cafe-specific field is present."""
        return any([
            self.phone, self.rating is not None, self.features, self.tags,
            self.district, self.address, self.opening_hours, self.review_count,
        ])

    def to_entity(self) -> ScorableEntity:
        """Convert to Cafe when cafe fields are present, else ScorableEntity."""
        if not self.is_cafe:
            return ScorableEntity(id=self.id, name=self.name, url=self.url, content=self.content)
        return Cafe(
            id=self.id,
            name=self.name,
            url=self.url,
            content=self.content,
            phone=self.phone,
            rating=self.rating or 0.0,
            features=tuple(self.features),
            tags=tuple(self.tags),
            district=self.district,
            address=self.address,
            opening_hours=self.opening_hours,
            review_count=self.review_count,
        )

    @classmethod
    def from_entity(cls, entity: ScorableEntity) -> "EntityModel":
        """Build a model from an entity dataclass."""
        data: Dict[str, Any] = {
            "id": entity.id,
            "name": entity.name,
            "url": entity.url,
            "content": entity.content,
        }
        if isinstance(entity, Cafe):
            data.update(
                phone=entity.phone,
                rating=entity.rating,
                features=list(entity.features),
                tags=list(entity.tags),
                district=entity.district,
                address=entity.address,
                opening_hours=entity.opening_hours,
                review_count=entity.review_count,
            )
        return cls(**data)
