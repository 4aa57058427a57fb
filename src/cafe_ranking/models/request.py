"""Ranking request model with filter configuration parsing."""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..filters.chain import FilterChain
from ..filters.district import DistrictFilter
from ..filters.feature import FeatureFilter
from ..filters.rating import RatingFilter
from ..filters.tag import TagFilter
from ..utils.validators import invalid_districts, invalid_features
from .entity import EntityModel, ScorableEntity


def split_delimited(value: Any) -> List[str]:
    """
    Turn a comma-delimited string or a collection into a clean list.

    Blank items are dropped and duplicates removed, keeping first-seen order.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)

    cleaned: List[str] = []
    for item in items:
        item = str(item).strip()
        if item and item not in cleaned:
            cleaned.append(item)
    return cleaned


def build_filter_chain(
    districts: Optional[Iterable[str]] = None,
    features: Optional[Iterable[str]] = None,
    match_all: bool = True,
    min_rating: Optional[float] = None,
    max_rating: Optional[float] = None,
    tags: Optional[Iterable[str]] = None,
    match_all_tags: bool = True,
    collect_statistics: bool = False
) -> FilterChain:
    """
    Build a chain with one stage per configured constraint.

    Stages run in the order district, feature, rating, tag. Districts, features
    and tags may be comma-delimited strings.
    """
    districts = split_delimited(districts)
    features = split_delimited(features)
    tags = split_delimited(tags)

    chain = FilterChain(collect_statistics=collect_statistics)
    if districts:
        chain.add_filter(DistrictFilter(districts))
    if features:
        chain.add_filter(FeatureFilter(features, match_all=match_all))
    if min_rating is not None or max_rating is not None:
        chain.add_filter(RatingFilter(min_rating, max_rating))
    if tags:
        chain.add_filter(TagFilter(tags, match_all=match_all_tags))
    return chain


class RankingRequestModel(BaseModel):
    """Pydantic model for a ranking request in API contexts."""

    entities: List[EntityModel] = Field(default_factory=list, description="Candidate entities")
    keywords: Dict[str, float] = Field(default_factory=dict, description="Keyword weight table")
    depths: Dict[str, int] = Field(default_factory=dict, description="Entity id -> tree depth")
    districts: List[str] = Field(default_factory=list, description="Allowed districts")
    features: List[str] = Field(default_factory=list, description="Required features")
    match_all: bool = Field(True, description="Require every feature instead of any")
    min_rating: Optional[float] = Field(None, ge=0.0, le=5.0, description="Lowest accepted rating")
    max_rating: Optional[float] = Field(None, ge=0.0, le=5.0, description="Highest accepted rating")
    tags: List[str] = Field(default_factory=list, description="Required hashtags")
    match_all_tags: bool = Field(True, description="Require every tag instead of any")
    top_n: Optional[int] = Field(None, ge=1, le=1000, description="Maximum results to return")

    @field_validator('districts', 'features', 'tags', mode='before')
    @classmethod
    def parse_delimited(cls, v: Any) -> List[str]:
        """Accept comma-delimited strings as well as lists."""
        return split_delimited(v)

    @field_validator('districts')
    @classmethod
    def validate_districts(cls, v: List[str]) -> List[str]:
        """Reject district names outside the catalog."""
        unknown = invalid_districts(v)
        if unknown:
            raise ValueError(f"Unknown districts: {', '.join(unknown)}")
        return v

    @field_validator('features')
    @classmethod
    def validate_features(cls, v: List[str]) -> List[str]:
        """Reject feature tags outside the catalog."""
        unknown = invalid_features(v)
        if unknown:
            raise ValueError(f"Unknown features: {', '.join(unknown)}")
        return v

    @field_validator('keywords')
    @classmethod
    def validate_keywords(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Ensure terms are non-empty and weights non-negative."""
        cleaned: Dict[str, float] = {}
        for term, weight in v.items():
            if not term.strip():
                raise ValueError('Keyword term cannot be empty or whitespace only')
            if weight < 0:
                raise ValueError(f"Keyword weight for '{term}' must be non-negative")
            cleaned[term.strip()] = weight
        return cleaned

    @field_validator('depths')
    @classmethod
    def validate_depths(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Ensure depths are non-negative."""
        for entity_id, depth in v.items():
            if depth < 0:
                raise ValueError(f"Depth for '{entity_id}' cannot be negative")
        return v

    @model_validator(mode='after')
    def validate_rating_range(self) -> "RankingRequestModel":
        """Ensure the rating range is not inverted."""
        if (
            self.min_rating is not None
            and self.max_rating is not None
            and self.min_rating > self.max_rating
        ):
            raise ValueError("min_rating cannot exceed max_rating")
        return self

    def to_entities(self) -> List[ScorableEntity]:
        """Convert entity payloads to entity dataclasses."""
        return [model.to_entity() for model in self.entities]

    def to_filter_chain(self, collect_statistics: bool = False) -> FilterChain:
        """Build district, feature, rating and tag stages for the configured constraints."""
        return build_filter_chain(
            districts=self.districts,
            features=self.features,
            match_all=self.match_all,
            min_rating=self.min_rating,
            max_rating=self.max_rating,
            tags=self.tags,
            match_all_tags=self.match_all_tags,
            collect_statistics=collect_statistics,
        )
