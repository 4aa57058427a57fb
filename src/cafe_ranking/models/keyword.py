"""Keyword weight model and weight table helpers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator


class KeywordTier(str, Enum):
    """Keyword importance tiers, derived from weight."""
    CORE = "core"            # 2.0 - 3.0
    SECONDARY = "secondary"  # 1.0 - 1.9
    REFERENCE = "reference"  # 0.5 - 1.0

    @classmethod
    def from_weight(cls, weight: float) -> "KeywordTier":
        """Classify a weight into a tier."""
        if weight >= 2.0:
            return cls.CORE
        if weight >= 1.0:
            return cls.SECONDARY
        return cls.REFERENCE


@dataclass
class Keyword:
    """
    Search term with a relevance weight.

    Attributes:
        term: Keyword text
        weight: Non-negative weight applied per occurrence
        category: Optional grouping (environment, service, ...)
        tier: Importance tier; derived from weight when omitted
    """
    term: str
    weight: float
    category: str = ""
    tier: Optional[KeywordTier] = None
    original_weight: float = field(init=False)

    def __post_init__(self) -> None:
        """Validate keyword after initialization."""
        if not self.term or not self.term.strip():
            raise ValueError("Keyword term cannot be empty")
        if self.weight < 0:
            raise ValueError("Keyword weight must be non-negative")
        if self.tier is None:
            self.tier = KeywordTier.from_weight(self.weight)
        self.original_weight = self.weight

    def boost(self, multiplier: float) -> None:
        """Scale the weight relative to the original weight."""
        if multiplier < 0:
            raise ValueError("Boost multiplier must be non-negative")
        self.weight = self.original_weight * multiplier

    def reset_weight(self) -> None:
        """Restore the original weight."""
        self.weight = self.original_weight

    @property
    def is_core(self) -> bool:
        return self.tier == KeywordTier.CORE

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "term": self.term,
            "weight": round(self.weight, 2),
            "tier": self.tier.value,
            "category": self.category,
        }


class KeywordModel(BaseModel):
    """Pydantic model for keyword validation in API contexts."""

    term: str = Field(..., min_length=1, description="Keyword text")
    weight: float = Field(..., ge=0.0, description="Keyword weight")
    category: str = Field("", description="Keyword category")

    @field_validator('term')
    @classmethod
    def validate_term(cls, v: str) -> str:
        """Ensure term is not just whitespace."""
        if not v.strip():
            raise ValueError('Keyword term cannot be empty or whitespace only')
        return v.strip()

    def to_keyword(self) -> Keyword:
        """Convert to Keyword dataclass."""
        return Keyword(term=self.term, weight=self.weight, category=self.category)


WeightTable = Union[Mapping[str, float], Iterable[Keyword], None]


def as_weight_table(keywords: WeightTable) -> Dict[str, float]:
    """
    Normalize a keyword weight table into a term -> weight dict.

    Accepts a mapping, an iterable of Keyword objects, or None (empty table).
    Later entries for the same term override earlier ones.
    """
    if keywords is None:
        return {}
    if isinstance(keywords, Mapping):
        return {term: float(weight) for term, weight in keywords.items()}
    return {keyword.term: float(keyword.weight) for keyword in keywords}
