"""Input validation utilities for callers of the ranking core."""

from typing import Iterable, List, Mapping, Optional

from ..config import VALID_DISTRICTS, VALID_FEATURES
from ..core.exceptions import DuplicateEntityError, ValidationError
from ..models.entity import Cafe, ScorableEntity


MAX_BATCH_SIZE = 10000


def validate_entity(entity: ScorableEntity) -> None:
    """
    Validate entity object.

    Args:
        entity: Entity to validate

    Raises:
        ValidationError: If entity is invalid
    """
    if not isinstance(entity, ScorableEntity):
        raise ValidationError("Invalid entity type")

    if not entity.id or not entity.id.strip():
        raise ValidationError("Entity ID is required")

    if isinstance(entity, Cafe) and not 0.0 <= entity.rating <= 5.0:
        raise ValidationError(f"Rating {entity.rating} is outside 0.0-5.0")


def validate_entities_batch(entities: Iterable[ScorableEntity], allow_duplicates: bool = True) -> None:
    """
    Validate a batch of entities.

    Args:
        entities: Entities to validate
        allow_duplicates: Whether repeated ids are acceptable

    Raises:
        ValidationError: If any entity is invalid or the batch is too large
        DuplicateEntityError: If ids repeat and duplicates are not allowed
    """
    seen = set()
    for count, entity in enumerate(entities, 1):
        if count > MAX_BATCH_SIZE:
            raise ValidationError(f"Cannot rank more than {MAX_BATCH_SIZE:,} entities in a single batch")

        validate_entity(entity)

        if entity.id in seen and not allow_duplicates:
            raise DuplicateEntityError(f"Duplicate entity ID found: {entity.id}")
        seen.add(entity.id)


def validate_keyword_weights(weights: Optional[Mapping[str, float]]) -> None:
    """
    Validate a keyword weight table.

    Raises:
        ValidationError: If a term is empty or a weight is negative
    """
    if not weights:
        return

    for term, weight in weights.items():
        if not term or not term.strip():
            raise ValidationError("Empty keyword term in weight table")
        if weight < 0:
            raise ValidationError(f"Keyword weight for '{term}' must be non-negative")


def invalid_districts(districts: Optional[Iterable[str]]) -> List[str]:
    """Names that are not in the district catalog."""
    return [d for d in districts or [] if d not in VALID_DISTRICTS]


def invalid_features(features: Optional[Iterable[str]]) -> List[str]:
    """Tags that are not in the feature catalog."""
    return [f for f in features or [] if f not in VALID_FEATURES]


def validate_districts(districts: Optional[Iterable[str]]) -> None:
    """
    Validate district names against the catalog.

    Raises:
        ValidationError: If any district is unknown
    """
    unknown = invalid_districts(districts)
    if unknown:
        raise ValidationError(f"Unknown districts: {', '.join(unknown)}")


def validate_features(features: Optional[Iterable[str]]) -> None:
    """
    Validate feature tags against the catalog.

    Raises:
        ValidationError: If any feature is unknown
    """
    unknown = invalid_features(features)
    if unknown:
        raise ValidationError(f"Unknown features: {', '.join(unknown)}")


def validate_filter_request(
    districts: Optional[Iterable[str]] = None,
    features: Optional[Iterable[str]] = None
) -> None:
    """Validate both halves of a filter request."""
    validate_districts(districts)
    validate_features(features)
