"""Static catalogs and tunable settings for the ranking core."""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Depth discount: multiplier = 1 / (1 + depth * DEPTH_DISCOUNT_FACTOR)
DEPTH_DISCOUNT_FACTOR = 0.1

NORMALIZED_MIN = 0.0
NORMALIZED_MAX = 100.0

# Score assigned to every entity when all scores are tied
TIED_SCORE = 50.0

NOT_RANKED = -1

# Taipei City administrative districts
VALID_DISTRICTS: Tuple[str, ...] = (
    "中正區", "大同區", "中山區", "松山區", "大安區",
    "萬華區", "信義區", "士林區", "北投區", "內湖區",
    "南港區", "文山區",
)

FEATURE_CATEGORIES = MappingProxyType({
    "environment": ("安靜", "明亮", "舒適", "寬敞"),
    "facility": ("有插座", "有wifi", "有包廂"),
    "service": ("不限時", "CP值高", "可預約", "提供餐點", "寵物友善"),
})

VALID_FEATURES: Tuple[str, ...] = (
    "不限時", "有插座", "有wifi", "CP值高",
    "安靜", "明亮", "舒適", "寬敞",
    "有包廂", "可預約", "提供餐點", "寵物友善",
)


class DuplicatePolicy(str, Enum):
    """How the ranker treats entities that share an identifier."""
    KEEP_FIRST = "keep_first"
    ERROR = "error"


class RankingSettings(BaseModel):
    """Immutable settings shared by every request a service handles."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    depth_factor: float = Field(DEPTH_DISCOUNT_FACTOR, gt=0.0, description="Depth discount factor")
    duplicate_policy: DuplicatePolicy = Field(DuplicatePolicy.KEEP_FIRST, description="Duplicate id handling")
    collect_statistics: bool = Field(False, description="Record per-stage filter statistics")
    default_top_n: Optional[int] = Field(None, ge=1, le=1000, description="Default result limit")
    log_level: str = Field("INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is one the logging module knows."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for diagnostics."""
        return self.model_dump(mode="json")
