"""Request-level service API."""

from .service import RankingService, RankingResponse

__all__ = ["RankingService", "RankingResponse"]
