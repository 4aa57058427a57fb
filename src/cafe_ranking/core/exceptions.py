"""Custom exceptions for the cafe ranking core."""


class CafeRankingError(Exception):
    """Base exception for ranking and filtering operations."""
    pass


class ValidationError(CafeRankingError):
    """Exception raised during input validation."""
    pass


class DuplicateEntityError(CafeRankingError):
    """Exception raised when an entity identifier appears more than once."""
    pass


class RankingError(CafeRankingError):
    """Exception raised during ranking operations."""
    pass


class ConfigurationError(CafeRankingError):
    """Exception raised for configuration issues."""
    pass
