"""Utility modules for the ranking core."""

from .text_processing import KeywordCounter
from .logging_config import setup_logging, StructuredLogger

__all__ = ["KeywordCounter", "setup_logging", "StructuredLogger"]
