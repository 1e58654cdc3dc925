"""Pagedistill configuration and event models."""

from .config import ConverterBackend, ConverterConfig, PagedistillConfig
from .events import ConvertEvent, ConvertStats, EventType, PageState

__all__ = [
    # Config
    "ConverterBackend",
    "ConverterConfig",
    "PagedistillConfig",
    # Events
    "ConvertEvent",
    "ConvertStats",
    "EventType",
    "PageState",
]
