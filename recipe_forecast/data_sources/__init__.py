"""Collaborator interfaces and the in-memory reference adapter."""

from .base import (
    call_source,
    InventorySource,
    MetadataSource,
    ProductionHistorySource,
    SalesRecordSource,
    SeasonalTrendSource,
)
from .memory import InMemoryDataSource

__all__ = [
    "call_source",
    "ProductionHistorySource",
    "SalesRecordSource",
    "InventorySource",
    "SeasonalTrendSource",
    "MetadataSource",
    "InMemoryDataSource",
]
