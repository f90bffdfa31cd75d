"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    HistoryPeriod,

    # Entities
    FundHolding,
    HistoryResult,
    HistoryStats,
    NavObservation,
    SeriesPoint,

    # Helpers
    to_decimal,
)
from .portfolio import FundPosition, PortfolioSnapshot

__all__ = [
    # Enums
    "HistoryPeriod",

    # Entities
    "FundHolding",
    "FundPosition",
    "HistoryResult",
    "HistoryStats",
    "NavObservation",
    "PortfolioSnapshot",
    "SeriesPoint",

    # Helpers
    "to_decimal",
]
