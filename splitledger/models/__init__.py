"""Models package - Import all models for SQLAlchemy registration."""
from splitledger.models.settlement import SettlementRecord, SettlementStatus

__all__ = [
    "SettlementRecord",
    "SettlementStatus",
]
