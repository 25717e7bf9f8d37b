"""
Core engine services.

Layer-pure services that depend only on:
- studio/core/entities/*
- studio/core/interfaces/*
- studio/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from studio.core.services.audit_log import AuditLog
from studio.core.services.capacity import CapacityChecker
from studio.core.services.consumption import InventoryConsumptionEngine
from studio.core.services.costing import (
    PurchaseRecord,
    WeightedAverageCostLedger,
    purchase_notes,
    weighted_average_cost,
)
from studio.core.services.reversal import PurchaseReversal, ReversalRecord

__all__ = [
    # Capacity
    "CapacityChecker",
    # Costing
    "WeightedAverageCostLedger",
    "PurchaseRecord",
    "purchase_notes",
    "weighted_average_cost",
    # Consumption
    "InventoryConsumptionEngine",
    # Audit log
    "AuditLog",
    # Reversal
    "PurchaseReversal",
    "ReversalRecord",
]
