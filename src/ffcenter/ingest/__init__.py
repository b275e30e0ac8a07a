"""Input adapters that turn provider payloads into reconciled records."""

from .reconcile import (
    ReconcileOutput,
    ReconcileReport,
    players_from_sleeper,
    reconcile,
    rows_to_records,
)

__all__ = [
    "ReconcileOutput",
    "ReconcileReport",
    "players_from_sleeper",
    "reconcile",
    "rows_to_records",
]
