"""Storage seam for reconciled provider records."""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Tuple

from ffcenter.models import MatchedRecord


class ProjectionSink(Protocol):
    def upsert(self, record: MatchedRecord) -> None: ...


class ProjectionStore:
    """In-memory upsert store keyed by ``(sleeper_id, source)``.

    A later record for the same player and source replaces the earlier one but
    keeps its original position in :meth:`records`.
    """

    def __init__(self) -> None:
        self._records: Dict[Tuple[str, str], MatchedRecord] = {}

    def upsert(self, record: MatchedRecord) -> None:
        self._records[(record.sleeper_id, record.source)] = record

    def get(self, sleeper_id: str, source: str) -> Optional[MatchedRecord]:
        return self._records.get((sleeper_id, source))

    def records(self) -> List[MatchedRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
