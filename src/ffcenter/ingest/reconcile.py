"""Reconcile provider rows onto the canonical Sleeper player set."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ffcenter.config import get_provider
from ffcenter.identity import build_indices, identifier_key, match_records
from ffcenter.models import CanonicalPlayer, ForeignRecord, MatchedRecord
from ffcenter.models.player import IDENTIFIER_FIELDS
from ffcenter.persistence import ProjectionSink


logger = logging.getLogger(__name__)

_UNMATCHED_SAMPLE_ENV = "FFCENTER_UNMATCHED_SAMPLE"
_UNMATCHED_SAMPLE_DEFAULT = 10


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def default_sample_size() -> int:
    return _env_int(_UNMATCHED_SAMPLE_ENV, _UNMATCHED_SAMPLE_DEFAULT, min_value=0)


def players_from_sleeper(
    payload: Mapping[str, Mapping[str, Any]] | Iterable[Mapping[str, Any]],
) -> List[CanonicalPlayer]:
    """Accept Sleeper's ``/players/nfl`` dict (keyed by id) or a plain list."""

    if isinstance(payload, Mapping):
        entries: List[Mapping[str, Any]] = []
        for player_id, entry in payload.items():
            data = dict(entry)
            data.setdefault("player_id", player_id)
            entries.append(data)
    else:
        entries = list(payload)
    return [CanonicalPlayer.from_sleeper(entry) for entry in entries]


def rows_to_records(
    rows: Sequence[Mapping[str, Any]],
    *,
    provider: str = "fantasypros",
    mapping: Mapping[str, str] | None = None,
) -> List[ForeignRecord]:
    """Rename raw provider rows using the provider's column mapping.

    ``mapping`` entries override the profile defaults field by field.
    """

    profile = get_provider(provider)
    field_mapping = dict(profile.field_mapping)
    if mapping:
        field_mapping.update(mapping)
    return [ForeignRecord.from_mapping(row, field_mapping, source=profile.source) for row in rows]


def _describe(record: ForeignRecord) -> str:
    if record.name:
        return record.name
    for tier in IDENTIFIER_FIELDS:
        key = identifier_key(record.identifier(tier))
        if key:
            return f"{tier}={key}"
    return "<unnamed>"


@dataclass(frozen=True)
class ReconcileReport:
    total_records: int
    matched_records: int
    unmatched_records: int
    match_methods: Dict[str, int] = field(default_factory=dict)
    index_collisions: int = 0
    unmatched_sample: List[str] = field(default_factory=list)


@dataclass
class ReconcileOutput:
    matched: List[MatchedRecord]
    unmatched: List[ForeignRecord]
    report: ReconcileReport


def reconcile(
    players: Iterable[CanonicalPlayer],
    records: Iterable[ForeignRecord],
    *,
    sink: Optional[ProjectionSink] = None,
    sample_size: int | None = None,
) -> ReconcileOutput:
    """Build indices from ``players``, match ``records`` and hand hits to ``sink``."""

    if sample_size is None:
        sample_size = default_sample_size()

    index = build_indices(players)
    batch = match_records(records, index)

    if sink is not None:
        for record in batch.matched:
            sink.upsert(record)

    report = ReconcileReport(
        total_records=len(batch),
        matched_records=len(batch.matched),
        unmatched_records=len(batch.unmatched),
        match_methods=batch.method_counts(),
        index_collisions=len(index.collisions),
        unmatched_sample=[_describe(record) for record in batch.unmatched[: max(0, sample_size)]],
    )
    logger.info(
        "Reconciled %s/%s records (%s unmatched) methods=%s",
        report.matched_records,
        report.total_records,
        report.unmatched_records,
        report.match_methods,
    )
    if report.total_records and not report.matched_records:
        logger.warning("No provider records matched canonical players")
    if report.index_collisions:
        logger.info("Identity index overwrote %s colliding identifiers", report.index_collisions)
    return ReconcileOutput(matched=batch.matched, unmatched=batch.unmatched, report=report)
