"""Resolve foreign records onto canonical players, one tier at a time."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, List

from ffcenter.identity.index import MATCH_TIERS, NAME_TIER, IdentityIndex
from ffcenter.models import ForeignRecord, MatchedRecord, MatchResult


logger = logging.getLogger(__name__)


@dataclass
class MatchBatch:
    matched: List[MatchedRecord] = field(default_factory=list)
    unmatched: List[ForeignRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.matched) + len(self.unmatched)

    def method_counts(self) -> dict[str, int]:
        """Matches per tier, in tier priority order."""

        counts = Counter(record.match_method for record in self.matched)
        return {tier: counts[tier] for tier in MATCH_TIERS if counts[tier]}


def _as_record(record: ForeignRecord | Mapping[str, Any]) -> ForeignRecord:
    if isinstance(record, Mapping):
        return ForeignRecord.model_validate(record)
    return record


def resolve_record(record: ForeignRecord | Mapping[str, Any], index: IdentityIndex) -> MatchResult:
    """Try each tier in priority order and stop at the first hit.

    Plain mappings are accepted and read as :class:`ForeignRecord`.
    """

    record = _as_record(record)
    for tier in MATCH_TIERS:
        value = record.name if tier == NAME_TIER else record.identifier(tier)
        sleeper_id = index.lookup(tier, value)
        if sleeper_id is not None:
            return MatchResult(matched=True, sleeper_id=sleeper_id, match_method=tier)
    return MatchResult.miss()


def match_records(
    records: Iterable[ForeignRecord | Mapping[str, Any]],
    index: IdentityIndex,
) -> MatchBatch:
    """Split ``records`` into matched and unmatched, preserving input order."""

    if not isinstance(index, IdentityIndex):
        raise TypeError(f"index must be an IdentityIndex, got {type(index).__name__}")
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise TypeError(f"records must be an iterable of ForeignRecord, got {type(records).__name__}")

    batch = MatchBatch()
    for item in records:
        record = _as_record(item)
        result = resolve_record(record, index)
        if result.matched:
            batch.matched.append(
                MatchedRecord.from_record(
                    record,
                    sleeper_id=result.sleeper_id,
                    match_method=result.match_method,
                )
            )
            logger.debug("Matched %r via %s -> %s", record.name, result.match_method, result.sleeper_id)
        else:
            batch.unmatched.append(record)
            logger.debug("No identity match for %r", record.name)
    return batch
