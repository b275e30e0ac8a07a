"""Lookup tables from cross-provider identifiers to Sleeper ids."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ffcenter.identity.normalize import normalize_name
from ffcenter.models import CanonicalPlayer
from ffcenter.models.player import IDENTIFIER_FIELDS


logger = logging.getLogger(__name__)

NAME_TIER = "name"

# Most stable identifier first; names are the least reliable key.
MATCH_TIERS: tuple[str, ...] = (*IDENTIFIER_FIELDS, NAME_TIER)


def identifier_key(value: Any) -> str | None:
    """Coerce a numeric or string identifier to its lookup form.

    ``123``, ``123.0`` and ``" 123 "`` all key as ``"123"``. Empty values
    return ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            value = int(value)
    text = str(value).strip()
    return text or None


def tier_key(tier: str, value: Any) -> str | None:
    if tier == NAME_TIER:
        return normalize_name(value) or None
    return identifier_key(value)


@dataclass(frozen=True)
class IndexCollision:
    tier: str
    key: str
    previous: str
    current: str


@dataclass
class IdentityIndex:
    """One table per tier, built once per ingestion run."""

    tables: Dict[str, Dict[str, str]] = field(
        default_factory=lambda: {tier: {} for tier in MATCH_TIERS}
    )
    collisions: List[IndexCollision] = field(default_factory=list)

    def add(self, tier: str, value: Any, sleeper_id: str) -> None:
        key = tier_key(tier, value)
        if key is None:
            return
        table = self.tables.setdefault(tier, {})
        previous = table.get(key)
        if previous is not None and previous != sleeper_id:
            # Last write wins; keep a trail for data-quality review.
            self.collisions.append(IndexCollision(tier, key, previous, sleeper_id))
            logger.debug("Index collision on %s=%s: %s replaced by %s", tier, key, previous, sleeper_id)
        table[key] = sleeper_id

    def lookup(self, tier: str, value: Any) -> str | None:
        key = tier_key(tier, value)
        if key is None:
            return None
        return self.tables.get(tier, {}).get(key)

    def sizes(self) -> dict[str, int]:
        return {tier: len(self.tables.get(tier, {})) for tier in MATCH_TIERS}


def build_indices(players: Iterable[CanonicalPlayer | Mapping[str, Any]]) -> IdentityIndex:
    """Index ``players`` by every identifier tier and by normalized name."""

    if isinstance(players, (str, bytes, Mapping)) or not isinstance(players, Iterable):
        raise TypeError(f"players must be an iterable of CanonicalPlayer, got {type(players).__name__}")

    index = IdentityIndex()
    count = 0
    for player in players:
        if isinstance(player, Mapping):
            player = CanonicalPlayer.model_validate(player)
        for tier in IDENTIFIER_FIELDS:
            index.add(tier, getattr(player, tier), player.sleeper_id)
        index.add(NAME_TIER, player.search_full_name, player.sleeper_id)
        count += 1

    logger.debug("Indexed %s players: %s", count, index.sizes())
    if index.collisions:
        logger.debug("Index build recorded %s identifier collisions", len(index.collisions))
    return index
