"""Cross-provider player identity reconciliation.

Matching tries identifiers in a fixed priority order and stops at the first
hit: GSIS, ESPN, Yahoo, Rotowire, Rotoworld, then the normalized name.
"""

from .index import MATCH_TIERS, NAME_TIER, IdentityIndex, IndexCollision, build_indices, identifier_key
from .matcher import MatchBatch, match_records, resolve_record
from .normalize import normalize_name

__all__ = [
    "MATCH_TIERS",
    "NAME_TIER",
    "IdentityIndex",
    "IndexCollision",
    "MatchBatch",
    "build_indices",
    "identifier_key",
    "match_records",
    "normalize_name",
    "resolve_record",
]
