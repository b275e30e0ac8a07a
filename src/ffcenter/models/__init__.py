"""Player models shared by ingestion, matching and storage layers."""

from .player import CanonicalPlayer, ForeignRecord, MatchedRecord, MatchResult

__all__ = ["CanonicalPlayer", "ForeignRecord", "MatchedRecord", "MatchResult"]
