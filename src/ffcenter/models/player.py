"""Canonical and foreign player models shared across ingestion and matching."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


IdentifierValue = Union[str, int, float, None]

DEFAULT_SOURCE = "FantasyPros"

# Identifier fields shared by canonical players and provider rows.
IDENTIFIER_FIELDS = ("gsis_id", "espn_id", "yahoo_id", "rotowire_id", "rotoworld_id")


class CanonicalPlayer(BaseModel):
    """Authoritative player keyed by Sleeper player id."""

    sleeper_id: str = Field(..., min_length=1)
    full_name: Optional[str] = None
    search_full_name: Optional[str] = None
    position: Optional[str] = None
    team: Optional[str] = None
    gsis_id: IdentifierValue = None
    espn_id: IdentifierValue = None
    yahoo_id: IdentifierValue = None
    rotowire_id: IdentifierValue = None
    rotoworld_id: IdentifierValue = None
    sportradar_id: IdentifierValue = None
    stats_id: IdentifierValue = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("sleeper_id", mode="before")
    @classmethod
    def _coerce_sleeper_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @classmethod
    def from_sleeper(cls, payload: Mapping[str, Any]) -> "CanonicalPlayer":
        """Build a player from one entry of Sleeper's ``/players/nfl`` response."""

        known = set(cls.model_fields) - {"sleeper_id", "metadata"}
        data: dict[str, Any] = {key: payload.get(key) for key in known if key in payload}
        data["sleeper_id"] = payload.get("player_id", payload.get("sleeper_id"))
        if not data.get("full_name"):
            parts = [payload.get("first_name"), payload.get("last_name")]
            joined = " ".join(str(part).strip() for part in parts if part)
            data["full_name"] = joined or None
        if not data.get("search_full_name"):
            data["search_full_name"] = data.get("full_name")
        data["metadata"] = {
            key: value
            for key, value in payload.items()
            if key not in known and key not in {"player_id", "sleeper_id"}
        }
        return cls(**data)


class ForeignRecord(BaseModel):
    """Provider row (projection, ranking, stat line) awaiting reconciliation.

    Only the identifier fields and the display name are known up front. Every
    other provider column is accepted as an extra attribute and carried through
    matching untouched. A known field sent in a shape that cannot be matched
    on (a list for ``espn_id``, a number for ``name``) is coerced or dropped
    rather than rejected, so one bad row never sinks a provider batch.
    """

    name: Optional[str] = None
    source: str = DEFAULT_SOURCE
    gsis_id: IdentifierValue = None
    espn_id: IdentifierValue = None
    yahoo_id: IdentifierValue = None
    rotowire_id: IdentifierValue = None
    rotoworld_id: IdentifierValue = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator(*IDENTIFIER_FIELDS, mode="before")
    @classmethod
    def _drop_unusable_identifier(cls, value: Any) -> Any:
        # Lists, objects and flags cannot key a lookup; the tier is skipped.
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return None
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
            return str(value)
        return None

    @field_validator("source", mode="before")
    @classmethod
    def _coerce_source(cls, value: Any) -> Any:
        if value is None or value == "":
            return DEFAULT_SOURCE
        return value if isinstance(value, str) else str(value)

    @classmethod
    def from_mapping(
        cls,
        row: Mapping[str, Any],
        mapping: Mapping[str, str],
        *,
        source: str = DEFAULT_SOURCE,
    ) -> "ForeignRecord":
        """Rename a provider row using ``mapping`` (canonical field -> provider column).

        A column spec containing ``|`` joins several provider columns with a
        space, e.g. ``"first_name|last_name"``. Columns not referenced by the
        mapping are kept under their own names.
        """

        def extract(spec: str) -> Any:
            if "|" not in spec:
                value = row.get(spec)
                return value.strip() if isinstance(value, str) else value
            columns = [part.strip() for part in spec.split("|")]
            parts = [str(row[col]).strip() for col in columns if row.get(col) not in (None, "")]
            return " ".join(parts) if parts else None

        consumed: set[str] = set()
        data: dict[str, Any] = {}
        for field, spec in mapping.items():
            if not spec:
                continue
            data[field] = extract(spec)
            consumed.update(part.strip() for part in spec.split("|"))

        for column, value in row.items():
            if column in consumed or column in data:
                continue
            data[column] = value
        if data.get("source") in (None, ""):
            data["source"] = source
        return cls(**data)

    def identifier(self, field: str) -> IdentifierValue:
        return getattr(self, field, None)


class MatchedRecord(ForeignRecord):
    """Foreign record resolved onto a canonical player."""

    sleeper_id: str = Field(..., min_length=1)
    match_method: str

    @classmethod
    def from_record(cls, record: ForeignRecord, *, sleeper_id: str, match_method: str) -> "MatchedRecord":
        payload = record.model_dump()
        payload["sleeper_id"] = sleeper_id
        payload["match_method"] = match_method
        return cls.model_validate(payload)


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    sleeper_id: str | None = None
    match_method: str | None = None

    @classmethod
    def miss(cls) -> "MatchResult":
        return cls(matched=False)
