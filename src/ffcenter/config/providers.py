"""Provider profiles: request budgets and column mappings per data source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional


@dataclass(frozen=True)
class RateLimit:
    max_requests: int
    window_seconds: float


@dataclass(frozen=True)
class ProviderProfile:
    key: str
    label: str
    base_url: str
    rate_limit: RateLimit
    source: str
    field_mapping: Mapping[str, str] = field(default_factory=dict)
    daily_limit: Optional[int] = None


_PROVIDERS: Dict[str, ProviderProfile] = {
    "SLEEPER": ProviderProfile(
        key="SLEEPER",
        label="Sleeper",
        base_url="https://api.sleeper.app/v1",
        # Sleeper asks clients to stay under 1000 calls per minute.
        rate_limit=RateLimit(max_requests=1000, window_seconds=60.0),
        source="Sleeper",
        field_mapping={
            "name": "search_full_name",
            "gsis_id": "gsis_id",
            "espn_id": "espn_id",
            "yahoo_id": "yahoo_id",
            "rotowire_id": "rotowire_id",
            "rotoworld_id": "rotoworld_id",
        },
    ),
    "ESPN": ProviderProfile(
        key="ESPN",
        label="ESPN Fantasy",
        base_url="https://fantasy.espn.com/apis/v3/games/ffl",
        rate_limit=RateLimit(max_requests=1, window_seconds=60.0),
        source="ESPN",
        field_mapping={
            "name": "fullName",
            "espn_id": "id",
        },
    ),
    "FANTASYPROS": ProviderProfile(
        key="FANTASYPROS",
        label="FantasyPros",
        base_url="https://api.fantasypros.com",
        rate_limit=RateLimit(max_requests=10, window_seconds=60.0),
        source="FantasyPros",
        field_mapping={
            "name": "name",
            "gsis_id": "gsis_id",
            "espn_id": "espn_id",
            "yahoo_id": "yahoo_id",
            "rotowire_id": "rotowire_id",
            "rotoworld_id": "rotoworld_id",
        },
    ),
    "NOAA": ProviderProfile(
        key="NOAA",
        label="NOAA Weather",
        base_url="https://api.weather.gov",
        rate_limit=RateLimit(max_requests=5, window_seconds=60.0),
        source="NOAA",
    ),
}


def iter_providers() -> Iterable[ProviderProfile]:
    """Return an iterator of all configured provider profiles."""

    return _PROVIDERS.values()


def get_provider(key: str) -> ProviderProfile:
    """Fetch a provider profile by key, raising KeyError if missing."""

    normalized = key.strip().upper().replace("-", "").replace(" ", "")
    if normalized not in _PROVIDERS:
        raise KeyError(f"No provider configured for key={key!r}")
    return _PROVIDERS[normalized]
