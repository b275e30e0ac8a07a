"""Persist and load CLI column mapping profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

DEFAULT_PROVIDER = "fantasypros"


@dataclass
class MappingProfile:
    """Column overrides from one CLI run, tied to the provider they were written for.

    Reloading a profile replays both, so rows land under the same ``source``
    discriminator as the run that saved it.
    """

    field_mapping: Dict[str, str] = field(default_factory=dict)
    provider: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> "MappingProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object")
        mapping = data.get("field_mapping") or {}
        provider = data.get("provider") or None
        return cls(
            field_mapping={str(key): str(value) for key, value in mapping.items()},
            provider=provider,
        )

    def save(self, path: Path) -> None:
        payload = {
            "field_mapping": self.field_mapping,
            "provider": self.provider,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def merged(self, overrides: Mapping[str, str]) -> Dict[str, str]:
        """Saved mapping with ``overrides`` applied on top."""

        return {**self.field_mapping, **overrides}

    def resolve_provider(self, requested: Optional[str] = None) -> str:
        # An explicit provider beats the saved one.
        return requested or self.provider or DEFAULT_PROVIDER
