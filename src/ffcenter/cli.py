"""Command-line interface for reconciling provider exports onto Sleeper players."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from ffcenter.config_loader import MappingProfile
from ffcenter.ingest import players_from_sleeper, reconcile, rows_to_records
from ffcenter.persistence import ProjectionStore


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Match provider player rows to Sleeper player ids")
    parser.add_argument("players", type=Path, help="Sleeper players JSON (dict keyed by id, or list)")
    parser.add_argument("records", type=Path, help="Provider rows JSON array")
    parser.add_argument(
        "--provider",
        default=None,
        help="Provider key (e.g., fantasypros, espn); defaults to the loaded profile's provider, else fantasypros",
    )
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for provider columns (e.g., name=player_name or name=first|last)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--output", type=Path, default=Path("matched.json"), help="Matched records JSON path")
    parser.add_argument("--unmatched", type=Path, default=None, help="Optional path for unmatched rows JSON")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write reconcile summary JSON",
    )
    parser.add_argument("--sample", type=int, default=None, help="Unmatched names to keep in the report")
    parser.add_argument("--verbose", action="store_true", help="Log per-record match decisions")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _preview(names: list[str], total: int) -> str:
    preview = ", ".join(names[:5])
    more = total - min(len(names), 5)
    suffix = f", +{more} more" if more > 0 else ""
    return f"{preview}{suffix}"


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    profile = MappingProfile.load(args.load_profile) if args.load_profile else MappingProfile()
    mapping = profile.merged(_parse_mapping(args.column))
    provider = profile.resolve_provider(args.provider)

    players = players_from_sleeper(json.loads(args.players.read_text(encoding="utf-8")))
    rows = json.loads(args.records.read_text(encoding="utf-8"))
    if not isinstance(rows, list):
        raise SystemExit(f"{args.records} must contain a JSON array of rows")
    records = rows_to_records(rows, provider=provider, mapping=mapping or None)

    store = ProjectionStore()
    output = reconcile(players, records, sink=store, sample_size=args.sample)
    report = output.report

    if args.save_profile:
        MappingProfile(mapping, provider).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    print(f"Matched {report.matched_records}/{report.total_records} records to Sleeper players")
    if report.match_methods:
        methods = ", ".join(f"{tier}={count}" for tier, count in report.match_methods.items())
        print(f"Match methods: {methods}")
    if report.index_collisions:
        print(f"Identifier collisions overwritten while indexing: {report.index_collisions}")
    if report.unmatched_records:
        print(f"Rows without players: {_preview(report.unmatched_sample, report.unmatched_records)}")

    matched_payload = [record.model_dump(mode="json") for record in store.records()]
    args.output.write_text(json.dumps(matched_payload, indent=2), encoding="utf-8")
    print(f"Wrote {len(matched_payload)} matched records to {args.output}")

    if args.unmatched:
        unmatched_payload = [record.model_dump(mode="json") for record in output.unmatched]
        args.unmatched.write_text(json.dumps(unmatched_payload, indent=2), encoding="utf-8")
        print(f"Wrote unmatched rows to {args.unmatched}")
    if args.report:
        args.report.write_text(json.dumps(asdict(report), indent=2), encoding="utf-8")
        print(f"Wrote reconcile report to {args.report}")


if __name__ == "__main__":
    main()
