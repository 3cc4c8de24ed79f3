from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from artistry.adapters.schema import (
    AliasPayload,
    ConflictCheckPayload,
    DiffResultPayload,
    DuplicateGroupPayload,
    MatchConfigPayload,
    MatchResultPayload,
    OverridesPayload,
    ScraperConfigDocument,
    ScraperConfigPayload,
    SnapshotPayload,
)
from artistry.app import (
    add_alias,
    check_conflict,
    diff_record_files,
    find_duplicates,
    get_raw_scraper_config,
    get_scraper_config,
    get_snapshot,
    list_aliases,
    list_snapshots,
    match_artist,
    remove_alias,
    reset_scraper_config,
    save_scraper_config,
    seed_scraper_config,
)
from artistry.config import ConfigurationError, configure_logging, get_match_config
from artistry.domain.model import SCOPE_GLOBAL, MatchStrategy, Provider

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pydantic import BaseModel

    from artistry.domain.model import Overrides, ScraperConfig
    from artistry.domain.reconciliation import MatchConfig

log = logging.getLogger(__name__)

_ID_OPTIONS: tuple[Provider, ...] = (
    Provider.MUSICBRAINZ,
    Provider.AUDIODB,
    Provider.DISCOGS,
    Provider.WIKIDATA,
)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile canonical artist records")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("duplicates", help="List artists sharing an identifier or alias")

    match = subparsers.add_parser("match", help="Resolve provider identifiers to an artist")
    for provider in _ID_OPTIONS:
        match.add_argument(
            f"--{provider.value}",
            type=str,
            default="",
            help=f"{provider.display_name} identifier",
        )
    match.add_argument("--name", type=str, default="", help="Exact artist name or alias")
    match.add_argument(
        "--strategy",
        type=str,
        choices=[strategy.value for strategy in MatchStrategy],
        help="Match strategy (defaults to ARTISTRY_MATCH_STRATEGY or prefer_id)",
    )
    match.add_argument(
        "--min-confidence",
        type=float,
        help="Minimum confidence for automatic acceptance",
    )

    scraper = subparsers.add_parser("scraper-config", help="Scraper configuration commands")
    scraper_sub = scraper.add_subparsers(dest="scraper_command", required=True)
    show = scraper_sub.add_parser("show", help="Show the effective configuration for a scope")
    show.add_argument("--scope", type=str, default=SCOPE_GLOBAL)
    raw = scraper_sub.add_parser("raw", help="Show the stored row and overrides for a scope")
    raw.add_argument("--scope", type=str, default=SCOPE_GLOBAL)
    scraper_sub.add_parser("seed", help="Create the global configuration if missing")
    save = scraper_sub.add_parser("save", help="Store a scope's configuration from JSON")
    save.add_argument("--scope", type=str, required=True)
    save.add_argument(
        "--file",
        type=Path,
        required=True,
        help="JSON document with fields, fallback_chains and optional overrides",
    )
    reset = scraper_sub.add_parser("reset", help="Drop a scope's row so it inherits global")
    reset.add_argument("--scope", type=str, required=True)

    snapshots = subparsers.add_parser("snapshots", help="Snapshot history commands")
    snapshots_sub = snapshots.add_subparsers(dest="snapshots_command", required=True)
    snapshots_list = snapshots_sub.add_parser("list", help="List snapshots, newest first")
    snapshots_list.add_argument("artist_id", type=str)
    snapshots_get = snapshots_sub.add_parser("get", help="Show one snapshot")
    snapshots_get.add_argument("snapshot_id", type=str)

    alias = subparsers.add_parser("alias", help="Alias management commands")
    alias_sub = alias.add_subparsers(dest="alias_command", required=True)
    alias_add = alias_sub.add_parser("add", help="Add an alias to an artist")
    alias_add.add_argument("artist_id", type=str)
    alias_add.add_argument("text", type=str)
    alias_add.add_argument("--source", type=str, default="user")
    alias_remove = alias_sub.add_parser("remove", help="Remove an alias")
    alias_remove.add_argument("alias_id", type=str)
    alias_list = alias_sub.add_parser("list", help="List an artist's aliases")
    alias_list.add_argument("artist_id", type=str)

    conflict = subparsers.add_parser(
        "conflict", help="Check whether an artifact was modified externally"
    )
    conflict.add_argument("path", type=str)
    conflict.add_argument(
        "--since",
        type=str,
        required=True,
        help="ISO-8601 timestamp (UTC) of the last known write",
    )
    conflict.add_argument("--root", type=Path, help="Directory relative paths resolve against")

    diff = subparsers.add_parser("diff", help="Compare two JSON record documents")
    diff.add_argument("--old", type=Path, help="Previous record version")
    diff.add_argument("--new", type=Path, help="Current record version")

    return parser.parse_args(list(argv))


def _parse_iso_datetime(value: str) -> datetime:
    try:
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        dt = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _load_config_document(path: Path, scope: str) -> tuple[ScraperConfig, Overrides | None]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc
    return ScraperConfigDocument.model_validate_json(text).to_domain(scope)


def _match_config(args: argparse.Namespace) -> MatchConfig:
    config = get_match_config()
    if args.strategy is not None:
        config = replace(config, strategy=MatchStrategy(args.strategy))
    if args.min_confidence is not None:
        config = replace(config, min_confidence=args.min_confidence)
    return config


def _validate(args: argparse.Namespace) -> None:
    """Parse values that argparse leaves as strings, failing before any work starts."""

    if args.command == "match":
        args.match_config = _match_config(args)
    elif args.command == "scraper-config" and args.scraper_command == "save":
        args.config, args.overrides = _load_config_document(args.file, args.scope)
    elif args.command == "snapshots" and args.snapshots_command == "get":
        args.snapshot_id = _parse_uuid(args.snapshot_id)
    elif args.command == "snapshots" or (
        args.command == "alias" and args.alias_command in {"add", "list"}
    ):
        args.artist_id = _parse_uuid(args.artist_id)
    elif args.command == "alias":
        args.alias_id = _parse_uuid(args.alias_id)
    elif args.command == "conflict":
        args.since = _parse_iso_datetime(args.since)
    elif args.command == "diff" and args.old is None and args.new is None:
        raise ValueError("diff needs --old and/or --new")


def _emit(payload: BaseModel | None) -> None:
    if payload is None:
        sys.stdout.write("null\n")
        return
    sys.stdout.write(payload.model_dump_json(indent=2) + "\n")


def _emit_many(payloads: Sequence[BaseModel]) -> None:
    document = [payload.model_dump(mode="json") for payload in payloads]
    sys.stdout.write(json.dumps(document, indent=2) + "\n")


def _run_scraper_config(args: argparse.Namespace) -> None:
    if args.scraper_command == "show":
        _emit(ScraperConfigPayload.from_domain(get_scraper_config(args.scope)))
    elif args.scraper_command == "raw":
        config, overrides = get_raw_scraper_config(args.scope)
        document = {
            "config": (
                ScraperConfigPayload.from_domain(config).model_dump(mode="json")
                if config is not None
                else None
            ),
            "overrides": (
                OverridesPayload.from_domain(overrides).model_dump(mode="json")
                if overrides is not None
                else None
            ),
        }
        sys.stdout.write(json.dumps(document, indent=2) + "\n")
    elif args.scraper_command == "seed":
        created = seed_scraper_config()
        log.info("Global scraper configuration %s", "created" if created else "already present")
    elif args.scraper_command == "save":
        saved = save_scraper_config(args.scope, args.config, args.overrides)
        _emit(ScraperConfigPayload.from_domain(saved))
    elif args.scraper_command == "reset":
        removed = reset_scraper_config(args.scope)
        log.info("Scope %s %s", args.scope, "reset" if removed else "had no overrides")


def _run_alias(args: argparse.Namespace) -> None:
    if args.alias_command == "add":
        _emit(AliasPayload.from_domain(add_alias(args.artist_id, args.text, args.source)))
    elif args.alias_command == "remove":
        remove_alias(args.alias_id)
        log.info("Removed alias %s", args.alias_id)
    elif args.alias_command == "list":
        _emit_many([AliasPayload.from_domain(alias) for alias in list_aliases(args.artist_id)])


def _run(args: argparse.Namespace) -> None:
    if args.command == "duplicates":
        groups = find_duplicates()
        _emit_many([DuplicateGroupPayload.from_domain(group) for group in groups])
    elif args.command == "match":
        ids = {
            provider.value: getattr(args, provider.value)
            for provider in _ID_OPTIONS
            if getattr(args, provider.value)
        }
        log.info("Match policy: %s", MatchConfigPayload.from_domain(args.match_config))
        result = match_artist(ids, args.name, config=args.match_config)
        _emit(MatchResultPayload.from_domain(result) if result is not None else None)
    elif args.command == "scraper-config":
        _run_scraper_config(args)
    elif args.command == "snapshots" and args.snapshots_command == "get":
        _emit(SnapshotPayload.from_domain(get_snapshot(args.snapshot_id)))
    elif args.command == "snapshots":
        snapshots = list_snapshots(args.artist_id)
        _emit_many([SnapshotPayload.from_domain(snapshot) for snapshot in snapshots])
    elif args.command == "alias":
        _run_alias(args)
    elif args.command == "conflict":
        check = check_conflict(args.path, args.since, root=args.root)
        _emit(ConflictCheckPayload.from_domain(check))
    elif args.command == "diff":
        _emit(DiffResultPayload.from_domain(diff_record_files(args.old, args.new)))
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args)
    except ValueError:
        log.exception("Rejected request")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
