from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, cast

from dotenv import load_dotenv

from taxofeed.app import create_group, create_site, initialise_database, resolve_category_field
from taxofeed.config import configure_logging
from taxofeed.domain.field_resolution import IdentifierList

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from taxofeed.domain.field_resolution import ResolutionOutcome

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve feed values against the taxonomy")
    parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data directory)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the database schema")

    site = subparsers.add_parser("site", help="Site management commands")
    site_sub = site.add_subparsers(dest="site_command", required=True)
    site_create = site_sub.add_parser("create", help="Register a site")
    site_create.add_argument("--handle", type=str, required=True, help="Site handle")
    site_create.add_argument("--name", type=str, required=True, help="Site name")
    site_create.add_argument("--uid", type=str, help="Stable uid (generated when omitted)")
    site_create.add_argument(
        "--primary",
        action="store_true",
        help="Mark the site as the primary site",
    )

    group = subparsers.add_parser("group", help="Category group commands")
    group_sub = group.add_subparsers(dest="group_command", required=True)
    group_create = group_sub.add_parser("create", help="Register a category group")
    group_create.add_argument("--handle", type=str, required=True, help="Group handle")
    group_create.add_argument("--name", type=str, required=True, help="Group name")
    group_create.add_argument("--uid", type=str, help="Stable uid (generated when omitted)")

    resolve = subparsers.add_parser("resolve", help="Resolve one category field for one item")
    resolve.add_argument(
        "--field",
        type=Path,
        required=True,
        help="JSON file with the field handle and settings",
    )
    resolve.add_argument(
        "--mapping",
        type=Path,
        required=True,
        help="JSON file with the feed-to-field mapping (node, default, options)",
    )
    resolve.add_argument(
        "--item",
        type=Path,
        required=True,
        help="JSON file with one (possibly nested) feed item",
    )
    resolve.add_argument(
        "--feed",
        type=Path,
        help="Optional JSON file with feed settings (siteId, compareContent, ...)",
    )
    resolve.add_argument(
        "--row-id",
        type=str,
        default="0",
        help="Identifier of the row, used in log output (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _load_json_object(path: Path) -> dict[str, object]:
    try:
        with path.open() as handle:
            loaded = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read JSON from {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return cast(dict[str, object], loaded)


def _render_outcome(outcome: ResolutionOutcome) -> str:
    if isinstance(outcome, IdentifierList):
        return json.dumps(list(outcome.ids))
    return json.dumps(None)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    payloads: dict[str, dict[str, object]] = {}
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "resolve":
            payloads["field"] = _load_json_object(parsed_args.field)
            payloads["mapping"] = _load_json_object(parsed_args.mapping)
            payloads["item"] = _load_json_object(parsed_args.item)
            payloads["feed"] = _load_json_object(parsed_args.feed) if parsed_args.feed else {}
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        initialise_database(database_uri=parsed_args.database_uri)
        if parsed_args.command == "init-db":
            log.info("Database schema ready")
        elif parsed_args.command == "site" and parsed_args.site_command == "create":
            site = create_site(
                handle=parsed_args.handle,
                name=parsed_args.name,
                uid=parsed_args.uid,
                primary=parsed_args.primary,
            )
            log.info("Created site %s (uid=%s)", site.id, site.uid)
        elif parsed_args.command == "group" and parsed_args.group_command == "create":
            group = create_group(
                handle=parsed_args.handle,
                name=parsed_args.name,
                uid=parsed_args.uid,
            )
            log.info("Created category group %s (uid=%s)", group.id, group.uid)
        elif parsed_args.command == "resolve":
            outcome = resolve_category_field(
                field=payloads["field"],
                mapping=payloads["mapping"],
                item=payloads["item"],
                feed=payloads["feed"],
                row_id=parsed_args.row_id,
            )
            sys.stdout.write(_render_outcome(outcome) + "\n")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
