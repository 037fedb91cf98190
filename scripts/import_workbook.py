"""Utility script to import a workbook from disk without going through the API."""

from __future__ import annotations

import argparse
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from fleetdata.application.use_cases.imports import confirm_import, preview_import
from fleetdata.domain.entities import ImportDomain
from fleetdata.infrastructure.database import SessionLocal, initialize_database
from fleetdata.infrastructure.import_sessions import InMemoryImportSessionStore


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the import."""

    parser = argparse.ArgumentParser(
        description="Validate and import an .xlsx workbook into the fleetdata database.",
    )
    parser.add_argument("path", type=Path, help="Workbook to import")
    parser.add_argument(
        "--type",
        required=True,
        choices=[domain.value for domain in ImportDomain if domain is not ImportDomain.VACATION_PLAN],
        help="Import type of the workbook",
    )
    parser.add_argument(
        "--actor",
        default="cli",
        help="Identifier recorded as the importer (default: cli)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the validation summary without writing any row.",
    )
    return parser.parse_args()


def main() -> None:
    """Preview the workbook and, unless ``--dry-run``, confirm it."""

    args = parse_args()
    if not args.path.is_file():
        raise SystemExit(f"File not found: {args.path}")

    initialize_database()
    store = InMemoryImportSessionStore()

    session = SessionLocal()
    try:
        preview = preview_import(
            session,
            file_bytes=args.path.read_bytes(),
            filename=args.path.name,
            domain=args.type,
            store=store,
        )
        print(
            f"{preview.total_rows} rows: {preview.valid_count} valid, "
            f"{preview.error_count} invalid"
        )
        for error in preview.errors:
            print(f"  row {error.row}: {error.message}")
        if args.dry_run:
            return

        confirmation = confirm_import(
            session, session_id=preview.session_id, actor_id=args.actor, store=store
        )
    except ValueError as exc:
        raise SystemExit(f"Could not import the workbook: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while importing: {exc}") from exc
    else:
        print(
            f"Import log {confirmation.import_log_id}: "
            f"{confirmation.success_count} written, {confirmation.error_count} failed"
        )
        for error in confirmation.errors:
            print(f"  row {error.row}: {error.message}")
    finally:
        store.clear()
        session.close()


if __name__ == "__main__":
    main()
