# microdiary/cli.py

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

from microdiary.api_service import schemas
from microdiary.api_service.core.database import AsyncSessionLocal, engine, init_db
from microdiary.api_service.core.settings import settings
from microdiary.api_service.api_v1.endpoints.entries import get_all_entries, get_entries_for_date
from microdiary.export.csv_export import build_csv_export, export_filename
from microdiary.export.json_export import build_json_export
from microdiary.logic.clock import today
from microdiary.logic.intervals import find_gaps

logging.basicConfig(
    format="%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-25s | %(message)s",
    level=logging.INFO,
)
log = logging.getLogger("microdiary.cli")


async def _run_init_db() -> None:
    try:
        await init_db()
    finally:
        await engine.dispose()

async def _load_gaps(day: date) -> list[schemas.Gap]:
    try:
        async with AsyncSessionLocal() as db:
            entries = await get_entries_for_date(db, day)
    finally:
        await engine.dispose()
    return find_gaps(
        entries,
        day_start=settings.DAY_START,
        day_end=settings.DAY_END,
        min_gap_minutes=settings.MIN_GAP_MINUTES,
    )

async def _load_all_entries() -> list[schemas.Entry]:
    try:
        async with AsyncSessionLocal() as db:
            return [schemas.Entry.model_validate(e) for e in await get_all_entries(db)]
    finally:
        await engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="microdiary",
        description="MicroDiary: time-use diary maintenance CLI"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging for all MicroDiary modules."
    )
    subparsers = parser.add_subparsers(dest="command", title="Available Commands", required=True)

    # --- Database Init Subcommand ---
    parser_dbinit = subparsers.add_parser("init-db", help="Create the diary tables.")
    def handle_init_db(args_ns):
        asyncio.run(_run_init_db())
        log.info("Diary database initialized.")
    parser_dbinit.set_defaults(func=handle_init_db)

    # --- Gaps Subcommand ---
    parser_gaps = subparsers.add_parser("gaps", help="List uncovered time on a day.")
    parser_gaps.add_argument("--day", type=date.fromisoformat, default=None, help="Day YYYY-MM-DD (default: today).")
    def handle_gaps(args_ns):
        target_day = args_ns.day or date.fromisoformat(today())
        gaps = asyncio.run(_load_gaps(target_day))
        if not gaps:
            print(f"No gaps on {target_day}.")
        for gap in gaps:
            print(f"{gap.start}-{gap.end}")
    parser_gaps.set_defaults(func=handle_gaps)

    # --- Export Subcommand ---
    parser_export = subparsers.add_parser("export", help="Export every entry to a file.")
    parser_export.add_argument("--format", choices=["csv", "json"], default="csv", help="Output format.")
    parser_export.add_argument("--out", type=Path, default=None, help="Output path (default: microdiary-<today>.<format>).")
    def handle_export(args_ns):
        entries = asyncio.run(_load_all_entries())
        out_path = args_ns.out or Path(export_filename(args_ns.format, date.today()))
        if args_ns.format == "csv":
            out_path.write_bytes(build_csv_export(entries).encode("utf-8"))
        else:
            out_path.write_text(build_json_export(entries).model_dump_json(indent=2), encoding="utf-8")
        log.info(f"Exported {len(entries)} entries to {out_path}")
    parser_export.set_defaults(func=handle_export)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger("microdiary").setLevel(logging.DEBUG)
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        for handler in root_logger.handlers:
            handler.setLevel(logging.DEBUG)
        log.debug("Debug logging enabled via CLI.")

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()
        sys.exit(1)

if __name__ == "__main__":
    main()
