#!/usr/bin/env python3
"""
Stockflow management CLI.

Usage:
    python manage.py migrate     Apply pending database migrations
    python manage.py serve       Start the API server
    python manage.py reorder     Run one reorder scan and print the report
    python manage.py status      Show schema version and pending migrations
"""

import argparse
import asyncio
import json
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


async def _migrate(no_backup: bool) -> bool:
    from stockflow.infrastructure.storage.sqlite.migrations import initialize_database

    results = await initialize_database(create_backup_before=not no_backup)
    if not results:
        print("Database is up to date.")
        return True

    for result in results:
        mark = "ok" if result.success else f"FAILED: {result.error}"
        print(f"  v{result.version} {result.name} ({result.execution_time_ms} ms) {mark}")
    return all(r.success for r in results)


def cmd_migrate(args: argparse.Namespace) -> None:
    """Bring the database schema up to date."""
    from stockflow.config import configure_logging

    configure_logging()
    if not asyncio.run(_migrate(args.no_backup)):
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn in the foreground."""
    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "stockflow.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if args.reload:
        uvicorn_cmd.append("--reload")
    elif args.workers and args.workers > 1:
        uvicorn_cmd += ["--workers", str(args.workers)]

    print(f"Starting server on {args.host}:{args.port}...")
    try:
        sys.exit(subprocess.call(uvicorn_cmd, cwd=str(ROOT_DIR)))
    except KeyboardInterrupt:
        print("\nServer stopped.")


async def _reorder() -> dict:
    from stockflow.application.dto.responses import ReorderReportResponse
    from stockflow.application.services import get_reorder_scanner
    from stockflow.infrastructure.storage.sqlite import close_pool
    from stockflow.infrastructure.storage.sqlite.migrations import initialize_database

    await initialize_database()
    try:
        scanner = await get_reorder_scanner()
        report = await scanner.scan()
        return ReorderReportResponse.from_report(report).model_dump(mode="json")
    finally:
        await close_pool()


def cmd_reorder(args: argparse.Namespace) -> None:
    """Scan every under-threshold stock record and place orders."""
    from stockflow.config import bind_request_context, configure_logging

    configure_logging()
    bind_request_context(actor="cli")
    report = asyncio.run(_reorder())
    print(json.dumps(report, indent=2))


def cmd_status(args: argparse.Namespace) -> None:
    """Print the migration status of the configured database."""
    from stockflow.config import get_settings
    from stockflow.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status())
    print(f"Database: {get_settings().storage.db_path}")
    if not status["exists"]:
        print("  not created yet; run 'migrate'")
        return
    print(f"  current version: {status['current_version']}")
    print(f"  applied: {', '.join(status['applied_migrations']) or '-'}")
    print(f"  pending: {', '.join(status['pending_migrations']) or '-'}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Stockflow management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # reorder
    p_reorder = sub.add_parser("reorder", help="Run one reorder scan")
    p_reorder.set_defaults(func=cmd_reorder)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
