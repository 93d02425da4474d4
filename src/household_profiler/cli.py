"""Command-line interface for Household Profiler."""

import argparse
import os
import sys
from pathlib import Path

from household_profiler import __version__
from household_profiler.config import get_settings
from household_profiler.domain.members import format_height
from household_profiler.domain.value_objects import ROLE_LABELS
from household_profiler.exceptions import (
    HouseholdProfilerError,
    MemberNotFoundError,
    NoHouseholdFoundError,
)
from household_profiler.repositories.sqlite import (
    SQLiteDatabase,
    SQLiteMemberRepository,
)
from household_profiler.services.household import HouseholdService


def get_default_db_path() -> Path:
    """Database path from settings (HP_SQLITE_PATH)."""
    return Path(get_settings().sqlite_path)


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.database) if args.database else get_default_db_path()


def open_repository(db_path: Path) -> tuple[SQLiteDatabase, SQLiteMemberRepository]:
    """Open an existing database and return it with its member repository."""
    db = SQLiteDatabase(str(db_path))
    db.initialize()
    return db, SQLiteMemberRepository(db)


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize a new database."""
    db_path = _db_path(args)

    if db_path.exists() and not args.force:
        print(f"Database already exists at {db_path}")
        print("Use --force to reinitialize (WARNING: will delete existing data)")
        return 1

    if db_path.exists() and args.force:
        db_path.unlink()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    db = SQLiteDatabase(str(db_path))
    db.initialize()
    db.close()

    print(f"Initialized database at {db_path}")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show database status."""
    db_path = _db_path(args)

    if not db_path.exists():
        print(f"No database found at {db_path}")
        print("Run 'household-profiler init' to create a new database")
        return 1

    db, member_repo = open_repository(db_path)
    try:
        print(f"Database: {db_path}")
        print(f"Members: {member_repo.count_members()}")
    finally:
        db.close()
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"Household Profiler v{__version__}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List household members."""
    db_path = _db_path(args)
    if not db_path.exists():
        print(f"Error: Database not found at {db_path}")
        return 1

    db, member_repo = open_repository(db_path)
    try:
        members = member_repo.list_members()
        if not members:
            print("No members found.")
            return 0

        print("Members:")
        print("=" * 70)
        for m in members:
            age = f"{m.age} years old" if m.age is not None else "Age not specified"
            print(f"  [{m.id}] {m.name} ({ROLE_LABELS[m.role]})")
            print(f"    {age} | {m.sex.value} | Height: {format_height(m.height)}")
            if m.allergens:
                print(f"    Allergens: {', '.join(m.allergens)}")
        return 0
    except HouseholdProfilerError as e:
        print(f"Error: {e.message}")
        return 1
    finally:
        db.close()


def cmd_show_household(args: argparse.Namespace) -> int:
    """Show the household overview."""
    db_path = _db_path(args)
    if not db_path.exists():
        print(f"Error: Database not found at {db_path}")
        return 1

    settings = get_settings()
    db, member_repo = open_repository(db_path)
    try:
        service = HouseholdService(
            member_repo, name=settings.household_name, timezone=settings.timezone
        )
        household = service.get_household_overview()
    except NoHouseholdFoundError:
        print("No household found. Add a member first.")
        return 1
    finally:
        db.close()

    print(f"Household: {household.name}")
    print(f"  Timezone: {household.timezone}")
    print(f"  Created: {household.created_at.isoformat()}")
    print(f"  Members: {len(household.members)}")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete a member by id."""
    db_path = _db_path(args)
    if not db_path.exists():
        print(f"Error: Database not found at {db_path}")
        return 1

    db, member_repo = open_repository(db_path)
    try:
        deleted = member_repo.delete_member(int(args.member_id))
    except MemberNotFoundError:
        print(f"Error: Member {args.member_id} not found")
        return 1
    finally:
        db.close()

    print(f"Deleted member {deleted.id}: {deleted.name}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API server with uvicorn."""
    import uvicorn

    if args.database:
        os.environ["HP_SQLITE_PATH"] = str(args.database)
        get_settings.cache_clear()

    settings = get_settings()
    uvicorn.run(
        "household_profiler.api.app:app",
        host=args.host or settings.api_host,
        port=int(args.port or settings.api_port),
        reload=settings.api_reload,
    )
    return 0


def cmd_ui(args: argparse.Namespace) -> int:
    """Launch the Streamlit web interface."""
    try:
        import streamlit.web.cli as stcli
    except ImportError:
        print("Frontend dependencies are not installed.")
        print("Install with: pip install 'household-profiler[frontend]'")
        return 1

    port = int(args.port)
    api_url = str(args.api_url)

    app_path = Path(__file__).parent / "streamlit_app" / "app.py"
    if not app_path.exists():
        print(f"Error: Streamlit app not found at {app_path}")
        return 1

    os.environ["HP_API_URL"] = api_url

    sys.argv = [
        "streamlit",
        "run",
        str(app_path),
        "--server.port",
        str(port),
        "--server.headless",
        "true",
        "--browser.gatherUsageStats",
        "false",
    ]
    stcli.main()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="household-profiler",
        description="Household Profiler - household member profiles",
    )
    parser.add_argument(
        "--database",
        "-d",
        help="Path to SQLite database file",
        default=None,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Initialize a new database")
    init_parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Force reinitialization (deletes existing data)",
    )
    init_parser.set_defaults(func=cmd_init)

    status_parser = subparsers.add_parser("status", help="Show database status")
    status_parser.set_defaults(func=cmd_status)

    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    list_parser = subparsers.add_parser("list", help="List household members")
    list_parser.set_defaults(func=cmd_list)

    household_parser = subparsers.add_parser(
        "show-household", help="Show the household overview"
    )
    household_parser.set_defaults(func=cmd_show_household)

    delete_parser = subparsers.add_parser("delete", help="Delete a member")
    delete_parser.add_argument("member_id", type=int, help="Member id")
    delete_parser.set_defaults(func=cmd_delete)

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", default=None, help="Bind port")
    serve_parser.set_defaults(func=cmd_serve)

    ui_parser = subparsers.add_parser("ui", help="Launch the Streamlit web interface")
    ui_parser.add_argument(
        "--port",
        default=8501,
        help="Port for the Streamlit server (default: 8501)",
    )
    ui_parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="Backend API URL (default: http://localhost:8000)",
    )
    ui_parser.set_defaults(func=cmd_ui)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
