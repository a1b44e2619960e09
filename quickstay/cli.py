"""CLI entrypoint for the QuickStay listings API."""

import argparse
import sys


def cmd_serve(args):
    """Start the API server."""
    import uvicorn

    from quickstay.config import settings
    from quickstay.db.session import init_db
    from quickstay.logging_config import setup_logging

    setup_logging()
    if args.init_db:
        init_db()

    uvicorn.run(
        "quickstay.api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_config=None,
    )


def cmd_db(args):
    """Database management commands."""
    from sqlalchemy import func, select
    from sqlalchemy.orm import Session

    from quickstay.db.models import Listing
    from quickstay.db.session import _get_default_engine, init_db, reset_engine

    if args.db_command == "init":
        try:
            init_db()
            print("✓ Tables created")
        except Exception as e:
            print(f"✗ Failed to create tables: {e}")
            sys.exit(1)

    elif args.db_command == "info":
        engine = _get_default_engine()
        print(f"Database URL: {engine.url.render_as_string(hide_password=True)}")
        print(f"Database Type: {engine.dialect.name}")
        print()

        with Session(engine) as session:
            total = session.execute(select(func.count(Listing.id))).scalar_one()
            deleted = session.execute(
                select(func.count(Listing.id)).where(Listing.is_deleted.is_(True))
            ).scalar_one()

        print("Listings:")
        print(f"  total: {total}")
        print(f"  soft-deleted: {deleted}")

    elif args.db_command == "reset":
        reset_engine()
        print("✓ Database engine reset (connections cleared)")
        print("  Next database access will create a fresh connection")

    else:
        args.db_parser.print_help()
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description="QuickStay listings API")
    sub = parser.add_subparsers(dest="command")

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.add_argument("--init-db", action="store_true", help="Create tables before serving")
    p_serve.set_defaults(func=cmd_serve)

    # db
    p_db = sub.add_parser("db", help="Database management")
    db_sub = p_db.add_subparsers(dest="db_command")
    db_sub.add_parser("init", help="Create database tables")
    db_sub.add_parser("info", help="Show database connection and listing counts")
    db_sub.add_parser("reset", help="Reset database engine (clear cached connections)")
    p_db.set_defaults(func=cmd_db, db_parser=p_db)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)
    args.func(args)


if __name__ == "__main__":
    main()
