# src/DB/database.py

"""
Database Utilities Module

The connectivity probe behind `/health` and the table bootstrap helpers used
at startup, by the admin CLI and by the test suite. Request-scoped sessions
come from src/Controller/deps.py (get_DB).

Usage Examples:
    ok, error = check_db_connection()

    if settings.DB_AUTO_CREATE:
        create_all_tables()
"""

from sqlalchemy import text
from src.DB.session import SessionLocal, engine


# ============================================================
# Database Health Check Utilities
# ============================================================

def check_db_connection() -> tuple[bool, str]:
    """
    Run `SELECT 1` against the configured database.

    Returns:
        (True, "") when the database answers, otherwise (False, <error text>).
        Never raises; the caller decides how to report the outage.

    Example:
        ok, error = check_db_connection()
        if not ok:
            print(f"[STARTUP] ❌ Database unreachable: {error}")
    """
    db = None
    try:
        db = SessionLocal()
        value = db.execute(text("SELECT 1")).scalar()
        return value == 1, ""
    except Exception as e:
        print(f"[DB] ❌ Connection test failed: {e}")
        return False, str(e)
    finally:
        if db:
            db.close()


# ============================================================
# Schema Bootstrap Utilities
# ============================================================

def create_all_tables():
    """
    Create all tables registered in src/DB/base.py.

    Idempotent: existing tables are skipped. Production schema changes go
    through Alembic (`alembic upgrade head`).
    """
    from src.DB.base import Base
    print("[DB] 🔨 Creating missing tables...")
    Base.metadata.create_all(bind=engine)
    print("[DB] ✅ Tables ready")


def drop_all_tables():
    """
    Drop all tables registered in src/DB/base.py.

    WARNING: destructive. Used by the test suite to reset the schema.
    """
    from src.DB.base import Base
    print("[DB] 🗑️  Dropping all tables...")
    Base.metadata.drop_all(bind=engine)
    print("[DB] ✅ Tables dropped")


__all__ = [
    "check_db_connection",
    "create_all_tables",
    "drop_all_tables",
]
