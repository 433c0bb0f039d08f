"""
src/DB/session.py
======================================
Database Session Configuration Module
======================================

Creates the SQLAlchemy engine and the session factory shared by the whole
application.

Session Configuration:
---------------------
- autocommit=False: Transactions must be explicitly committed
- autoflush=False: Changes are flushed on commit or explicit flush only
- bind=engine: Sessions are bound to the configured database engine

SQLite URLs (development and the test suite) get `check_same_thread=False`
because FastAPI runs sync endpoints in a threadpool.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from src.Core.config import settings


# ============================================================
# DATABASE ENGINE CONFIGURATION
# ============================================================
_connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    _connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,       # Drop dead connections before handing them out
    connect_args=_connect_args,
)


# ============================================================
# SESSION FACTORY CONFIGURATION
# ============================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
