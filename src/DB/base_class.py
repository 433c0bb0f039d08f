"""
src/DB/base_class.py
=================================
SQLAlchemy Base Model Definition
=================================

Declarative base for every model of the monitoring backend (SQLAlchemy 2.0
`DeclarativeBase`). Each model declares its own `__tablename__` to match the
existing schema (`admins`, `smp`, `admins_smp`, `devices`, `actions`, `logs`).

Note:
    All application models must inherit from this Base class so they are
    registered in `Base.metadata` and discovered by Alembic.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models in the application."""
