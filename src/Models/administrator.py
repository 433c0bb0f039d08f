# src/Models/administrator.py

"""
Administrator Model - Dashboard Users

Administrators log into the monitoring dashboard and see only the devices of
the stations they hold grants for (see src/Models/station_grant.py).

Database Table: admins
Primary Key: login (String)
"""

from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from src.DB.base_class import Base


class Administrator(Base):
    """
    SQLAlchemy model representing a dashboard administrator.

    Schema:
    - login (PK): Unique login name
    - password_hash: bcrypt hash (cost factor embedded in the hash)
    - created_at: Account creation timestamp
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "admins"

    login = Column(String(50), primary_key=True, doc="Unique administrator login")

    password_hash = Column(
        String(70),
        nullable=False,
        doc="bcrypt password hash, never returned by the API",
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Timestamp when the administrator was created",
    )

    def __repr__(self) -> str:
        return f"<Administrator(login={self.login!r})>"
