# src/Models/log_entry.py

"""
LogEntry Model - Device Action Log

Append-only fact table. One row per (action_code, app_version, device_code,
datetime); a device cannot record the same action of the same app version
twice in the same instant, a second insert fails with an integrity error.

Database Table: logs
Primary Key: (action_code, app_version, device_code, datetime)

Indexes:
- idx_logs_device_datetime: (device_code, datetime), serves the
  latest-per-device window and the device history listing
- idx_logs_app_version: (app_version)
- idx_logs_action_code: (action_code)
"""

from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String, DateTime, Index
from sqlalchemy.sql import func
from src.DB.base_class import Base


class LogEntry(Base):
    """
    SQLAlchemy model representing one action reported by a device.

    Schema:
    - action_code (PK)
    - app_version (PK)
    - device_code (PK): Reporting terminal
    - datetime (PK): Event timestamp, stored in UTC
    - team_number: Team that operated the terminal
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "logs"

    action_code = Column(String(20), primary_key=True)
    app_version = Column(String(20), primary_key=True)
    device_code = Column(String(50), primary_key=True)

    datetime = Column(
        DateTime(timezone=True),
        primary_key=True,
        server_default=func.now(),
        doc="UTC timestamp of the reported action",
    )

    team_number = Column(String(50), nullable=False)

    __table_args__ = (
        Index("idx_logs_device_datetime", "device_code", "datetime"),
        Index("idx_logs_app_version", "app_version"),
        Index("idx_logs_action_code", "action_code"),
    )

    def __repr__(self) -> str:
        return (
            f"<LogEntry(device_code={self.device_code!r}, action_code={self.action_code!r}, "
            f"app_version={self.app_version!r}, datetime={self.datetime!r})>"
        )
