# src/Models/device.py

"""
Device Model - Field Terminal Registry

Registry of every EMS terminal that has ever submitted a log. Devices are
created by the ingestion endpoint on first contact; there is no separate
provisioning step.

The (region_code, smp_code) pair is the device's CURRENT station. It is not
part of the identity: when a terminal reports from another station the row is
updated in place and visibility for administrators changes immediately.

Database Table: devices
Primary Key: device_code (String)

Usage:
    from src.Models.device import Device

    device = Device(device_code="D1", region_code="77", smp_code="S1")
    db.add(device)
    db.commit()
"""

from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String, DateTime, Index
from sqlalchemy.sql import func
from src.DB.base_class import Base


class Device(Base):
    """
    SQLAlchemy model representing a reporting terminal.

    Schema:
    - device_code (PK): Unique terminal identifier
    - region_code / smp_code: Current station assignment (mutable)
    - team_number: Team reported in the most recent submission (optional)
    - created_at: First time the device was seen

    Indexes:
    - idx_devices_region_smp: (region_code, smp_code), used by the access scope
    - idx_devices_team: (team_number)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Fixed table name for the device registry"""
        return "devices"

    # ============================================================
    # Primary Key
    # ============================================================
    device_code = Column(
        String(50),
        primary_key=True,
        doc="Unique identifier of the terminal",
    )

    # ============================================================
    # Current Station Assignment
    # ============================================================
    region_code = Column(String(50), nullable=False, doc="Region of the current station")
    smp_code = Column(String(50), nullable=False, doc="Code of the current station")

    team_number = Column(
        String(50),
        nullable=True,
        doc="Team number from the latest submission",
    )

    # ============================================================
    # Timestamps
    # ============================================================
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Timestamp when the device was first registered",
    )

    __table_args__ = (
        Index("idx_devices_region_smp", "region_code", "smp_code"),
        Index("idx_devices_team", "team_number"),
    )

    def __repr__(self) -> str:
        return (
            f"<Device(device_code={self.device_code!r}, "
            f"region_code={self.region_code!r}, smp_code={self.smp_code!r})>"
        )
