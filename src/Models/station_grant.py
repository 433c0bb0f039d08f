# src/Models/station_grant.py

"""
StationGrant Model - Administrator Permissions

Many-to-many link between administrators and stations. An administrator sees
a device only while the device's current (region_code, smp_code) pair is one
of their grants. No foreign keys are declared; grants are expected to point
at existing administrators and stations.

Database Table: admins_smp
Primary Key: (login, region_code, smp_code)

Indexes:
- idx_admins_smp_login: (login, region_code, smp_code)
- idx_admins_smp_login_only: (login)
"""

from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String, Index
from src.DB.base_class import Base


class StationGrant(Base):

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "admins_smp"

    login = Column(String(50), primary_key=True)
    region_code = Column(String(50), primary_key=True)
    smp_code = Column(String(50), primary_key=True)

    __table_args__ = (
        Index("idx_admins_smp_login", "login", "region_code", "smp_code"),
        Index("idx_admins_smp_login_only", "login"),
    )

    def __repr__(self) -> str:
        return (
            f"<StationGrant(login={self.login!r}, "
            f"region_code={self.region_code!r}, smp_code={self.smp_code!r})>"
        )
