# src/Models/station.py

"""
Station Model - SMP Registry

An SMP station (ambulance station) is identified only by its
(region_code, smp_code) pair. Rows are created lazily by the ingestion
endpoint the first time a device reports from a new station.

Database Table: smp
Primary Key: (region_code, smp_code)
"""

from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String
from src.DB.base_class import Base


class Station(Base):

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "smp"

    region_code = Column(String(50), primary_key=True, doc="Region code, e.g. '77'")
    smp_code = Column(String(50), primary_key=True, doc="Station code inside the region")

    def __repr__(self) -> str:
        return f"<Station(region_code={self.region_code!r}, smp_code={self.smp_code!r})>"
