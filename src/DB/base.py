"""
src/DB/base.py
==========================
SQLAlchemy Model Registry
==========================

Imports every model so that `Base.metadata` holds the complete schema before
`create_all()` runs or Alembic compares metadata against the database.

Models Registered:
-----------------
- Administrator: dashboard users (login + bcrypt hash)
- Station: SMP stations identified by (region_code, smp_code)
- StationGrant: administrator-to-station permissions
- Device: field terminals and their current station
- ActionDictionary: action labels per (action_code, app_version)
- LogEntry: append-only device action log

Important:
----------
Any new model class MUST be imported here.
"""

from src.DB.base_class import Base

# ============================================================
# MODEL IMPORTS - DO NOT REMOVE
# ============================================================
from src.Models.administrator import Administrator
from src.Models.station import Station
from src.Models.station_grant import StationGrant
from src.Models.device import Device
from src.Models.action import ActionDictionary
from src.Models.log_entry import LogEntry
