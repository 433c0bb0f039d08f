# src/Repositories/device.py

"""
Device Repository Module

Database access for the terminal registry.

Responsibilities:
- Lookup by device code
- Listing devices inside an administrator's scope
- Registration and reassignment on ingestion (upsert_device)

Usage:
    from src.Repositories import device as device_repo

    device, status = device_repo.upsert_device(db, "D1", "77", "S1", "12")
    # status in {"created", "reassigned", "updated", "unchanged"}
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from src.Models.device import Device
from src.Services.access_scope import station_scope_predicate
from typing import Iterable, List, Optional, Tuple


DEVICE_CREATED = "created"
DEVICE_REASSIGNED = "reassigned"
DEVICE_UPDATED = "updated"
DEVICE_UNCHANGED = "unchanged"


# ==========================================================
# 📌 LOOKUPS
# ==========================================================

def get_device_by_code(db: Session, device_code: str) -> Optional[Device]:
    return db.query(Device).filter(Device.device_code == device_code).first()


def get_devices_in_scope(
    db: Session,
    pairs: Iterable[Tuple[str, str]],
    region_code: Optional[str] = None,
    smp_code: Optional[str] = None,
) -> List[Device]:
    """
    Devices assigned to one of the granted stations, optionally narrowed to
    a region and/or station.

    Args:
        db: SQLAlchemy session
        pairs: Granted (region_code, smp_code) pairs
        region_code: Optional region filter
        smp_code: Optional station filter

    Returns:
        Devices ordered by device_code
    """
    query = db.query(Device).filter(station_scope_predicate(pairs))

    if region_code:
        query = query.filter(Device.region_code == region_code)
    if smp_code:
        query = query.filter(Device.smp_code == smp_code)

    return query.order_by(Device.device_code).all()


# ==========================================================
# 📌 INGESTION UPSERT
# ==========================================================

def _apply_report(
    device: Device,
    region_code: str,
    smp_code: str,
    team_number: Optional[str],
) -> str:
    """Move an existing device to the reporting station and refresh its team."""
    if device.region_code != region_code or device.smp_code != smp_code:
        device.region_code = region_code
        device.smp_code = smp_code
        if team_number:
            device.team_number = team_number
        return DEVICE_REASSIGNED
    if team_number and device.team_number != team_number:
        device.team_number = team_number
        return DEVICE_UPDATED
    return DEVICE_UNCHANGED


def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def upsert_device(
    db: Session,
    device_code: str,
    region_code: str,
    smp_code: str,
    team_number: Optional[str] = None,
) -> Tuple[Device, str]:
    """
    Register a device or move it to the station it reports from.

    The station assignment is updated in place; the device keeps its
    identity and its log history. When a concurrent request registers the
    same device first, the insert is abandoned and the stored row is updated
    instead.

    Returns:
        (device, status) with status one of DEVICE_CREATED,
        DEVICE_REASSIGNED, DEVICE_UPDATED, DEVICE_UNCHANGED
    """
    device = get_device_by_code(db, device_code)

    if device is None:
        device = Device(
            device_code=device_code,
            region_code=region_code,
            smp_code=smp_code,
            team_number=team_number,
        )
        db.add(device)
        try:
            db.commit()
            return device, DEVICE_CREATED
        except IntegrityError:
            db.rollback()
            device = get_device_by_code(db, device_code)
            if device is None:
                raise
        except Exception:
            db.rollback()
            raise

    status = _apply_report(device, region_code, smp_code, team_number)
    if status != DEVICE_UNCHANGED:
        _commit(db)
    return device, status
