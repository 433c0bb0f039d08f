# src/Services/access_scope.py

"""
Access Scope Resolver
=====================
Turns an administrator's station grants into the set of devices they may see.

A device is visible when its CURRENT (region_code, smp_code) matches one of the
granted pairs, so reassigning a device moves it between scopes on the next
request. Nothing is cached: grants and assignments are read fresh every time.

Functions:
- station_scope_predicate(): SQL condition "(region=r1 AND smp=s1) OR ..."
- accessible_device_codes(): device codes visible to a login
- has_station_grant(): single grant check
"""

from typing import Iterable, Set, Tuple

from sqlalchemy import and_, false, or_
from sqlalchemy.orm import Session

from src.Models.device import Device
from src.Repositories import station_grant as grant_repo


def station_scope_predicate(pairs: Iterable[Tuple[str, str]]):
    """
    Build the device visibility condition for a set of granted stations.

    With no pairs the condition is constant false, never "no condition".
    """
    clauses = [
        and_(Device.region_code == region_code, Device.smp_code == smp_code)
        for region_code, smp_code in pairs
    ]
    if not clauses:
        return false()
    return or_(*clauses)


def accessible_device_codes(db: Session, login: str) -> Set[str]:
    """
    Device codes currently assigned to a station granted to `login`.

    Returns:
        Set of device codes (empty when the login has no grants)
    """
    pairs = grant_repo.get_grant_pairs(db, login)
    if not pairs:
        return set()

    rows = db.query(Device.device_code).filter(station_scope_predicate(pairs)).all()
    return {row[0] for row in rows}


def has_station_grant(db: Session, login: str, region_code: str, smp_code: str) -> bool:
    return grant_repo.has_grant(db, login, region_code, smp_code)
