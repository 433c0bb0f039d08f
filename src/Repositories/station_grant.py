# src/Repositories/station_grant.py

"""
Station Grant Repository Module

Administrator-to-station permissions. The access scope
(src/Services/access_scope.py) is built from get_grant_pairs().
"""

from sqlalchemy.orm import Session
from src.Models.station_grant import StationGrant
from typing import List, Tuple


def get_grant_pairs(db: Session, login: str) -> List[Tuple[str, str]]:
    """
    (region_code, smp_code) pairs granted to `login`.

    Example:
        get_grant_pairs(db, "admin77")
        # [("77", "S1"), ("77", "S2")]
    """
    rows = (
        db.query(StationGrant.region_code, StationGrant.smp_code)
        .filter(StationGrant.login == login)
        .order_by(StationGrant.region_code, StationGrant.smp_code)
        .all()
    )
    return [(row[0], row[1]) for row in rows]


def has_grant(db: Session, login: str, region_code: str, smp_code: str) -> bool:
    return db.get(StationGrant, (login, region_code, smp_code)) is not None


def get_all_grants(db: Session) -> List[StationGrant]:
    return (
        db.query(StationGrant)
        .order_by(StationGrant.login, StationGrant.region_code, StationGrant.smp_code)
        .all()
    )


def add_grant(db: Session, login: str, region_code: str, smp_code: str) -> bool:
    """
    Grant a station to an administrator.

    Returns:
        True if the grant was created, False if it already existed
    """
    if has_grant(db, login, region_code, smp_code):
        return False
    db.add(StationGrant(login=login, region_code=region_code, smp_code=smp_code))
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return True


def remove_grant(db: Session, login: str, region_code: str, smp_code: str) -> bool:
    grant = db.get(StationGrant, (login, region_code, smp_code))
    if grant is None:
        return False
    db.delete(grant)
    db.commit()
    return True
