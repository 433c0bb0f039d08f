# src/Repositories/station.py

"""
Station Repository Module

Stations are created lazily ("create if absent") by the ingestion pipeline.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from src.Models.station import Station
from src.Models.station_grant import StationGrant
from typing import List, Optional, Tuple


def get_all_stations(db: Session) -> List[Station]:
    return db.query(Station).order_by(Station.region_code, Station.smp_code).all()


def get_station(db: Session, region_code: str, smp_code: str) -> Optional[Station]:
    return db.get(Station, (region_code, smp_code))


def ensure_station(db: Session, region_code: str, smp_code: str) -> Tuple[Station, bool]:
    """
    Create the station if it does not exist yet.

    Returns:
        (station, created) where created is True when a row was inserted.
        A station inserted by a concurrent request between the lookup and the
        commit is returned with created=False.

    Side effects:
        Commits immediately; the insert is independent of any later step.
    """
    station = get_station(db, region_code, smp_code)
    if station is not None:
        return station, False

    station = Station(region_code=region_code, smp_code=smp_code)
    db.add(station)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_station(db, region_code, smp_code)
        if existing is None:
            raise
        return existing, False
    except Exception:
        db.rollback()
        raise
    return station, True


def get_stations_for_login(db: Session, login: str) -> List[Station]:
    """
    Stations an administrator holds grants for.

    Grants pointing at a station row that does not exist are skipped (inner
    join), matching what the dashboard can actually show.
    """
    return (
        db.query(Station)
        .join(
            StationGrant,
            (StationGrant.region_code == Station.region_code)
            & (StationGrant.smp_code == Station.smp_code),
        )
        .filter(StationGrant.login == login)
        .order_by(Station.region_code, Station.smp_code)
        .all()
    )
