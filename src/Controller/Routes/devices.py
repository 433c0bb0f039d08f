# src/Controller/Routes/devices.py

"""
Device Registry REST API

Endpoints:
- GET /api/devices?region_code&smp_code   Devices in the administrator's scope

A device is listed when its current station is granted to the caller.
Administrators without grants get an empty list.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from src.Controller.deps import get_DB, require_login
from src.Repositories import device as device_repo
from src.Repositories import station_grant as grant_repo
from src.Schemas import device as device_schema

router = APIRouter()


@router.get("/devices", response_model=List[device_schema.Device_get])
def list_devices(
    region_code: Optional[str] = Query(None, alias="region", description="Only devices of this region"),
    smp_code: Optional[str] = Query(None, alias="smp", description="Only devices of this station"),
    login: str = Depends(require_login),
    db: Session = Depends(get_DB),
):
    """
    Example Requests:
        GET /api/devices
        GET /api/devices?region=77&smp=S1
    """
    pairs = grant_repo.get_grant_pairs(db, login)
    if not pairs:
        return []
    return device_repo.get_devices_in_scope(db, pairs, region_code=region_code, smp_code=smp_code)
