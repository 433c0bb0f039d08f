# src/Controller/Routes/logs.py

"""
Device Log REST API

Endpoints:
- GET /api/logs/latest                              Latest log per visible device
- GET /api/logs/device/{device_code}                History of one device
- GET /api/logs/unique-values                       Facets for the latest view
- GET /api/logs/device/{device_code}/unique-values  Facets for one device

Filters (all listings and facets), repeatable:
    region_code, smp_code, team_number, action_text, app_version, device_code
    ?region_code=77&region_code=50&app_version=2.1
    -> region_code IN (77, 50) AND app_version IN (2.1)

Paged responses:
    { "data": [...], "total": 120, "totalUnfiltered": 300, "hasMore": true }
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from src.Controller.deps import Pagination, get_DB, get_log_filters, require_login
from src.Schemas.log_entry import FacetValues, LogFilters, LogPage
from src.Services import log_query
from src.Services.log_query import DeviceAccessError, DeviceNotFoundError

router = APIRouter()


def _device_errors_to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, DeviceNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=403, detail=str(exc))


# ==========================================================
# 📌 Latest Log per Device
# ==========================================================

@router.get("/latest", response_model=LogPage)
def get_latest_logs(
    page: Pagination = Depends(),
    filters: LogFilters = Depends(get_log_filters),
    login: str = Depends(require_login),
    db: Session = Depends(get_DB),
):
    return log_query.latest_logs(db, login, filters, offset=page.offset, limit=page.limit)


@router.get("/unique-values", response_model=FacetValues)
def get_unique_values(
    filters: LogFilters = Depends(get_log_filters),
    login: str = Depends(require_login),
    db: Session = Depends(get_DB),
):
    """Distinct values per field, narrowed by every active filter."""
    return log_query.facet_values(db, login, filters)


# ==========================================================
# 📌 Single Device History
# ==========================================================

@router.get("/device/{device_code}", response_model=LogPage)
def get_device_logs(
    device_code: str,
    page: Pagination = Depends(),
    filters: LogFilters = Depends(get_log_filters),
    login: str = Depends(require_login),
    db: Session = Depends(get_DB),
):
    try:
        return log_query.device_logs(
            db, device_code, login, filters, offset=page.offset, limit=page.limit
        )
    except (DeviceNotFoundError, DeviceAccessError) as e:
        raise _device_errors_to_http(e)


@router.get("/device/{device_code}/unique-values", response_model=FacetValues)
def get_device_unique_values(
    device_code: str,
    filters: LogFilters = Depends(get_log_filters),
    login: str = Depends(require_login),
    db: Session = Depends(get_DB),
):
    try:
        return log_query.device_facet_values(db, device_code, login, filters)
    except (DeviceNotFoundError, DeviceAccessError) as e:
        raise _device_errors_to_http(e)
