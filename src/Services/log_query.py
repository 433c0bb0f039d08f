# src/Services/log_query.py

"""
Log Query Service
=================
Scope-aware entry points for the dashboard log tables.

Every function resolves what the administrator may see first, then delegates
the SQL to src/Repositories/log_entry.py:

- latest_logs(): newest log of each device in the administrator's scope
- device_logs(): full history of one device
- facet_values() / device_facet_values(): distinct values per filterable field

Device-level calls raise DeviceNotFoundError for unknown devices and
DeviceAccessError when the device's current station is not granted; the
routes translate them into 404 and 403.
"""

from typing import Optional

from sqlalchemy.orm import Session

from src.Models.device import Device
from src.Repositories import device as device_repo
from src.Repositories import log_entry as log_repo
from src.Schemas.log_entry import FacetValues, LogFilters, LogPage
from src.Services.access_scope import accessible_device_codes, has_station_grant


class DeviceNotFoundError(Exception):
    """The requested device code is not registered."""


class DeviceAccessError(Exception):
    """The device is assigned to a station the administrator cannot see."""


def empty_page() -> LogPage:
    return LogPage(data=[], total=0, total_unfiltered=0, has_more=False)


def _authorized_device(db: Session, device_code: str, login: str) -> Device:
    device = device_repo.get_device_by_code(db, device_code)
    if device is None:
        raise DeviceNotFoundError(f"Device '{device_code}' not found")
    if not has_station_grant(db, login, device.region_code, device.smp_code):
        raise DeviceAccessError(f"No access to device '{device_code}'")
    return device


def latest_logs(
    db: Session,
    login: str,
    filters: Optional[LogFilters] = None,
    offset: int = 0,
    limit: int = 50,
) -> LogPage:
    """
    One page of the latest-log-per-device view.

    An administrator without grants (or whose stations hold no devices) gets
    an empty page, never the unscoped table.
    """
    filters = filters or LogFilters()
    codes = accessible_device_codes(db, login)
    if not codes:
        return empty_page()

    view = log_repo.latest_log_view(db, codes)
    return log_repo.page_view(
        db, view, filters, offset, limit, log_repo.latest_view_ordering(view)
    )


def device_logs(
    db: Session,
    device_code: str,
    login: str,
    filters: Optional[LogFilters] = None,
    offset: int = 0,
    limit: int = 50,
) -> LogPage:
    """
    One page of a single device's history.

    Raises:
        DeviceNotFoundError, DeviceAccessError
    """
    filters = filters or LogFilters()
    _authorized_device(db, device_code, login)

    view = log_repo.device_history_view(db, device_code)
    return log_repo.page_view(
        db, view, filters, offset, limit, log_repo.history_view_ordering(view)
    )


def facet_values(db: Session, login: str, filters: Optional[LogFilters] = None) -> FacetValues:
    """Facets of the latest-per-device view under the active filters."""
    filters = filters or LogFilters()
    codes = accessible_device_codes(db, login)
    if not codes:
        return FacetValues()

    view = log_repo.latest_log_view(db, codes)
    return log_repo.facet_values(db, view, filters)


def device_facet_values(
    db: Session,
    device_code: str,
    login: str,
    filters: Optional[LogFilters] = None,
) -> FacetValues:
    """
    Facets of one device's history under the active filters.

    Raises:
        DeviceNotFoundError, DeviceAccessError
    """
    filters = filters or LogFilters()
    _authorized_device(db, device_code, login)

    view = log_repo.device_history_view(db, device_code)
    return log_repo.facet_values(db, view, filters)
