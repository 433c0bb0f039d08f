# src/Repositories/log_entry.py

"""
Log Entry Repository Module
===========================

Storage of device action logs and the queries behind the dashboard tables.

Every listing is built from a DeviceLogView subquery: the selected log rows
outer-joined with their device (current station) and the action dictionary.
Missing joins never drop a row; they degrade to placeholder text:

    region_code / smp_code / team_number -> "-"
    action_text                          -> "Unknown action"

Two sources feed the view:
- latest_log_view(): the newest row of every device in a scope, picked with
  ROW_NUMBER() OVER (PARTITION BY device_code ORDER BY datetime DESC,
  action_code, app_version). Ties on the newest timestamp resolve
  deterministically through the secondary keys.
- device_history_view(): every row of a single device

Filtering, counting, paging and facet extraction all run in SQL on top of the
view (see page_view() and facet_values()).
"""

from datetime import datetime
from typing import Iterable, List, Sequence

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from src.Models.action import ActionDictionary
from src.Models.device import Device
from src.Models.log_entry import LogEntry
from src.Schemas.log_entry import (
    FILTER_FIELDS,
    DeviceLogView,
    FacetValues,
    LogFilters,
    LogPage,
)


PLACEHOLDER = "-"
UNKNOWN_ACTION_TEXT = "Unknown action"


VIEW_COLUMNS = (
    "action_code",
    "app_version",
    "device_code",
    "datetime",
    "region_code",
    "smp_code",
    "team_number",
    "action_text",
)


# ==========================================================
# 📌 WRITES
# ==========================================================

def create_log_entry(
    DB: Session,
    *,
    action_code: str,
    app_version: str,
    device_code: str,
    team_number: str,
    event_time: datetime,
) -> LogEntry:
    """
    Append one log row.

    Raises:
        IntegrityError: The device already logged this action and app version
            at exactly this instant
    """
    entry = LogEntry(
        action_code=action_code,
        app_version=app_version,
        device_code=device_code,
        team_number=team_number,
        datetime=event_time,
    )
    DB.add(entry)
    try:
        DB.commit()
    except Exception:
        DB.rollback()
        raise
    DB.refresh(entry)
    return entry


# ==========================================================
# 📌 VIEW BUILDERS
# ==========================================================

def _device_log_view(DB: Session, source, *criteria):
    """Join a log source with devices and actions into the display projection."""
    return (
        DB.query(
            source.c.action_code.label("action_code"),
            source.c.app_version.label("app_version"),
            source.c.device_code.label("device_code"),
            source.c.datetime.label("datetime"),
            func.coalesce(Device.region_code, PLACEHOLDER).label("region_code"),
            func.coalesce(Device.smp_code, PLACEHOLDER).label("smp_code"),
            func.coalesce(source.c.team_number, PLACEHOLDER).label("team_number"),
            func.coalesce(ActionDictionary.action_text, UNKNOWN_ACTION_TEXT).label("action_text"),
        )
        .select_from(source)
        .outerjoin(Device, Device.device_code == source.c.device_code)
        .outerjoin(
            ActionDictionary,
            and_(
                ActionDictionary.action_code == source.c.action_code,
                ActionDictionary.app_version == source.c.app_version,
            ),
        )
        .filter(*criteria)
        .subquery("device_log_view")
    )


def latest_log_view(DB: Session, device_codes: Iterable[str]):
    """Newest log row of each device in `device_codes`."""
    rank = (
        func.row_number()
        .over(
            partition_by=LogEntry.device_code,
            order_by=(
                LogEntry.datetime.desc(),
                LogEntry.action_code.asc(),
                LogEntry.app_version.asc(),
            ),
        )
        .label("row_rank")
    )
    ranked = (
        DB.query(
            LogEntry.action_code,
            LogEntry.app_version,
            LogEntry.device_code,
            LogEntry.datetime,
            LogEntry.team_number,
            rank,
        )
        .filter(LogEntry.device_code.in_(list(device_codes)))
        .subquery("ranked_logs")
    )
    return _device_log_view(DB, ranked, ranked.c.row_rank == 1)


def device_history_view(DB: Session, device_code: str):
    """All log rows of one device."""
    history = (
        DB.query(
            LogEntry.action_code,
            LogEntry.app_version,
            LogEntry.device_code,
            LogEntry.datetime,
            LogEntry.team_number,
        )
        .filter(LogEntry.device_code == device_code)
        .subquery("device_history")
    )
    return _device_log_view(DB, history)


def latest_view_ordering(view) -> List:
    return [view.c.datetime.desc(), view.c.device_code.asc()]


def history_view_ordering(view) -> List:
    return [view.c.datetime.desc(), view.c.action_code.asc(), view.c.app_version.asc()]


# ==========================================================
# 📌 FILTERING / PAGING / FACETS
# ==========================================================

def _filter_criteria(view, filters: LogFilters) -> List:
    return [view.c[name].in_(values) for name, values in filters.active().items()]


def _count(DB: Session, view, criteria: Sequence) -> int:
    return DB.query(func.count()).select_from(view).filter(*criteria).scalar() or 0


def page_view(
    DB: Session,
    view,
    filters: LogFilters,
    offset: int,
    limit: int,
    ordering: Sequence,
) -> LogPage:
    """
    One page of a DeviceLogView.

    Returns:
        LogPage with total (after filters), total_unfiltered (before filters)
        and has_more = offset + limit < total
    """
    criteria = _filter_criteria(view, filters)

    total_unfiltered = _count(DB, view, ())
    total = _count(DB, view, criteria) if criteria else total_unfiltered

    rows = (
        DB.query(*[view.c[name] for name in VIEW_COLUMNS])
        .filter(*criteria)
        .order_by(*ordering)
        .offset(offset)
        .limit(limit)
        .all()
    )

    return LogPage(
        data=[DeviceLogView.model_validate(dict(row._mapping)) for row in rows],
        total=total,
        total_unfiltered=total_unfiltered,
        has_more=offset + limit < total,
    )


def facet_values(DB: Session, view, filters: LogFilters) -> FacetValues:
    """
    Sorted distinct values of every filterable field, with the active filters
    applied. Adding a filter value can only shrink each list.
    """
    criteria = _filter_criteria(view, filters)
    values = {}

    for name in FILTER_FIELDS:
        column = view.c[name]
        rows = (
            DB.query(column)
            .filter(*criteria)
            .filter(column.isnot(None))
            .distinct()
            .order_by(column)
            .all()
        )
        values[name] = [row[0] for row in rows if row[0] != ""]

    return FacetValues(**values)
