# src/Services/ingestion.py
"""
Device Log Ingestion
====================

Pipeline behind POST /api/mobile/log and POST /api/mobile/logs/batch.

For every record, in order, each step committed on its own:
    1. Station      created if the (region_code, smp_code) pair is new
    2. Device       created, or moved in place to the reporting station
    3. Action       dictionary entry created if new (first text wins)
    4. Log          appended unconditionally

There is no transaction spanning a record or a batch: a failure at step 4
leaves the station/device/action rows of steps 1-3 in place. A batch keeps
going after a failed record and reports every outcome individually.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.Core.log_ws import log_from_thread
from src.Repositories import action as action_repo
from src.Repositories import device as device_repo
from src.Repositories import log_entry as log_repo
from src.Repositories import station as station_repo
from src.Schemas.mobile import (
    Batch_item_ack,
    Batch_response,
    Ingest_ack,
    Ingest_data,
    Mobile_log_request,
)
from src.Services.timestamps import resolve_event_time


class DuplicateLogError(Exception):
    """The device already logged this action/version at the same instant."""


class BatchFormatError(ValueError):
    """The batch body is neither a list of records nor {"logs": [...]}."""


# ==========================================================
# SINGLE RECORD
# ==========================================================

def ingest_single(db: Session, record: Mobile_log_request, now: Optional[datetime] = None) -> Ingest_ack:
    """
    Store one device log record.

    Args:
        db: SQLAlchemy session
        record: Validated request
        now: Fallback timestamp when the record carries none (tests)

    Returns:
        Ingest_ack echoing device_code, action_code and the stored datetime

    Raises:
        DuplicateLogError: Same (action, version, device, datetime) already stored
        SQLAlchemyError: Any other database failure (session rolled back)
    """
    _, station_created = station_repo.ensure_station(db, record.region_code, record.smp_code)
    if station_created:
        log_from_thread(f"[INGEST] New station: {record.region_code}/{record.smp_code}")

    _, device_status = device_repo.upsert_device(
        db, record.device_code, record.region_code, record.smp_code, record.team_number
    )
    if device_status == device_repo.DEVICE_CREATED:
        log_from_thread(
            f"[INGEST] New device: {record.device_code} ({record.region_code}/{record.smp_code})"
        )
    elif device_status == device_repo.DEVICE_REASSIGNED:
        log_from_thread(
            f"[INGEST] Device {record.device_code} reassigned to {record.region_code}/{record.smp_code}",
            "warning",
        )

    _, action_created = action_repo.ensure_action(
        db, record.action_code, record.app_version, record.action_text
    )
    if action_created:
        log_from_thread(f"[INGEST] New action: {record.action_code} v{record.app_version}")

    event_time = record.event_time or resolve_event_time(None, now=now)

    try:
        entry = log_repo.create_log_entry(
            db,
            action_code=record.action_code,
            app_version=record.app_version,
            device_code=record.device_code,
            team_number=record.team_number,
            event_time=event_time,
        )
    except IntegrityError as e:
        raise DuplicateLogError(
            f"Log already exists for device '{record.device_code}', action "
            f"'{record.action_code}' v{record.app_version} at {event_time.isoformat()}"
        ) from e

    log_from_thread(
        f"[INGEST] Log stored: {record.device_code} - {record.action_code} at {event_time.isoformat()}"
    )

    return Ingest_ack(
        message="Log stored successfully",
        data=Ingest_data(
            device_code=entry.device_code,
            action_code=entry.action_code,
            datetime=event_time,
        ),
    )


# ==========================================================
# BATCH
# ==========================================================

def extract_batch_records(payload: Any) -> List[Any]:
    """
    Accept a bare list of records or an object with a "logs" list.

    Raises:
        BatchFormatError: Any other shape, or an empty list
    """
    if isinstance(payload, dict):
        payload = payload.get("logs")

    if not isinstance(payload, list):
        raise BatchFormatError("Expected a list of logs or an object with a 'logs' list")

    if not payload:
        raise BatchFormatError("No logs to add")

    return payload


def _raw_field(raw: Any, *names: str) -> Optional[str]:
    if not isinstance(raw, dict):
        return None
    for name in names:
        value = raw.get(name)
        if value is not None:
            return str(value)
    return None


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(piece) for piece in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def ingest_batch(db: Session, payload: Any, now: Optional[datetime] = None) -> Batch_response:
    """
    Store every record of a batch independently.

    A record that fails validation or storage is reported in its own ack;
    the remaining records are still processed.

    Raises:
        BatchFormatError: The body itself is unusable
    """
    records = extract_batch_records(payload)

    results: List[Batch_item_ack] = []
    succeeded = 0

    for raw in records:
        device_code = _raw_field(raw, "device_code", "deviceCode", "DeviceCode")
        action_code = _raw_field(raw, "action_code", "actionCode", "ActionCode")

        try:
            record = Mobile_log_request.model_validate(raw)
            ingest_single(db, record, now=now)
        except ValidationError as e:
            results.append(Batch_item_ack(
                success=False, device_code=device_code, action_code=action_code,
                error=_validation_message(e),
            ))
            continue
        except (DuplicateLogError, SQLAlchemyError) as e:
            db.rollback()
            log_from_thread(f"[INGEST] Failed to store log for {device_code}: {e}", "error")
            results.append(Batch_item_ack(
                success=False, device_code=device_code, action_code=action_code,
                error=str(e),
            ))
            continue

        succeeded += 1
        results.append(Batch_item_ack(
            success=True, device_code=record.device_code, action_code=record.action_code,
        ))

    failed = len(records) - succeeded
    message = f"Processed {len(records)} logs. Succeeded: {succeeded}, failed: {failed}"
    log_from_thread(f"[INGEST] {message}", "warning" if failed else "log")

    return Batch_response(
        message=message,
        processed=len(records),
        succeeded=succeeded,
        failed=failed,
        results=results,
    )
