# src/Controller/Routes/mobile.py

"""
Device-Facing Ingestion REST API

Endpoints (no session, terminals authenticate by network placement):
- POST /api/mobile/log          Store one log record
- POST /api/mobile/logs/batch   Store many records, each independently
- GET  /api/mobile/test         Connectivity probe for terminals

Record body (snake_case or camelCase keys):
    {
        "region_code": "77", "smp_code": "S1", "team_number": "12",
        "device_code": "D1", "app_version": "2.1", "action_code": "5",
        "action_text": "Arrived on scene",              # optional
        "datetime": "2024-01-15T10:30:00Z"              # optional
    }

Batch body: [record, ...] or {"logs": [record, ...]}
"""

from datetime import datetime, timezone
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from src.Controller.deps import get_DB
from src.Core.log_ws import log_from_thread
from src.Schemas import mobile as mobile_schema
from src.Services import ingestion
from src.Services.ingestion import BatchFormatError, DuplicateLogError

router = APIRouter()


@router.post("/log", response_model=mobile_schema.Ingest_ack)
def add_log(record: mobile_schema.Mobile_log_request, db: Session = Depends(get_DB)):
    try:
        return ingestion.ingest_single(db, record)
    except DuplicateLogError as e:
        log_from_thread(f"[INGEST] {e}", "warning")
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError as e:
        db.rollback()
        log_from_thread(f"[INGEST] Failed to store log: {e}", "error")
        raise HTTPException(status_code=500, detail=f"Failed to store log: {e}")


@router.post("/logs/batch", response_model=mobile_schema.Batch_response)
def add_logs_batch(payload: Any = Body(...), db: Session = Depends(get_DB)):
    """
    Records are validated one by one, so a malformed record shows up as a
    failed entry in `results` instead of rejecting the whole batch.
    """
    try:
        return ingestion.ingest_batch(db, payload)
    except BatchFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/test")
def mobile_test():
    return {
        "message": "Mobile API is up",
        "status": "success",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
