# src/Schemas/mobile.py

"""
Schemas for the device-facing ingestion API.

Terminals in the field run different app versions: some send snake_case keys,
others camelCase, some send codes as numbers. Every key below accepts both
spellings and numbers are coerced to strings.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
import datetime as dt
from datetime import datetime
from typing import Any, List, Optional

from src.Services.timestamps import normalize_timestamp


class Mobile_log_request(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    region_code: str = Field(
        ..., min_length=1, max_length=50,
        validation_alias=AliasChoices("region_code", "regionCode", "RegionCode"),
    )
    smp_code: str = Field(
        ..., min_length=1, max_length=50,
        validation_alias=AliasChoices("smp_code", "smpCode", "SmpCode"),
    )
    team_number: str = Field(
        ..., min_length=1, max_length=50,
        validation_alias=AliasChoices("team_number", "teamNumber", "TeamNumber"),
    )
    device_code: str = Field(
        ..., min_length=1, max_length=50,
        validation_alias=AliasChoices("device_code", "deviceCode", "DeviceCode"),
    )
    app_version: str = Field(
        ..., min_length=1, max_length=20,
        validation_alias=AliasChoices("app_version", "appVersion", "AppVersion"),
    )
    action_code: str = Field(
        ..., min_length=1, max_length=20,
        validation_alias=AliasChoices("action_code", "actionCode", "ActionCode"),
    )
    action_text: Optional[str] = Field(
        None, max_length=500,
        validation_alias=AliasChoices("action_text", "actionText", "ActionText"),
    )
    event_time: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("datetime", "Datetime", "timestamp"),
        description="ISO-8601, 'yyyy-MM-dd HH:mm:ss[.ffffff]' or epoch milliseconds",
    )

    @field_validator("event_time", mode="before")
    @classmethod
    def _parse_event_time(cls, value: Any) -> Optional[datetime]:
        # Unparseable values fall back to server time at ingestion
        return normalize_timestamp(value)

    @field_validator("action_text")
    @classmethod
    def _blank_text_is_missing(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class Ingest_data(BaseModel):
    device_code: str
    action_code: str
    datetime: dt.datetime


class Ingest_ack(BaseModel):
    success: bool = True
    message: str
    data: Ingest_data


class Batch_item_ack(BaseModel):
    success: bool
    device_code: Optional[str] = None
    action_code: Optional[str] = None
    error: Optional[str] = None


class Batch_response(BaseModel):
    success: bool = True
    message: str
    processed: int
    succeeded: int
    failed: int
    results: List[Batch_item_ack]
