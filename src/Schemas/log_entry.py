# src/Schemas/log_entry.py

"""
Schemas for the log views served to the dashboard.

DeviceLogView is the per-request projection joining logs with their device
(current station) and the action dictionary. LogPage wraps one page of it in
the envelope the dashboard expects: { data, total, totalUnfiltered, hasMore }.
"""

import datetime as dt
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


FILTER_FIELDS = (
    "region_code",
    "smp_code",
    "team_number",
    "action_text",
    "app_version",
    "device_code",
)
"""Fields that accept multi-value filters and expose facet values."""


class DeviceLogView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action_code: str
    app_version: str
    device_code: str
    datetime: dt.datetime
    region_code: str
    smp_code: str
    team_number: str
    action_text: str

    @field_validator("datetime")
    @classmethod
    def _assume_utc(cls, value: dt.datetime) -> dt.datetime:
        # SQLite hands back naive values; everything is stored in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value


class LogFilters(BaseModel):
    """
    Multi-value filters: OR inside one field, AND across fields.
    An empty list means the field is not filtered.
    """
    region_code: List[str] = Field(default_factory=list)
    smp_code: List[str] = Field(default_factory=list)
    team_number: List[str] = Field(default_factory=list)
    action_text: List[str] = Field(default_factory=list)
    app_version: List[str] = Field(default_factory=list)
    device_code: List[str] = Field(default_factory=list)

    @field_validator(*FILTER_FIELDS)
    @classmethod
    def _drop_blank(cls, values: List[str]) -> List[str]:
        return [v for v in values if v is not None and v.strip() != ""]

    def active(self) -> Dict[str, List[str]]:
        """Only the fields that actually restrict the result."""
        return {name: getattr(self, name) for name in FILTER_FIELDS if getattr(self, name)}


class LogPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: List[DeviceLogView]
    total: int = Field(..., description="Rows matching the filters")
    total_unfiltered: int = Field(
        ...,
        alias="totalUnfiltered",
        description="Rows before the user filters were applied",
    )
    has_more: bool = Field(..., alias="hasMore")


class FacetValues(BaseModel):
    """Sorted distinct values per filterable field under the active filters."""
    region_code: List[str] = Field(default_factory=list)
    smp_code: List[str] = Field(default_factory=list)
    team_number: List[str] = Field(default_factory=list)
    action_text: List[str] = Field(default_factory=list)
    app_version: List[str] = Field(default_factory=list)
    device_code: List[str] = Field(default_factory=list)
