# src/Schemas/device.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class Device_get(BaseModel):
    """
    Schema for device response data.
    The (region_code, smp_code) pair is the device's current station.
    """
    model_config = ConfigDict(from_attributes=True)

    device_code: str = Field(..., description="Unique terminal identifier")
    region_code: str = Field(..., description="Region of the current station")
    smp_code: str = Field(..., description="Code of the current station")
    team_number: Optional[str] = Field(None, description="Team from the latest submission")
    created_at: Optional[datetime] = None
