# src/Schemas/station.py

from pydantic import BaseModel, ConfigDict


class Station_get(BaseModel):
    """SMP station identified by its (region_code, smp_code) pair."""
    model_config = ConfigDict(from_attributes=True)

    region_code: str
    smp_code: str
