# src/Schemas/auth.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class Login_request(BaseModel):
    """Credentials posted to /api/login."""
    login: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class Login_response(BaseModel):
    message: str
    login: str


class Admin_get(BaseModel):
    """
    Administrator as exposed by the API.
    The password hash is never part of a response.
    """
    model_config = ConfigDict(from_attributes=True)

    login: str
    created_at: datetime


class Grant_get(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    login: str
    region_code: str
    smp_code: str
