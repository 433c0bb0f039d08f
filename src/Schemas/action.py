# src/Schemas/action.py

from pydantic import BaseModel, ConfigDict


class Action_get(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action_code: str
    app_version: str
    action_text: str
