# src/Models/action.py

"""
ActionDictionary Model - Action Labels

Human-readable labels for action codes. Different app versions may label the
same action_code differently, so the key is (action_code, app_version).
The first submitted text wins; later submissions never overwrite it.

Database Table: actions
Primary Key: (action_code, app_version)
"""

from sqlalchemy.orm import declared_attr
from sqlalchemy import Column, String
from src.DB.base_class import Base


class ActionDictionary(Base):

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "actions"

    action_code = Column(String(20), primary_key=True)
    app_version = Column(String(20), primary_key=True)
    action_text = Column(String(500), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<ActionDictionary(action_code={self.action_code!r}, "
            f"app_version={self.app_version!r}, action_text={self.action_text!r})>"
        )
