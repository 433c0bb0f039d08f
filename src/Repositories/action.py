# src/Repositories/action.py

"""
Action Dictionary Repository Module

The first text submitted for an (action_code, app_version) pair wins; later
submissions with a different text leave the row untouched.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from src.Models.action import ActionDictionary
from typing import List, Optional, Tuple


def placeholder_action_text(action_code: str) -> str:
    """Label used when a device does not send a text for a new action."""
    return f"Action {action_code}"


def get_all_actions(db: Session) -> List[ActionDictionary]:
    return (
        db.query(ActionDictionary)
        .order_by(ActionDictionary.action_code, ActionDictionary.app_version)
        .all()
    )


def get_action(db: Session, action_code: str, app_version: str) -> Optional[ActionDictionary]:
    return db.get(ActionDictionary, (action_code, app_version))


def ensure_action(
    db: Session,
    action_code: str,
    app_version: str,
    action_text: Optional[str] = None,
) -> Tuple[ActionDictionary, bool]:
    """
    Create the dictionary entry if it does not exist yet.

    A concurrent request may insert the same pair between the lookup and the
    commit; the unique-key violation is then resolved to the stored row.

    Returns:
        (action, created)
    """
    action = get_action(db, action_code, app_version)
    if action is not None:
        return action, False

    action = ActionDictionary(
        action_code=action_code,
        app_version=app_version,
        action_text=action_text or placeholder_action_text(action_code),
    )
    db.add(action)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_action(db, action_code, app_version)
        if existing is None:
            raise
        return existing, False
    except Exception:
        db.rollback()
        raise
    return action, True
