# src/Repositories/administrator.py

"""
Administrator Repository Module

Lookups and provisioning for dashboard administrators. Password hashing is
done by the caller (src/Services/passwords.py); this module only stores the
resulting hash.
"""

from sqlalchemy.orm import Session
from src.Models.administrator import Administrator
from typing import List, Optional


def get_admin_by_login(db: Session, login: str) -> Optional[Administrator]:
    return db.query(Administrator).filter(Administrator.login == login).first()


def get_all_admins(db: Session) -> List[Administrator]:
    return db.query(Administrator).order_by(Administrator.login).all()


def create_admin(db: Session, login: str, password_hash: str) -> Administrator:
    """
    Create an administrator.

    Raises:
        IntegrityError: If the login already exists
    """
    admin = Administrator(login=login, password_hash=password_hash)
    db.add(admin)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(admin)
    return admin


def set_password_hash(db: Session, login: str, password_hash: str) -> bool:
    """Replace the stored hash. Returns False when the login does not exist."""
    admin = get_admin_by_login(db, login)
    if admin is None:
        return False
    admin.password_hash = password_hash
    db.commit()
    return True
