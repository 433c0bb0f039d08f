# src/Controller/Routes/reference.py

"""
Reference Data REST API

Read-only listings used by the dashboard's reference pages.

Endpoints:
- GET /api/smp          All stations
- GET /api/actions      Action dictionary
- GET /api/admins       Administrators (login and creation date only)
- GET /api/admins-smp   All administrator/station grants
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from src.Controller.deps import get_DB, require_login
from src.Repositories import action as action_repo
from src.Repositories import administrator as admin_repo
from src.Repositories import station as station_repo
from src.Repositories import station_grant as grant_repo
from src.Schemas import action as action_schema
from src.Schemas import auth as auth_schema
from src.Schemas import station as station_schema

router = APIRouter(dependencies=[Depends(require_login)])


@router.get("/smp", response_model=List[station_schema.Station_get])
def list_stations(db: Session = Depends(get_DB)):
    return station_repo.get_all_stations(db)


@router.get("/actions", response_model=List[action_schema.Action_get])
def list_actions(db: Session = Depends(get_DB)):
    return action_repo.get_all_actions(db)


@router.get("/admins", response_model=List[auth_schema.Admin_get])
def list_admins(db: Session = Depends(get_DB)):
    return admin_repo.get_all_admins(db)


@router.get("/admins-smp", response_model=List[auth_schema.Grant_get])
def list_grants(db: Session = Depends(get_DB)):
    return grant_repo.get_all_grants(db)
