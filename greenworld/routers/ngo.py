"""NGO workspace endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from greenworld.core.deps import get_db, require_roles
from greenworld.db.enums import ROLES_NGO_DASHBOARD
from greenworld.schemas.auth import UserSession
from greenworld.schemas.stats import NgoFundingResponse, NgoVolunteersResponse
from greenworld.services import ngo_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/volunteers", response_model=NgoVolunteersResponse)
def ngo_volunteers(
    user: UserSession = Depends(require_roles(ROLES_NGO_DASHBOARD)),
    db: Session = Depends(get_db),
):
    """Volunteers registered on any of the caller's projects."""
    try:
        volunteers = ngo_service.list_volunteers(db, user.id)
    except SQLAlchemyError:
        logger.exception("NGO volunteer query failed", extra={"user_id": user.id})
        raise HTTPException(status_code=500, detail="Failed to fetch volunteers")
    return {"volunteers": volunteers}


@router.get("/funding", response_model=NgoFundingResponse)
def ngo_funding(
    user: UserSession = Depends(require_roles(ROLES_NGO_DASHBOARD)),
    db: Session = Depends(get_db),
):
    try:
        funding = ngo_service.get_funding_breakdown(db, user.id)
    except SQLAlchemyError:
        logger.exception("NGO funding query failed", extra={"user_id": user.id})
        raise HTTPException(status_code=500, detail="Failed to fetch funding")
    return {"funding": funding}
