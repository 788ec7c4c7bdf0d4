"""Dashboard statistics endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from greenworld.core.deps import get_db, require_roles
from greenworld.db.enums import ROLES_CORPORATE_DASHBOARD, ROLES_NGO_DASHBOARD
from greenworld.schemas.auth import UserSession
from greenworld.schemas.stats import CorporateStats, NgoStats, PlatformStats, PublicStats
from greenworld.services import stats_service

logger = logging.getLogger(__name__)

router = APIRouter()

STATS_ERROR = "Failed to fetch statistics"


@router.get("/public", response_model=PublicStats)
def public_stats(db: Session = Depends(get_db)):
    """Landing-page metrics. No authentication."""
    try:
        return stats_service.get_public_stats(db)
    except SQLAlchemyError:
        logger.exception("Public stats query failed")
        raise HTTPException(status_code=500, detail=STATS_ERROR)


@router.get("/platform", response_model=PlatformStats)
def platform_stats(db: Session = Depends(get_db)):
    """Exact platform totals. Open to anyone, like the public view."""
    try:
        return stats_service.get_platform_stats(db)
    except SQLAlchemyError:
        logger.exception("Platform stats query failed")
        raise HTTPException(status_code=500, detail=STATS_ERROR)


@router.get("/ngo", response_model=NgoStats)
def ngo_stats(
    user: UserSession = Depends(require_roles(ROLES_NGO_DASHBOARD)),
    db: Session = Depends(get_db),
):
    """Totals for projects owned by the calling NGO."""
    try:
        return stats_service.get_ngo_stats(db, user.id)
    except SQLAlchemyError:
        logger.exception("NGO stats query failed", extra={"user_id": user.id})
        raise HTTPException(status_code=500, detail=STATS_ERROR)


@router.get("/corporate", response_model=CorporateStats)
def corporate_stats(
    user: UserSession = Depends(require_roles(ROLES_CORPORATE_DASHBOARD)),
    db: Session = Depends(get_db),
):
    """Sponsor dashboard with platform-wide totals and impact estimates."""
    try:
        return stats_service.get_corporate_stats(db)
    except SQLAlchemyError:
        logger.exception("Corporate stats query failed", extra={"user_id": user.id})
        raise HTTPException(status_code=500, detail=STATS_ERROR)
