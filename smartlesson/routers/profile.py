from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smartlesson.core.logging import logger
from smartlesson.db.database import get_db
from smartlesson.routers.activity import require_user
from smartlesson.schemas.profile import Profile, ProfileUpdate
from smartlesson.services import profile_service

router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=Profile)
async def get_profile(user_id: str = Depends(require_user), db: Session = Depends(get_db)):
    return profile_service.get_profile(db, user_id)


@router.put("/profile", response_model=Profile)
async def update_profile(
    request: ProfileUpdate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Create or replace the caller's profile"""
    try:
        return profile_service.update_profile(db, user_id, request)
    except SQLAlchemyError as e:
        logger.error(f"Error updating profile: {e}")
        raise HTTPException(status_code=500, detail=str(e))
