from sqlalchemy.orm import Session

from smartlesson.core.logging import logger
from smartlesson.models.records import Profile
from smartlesson.schemas.profile import Profile as ProfileView, ProfileUpdate


def get_profile(db: Session, user_id: str) -> ProfileView:
    """The stored profile, or an empty one for users who never saved theirs"""
    row = db.get(Profile, user_id)
    if row is None:
        return ProfileView(user_id=user_id)
    return ProfileView.model_validate(row)


def update_profile(db: Session, user_id: str, update: ProfileUpdate) -> ProfileView:
    row = db.get(Profile, user_id)
    if row is None:
        row = Profile(user_id=user_id)
        db.add(row)
    for field, value in update.model_dump().items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    logger.info(f"Profile updated for user: {user_id}")
    return ProfileView.model_validate(row)
