from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from coworks.core.dependencies import get_db, get_current_profile
from coworks.models.profile import Profile
from coworks.schemas.profile import ProfileOut, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/", response_model=ProfileOut)
def read_profile(profile: Profile = Depends(get_current_profile)):
    return profile


@router.put("/", response_model=ProfileOut)
def update_profile(
    data: ProfileUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    taken = db.query(Profile).filter(
        Profile.phone == data.phone,
        Profile.id != profile.id
    ).first()
    if taken:
        raise HTTPException(status_code=400, detail="Phone number already in use")

    profile.full_name = data.full_name
    profile.phone = data.phone
    profile.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(profile)

    return profile
