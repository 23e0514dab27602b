from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from coworks.core.dependencies import get_db
from coworks.core.jwt import create_access_token
from coworks.core.logging_config import get_logger
from coworks.core.security import hash_password, verify_password
from coworks.models.enums import ProfileRole
from coworks.models.profile import Profile
from coworks.schemas.profile import SignUp, SignIn

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger()


# =====================================================================
#                           USER SIGN UP
# =====================================================================
@router.post("/signup")
def sign_up(data: SignUp, db: Session = Depends(get_db)):
    if db.query(Profile).filter(Profile.email == data.email).first():
        raise HTTPException(
            status_code=400,
            detail="An account with this email already exists. Please try logging in."
        )

    if db.query(Profile).filter(Profile.phone == data.phone).first():
        raise HTTPException(
            status_code=400,
            detail="An account with this phone number already exists. Please try logging in."
        )

    profile = Profile(
        email=data.email,
        full_name=data.full_name,
        phone=data.phone,
        role=ProfileRole.USER.value,
        password_hash=hash_password(data.password),
    )
    db.add(profile)
    db.commit()

    logger.info(f"User registered | {profile.email}")

    token = create_access_token({"sub": profile.email, "role": ProfileRole.USER.value})

    return {
        "message": "Account created successfully",
        "access_token": token,
        "role": ProfileRole.USER.value,
        "token_type": "bearer"
    }


# =====================================================================
#                           USER SIGN IN
# =====================================================================
@router.post("/signin")
def sign_in(data: SignIn, db: Session = Depends(get_db)):
    profile = db.query(Profile).filter(Profile.email == data.email).first()

    if not profile or not verify_password(data.password, profile.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token({"sub": profile.email, "role": ProfileRole.USER.value})

    return {
        "access_token": token,
        "role": ProfileRole.USER.value,
        "token_type": "bearer"
    }
