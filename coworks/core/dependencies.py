from dataclasses import dataclass
from datetime import datetime, timezone

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from coworks.db.session import SessionLocal
from coworks.core.auth_utils import decode_token
from coworks.models.enums import ProfileRole
from coworks.models.profile import Profile
from coworks.models.admin import Admin

ADMIN_COOKIE = "admin_token"

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@dataclass
class AdminSession:
    """An authenticated back-office operator for the lifetime of a request."""

    admin: Admin
    token: str
    expires_at: datetime

    @property
    def email(self) -> str:
        return self.admin.email


def get_current_profile(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Profile:
    payload = decode_token(credentials.credentials)

    if payload["role"] != ProfileRole.USER.value:
        raise HTTPException(status_code=403, detail="Users only")

    profile = db.query(Profile).filter(Profile.email == payload["sub"]).first()
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")

    return profile


def get_admin_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_security),
    db: Session = Depends(get_db)
) -> AdminSession:
    # Bearer header wins over the cookie set at login
    token = credentials.credentials if credentials else request.cookies.get(ADMIN_COOKIE)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    payload = decode_token(token)
    if payload["role"] != ProfileRole.ADMIN.value:
        raise HTTPException(status_code=403, detail="Admins only")

    admin = db.query(Admin).filter(Admin.email == payload["sub"]).first()
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")

    return AdminSession(
        admin=admin,
        token=token,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
