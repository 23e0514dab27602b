from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from coworks.core.config import ADMIN_TOKEN_MAX_AGE
from coworks.core.dependencies import ADMIN_COOKIE, AdminSession, get_db, get_admin_session
from coworks.core.jwt import create_access_token
from coworks.core.logging_config import get_logger
from coworks.core.security import verify_password
from coworks.models.admin import Admin
from coworks.models.enums import ProfileRole
from coworks.schemas.admin import AdminAuthRequest, AdminOut

router = APIRouter(prefix="/functions/v1/admin-auth", tags=["Admin Auth"])
logger = get_logger()


# =====================================================================
#                     ADMIN LOGIN / LOGOUT
# =====================================================================
@router.post("")
def admin_auth(data: AdminAuthRequest, response: Response, db: Session = Depends(get_db)):
    if data.action == "logout":
        response.delete_cookie(ADMIN_COOKIE, path="/")
        return {"message": "Logged out"}

    if not data.email or not data.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    admin = db.query(Admin).filter(Admin.email == data.email).first()

    if not admin or not verify_password(data.password, admin.password_hash):
        logger.bind(log_type="admin", actor=data.email).warning("Failed admin login")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(
        {"sub": admin.email, "role": ProfileRole.ADMIN.value},
        expires_delta=ADMIN_TOKEN_MAX_AGE // 60,
    )

    response.set_cookie(
        ADMIN_COOKIE,
        token,
        max_age=ADMIN_TOKEN_MAX_AGE,
        path="/",
        samesite="lax",
    )

    logger.bind(log_type="admin", actor=admin.email).info("Admin logged in")

    return {"token": token, "admin": AdminOut.model_validate(admin)}


# =====================================================================
#                     CURRENT ADMIN SESSION
# =====================================================================
@router.get("/session")
def current_session(session: AdminSession = Depends(get_admin_session)):
    return {
        "admin": AdminOut.model_validate(session.admin),
        "expires_at": session.expires_at,
    }
