from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.auth import (
    ADMIN_ROLE,
    authenticate_admin,
    create_access_token,
    get_current_admin,
)
from app.utils.logging import get_logger


router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = get_logger(__name__)


# ---------- Pydantic request models ----------

class LoginRequest(BaseModel):
    username: str
    password: str


# ----------------- LOGIN ------------------

@router.post("/login")
def login(payload: LoginRequest):
    if not authenticate_admin(payload.username, payload.password):
        logger.warning("Failed admin login for %s", payload.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": payload.username, "role": ADMIN_ROLE})

    return {
        "access_token": token,
        "token_type": "bearer",
    }


# ----------------- ME ------------------

@router.get("/me")
def me(admin: dict = Depends(get_current_admin)):
    return {
        "username": admin["sub"],
        "role": admin["role"],
    }
