import hmac
from datetime import datetime, timedelta

import bcrypt
from fastapi import HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from app.config import settings


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

ADMIN_ROLE = "admin"


# ============================================================
# PASSWORD HELPERS
# ============================================================

def verify_password(password: str, hashed: str) -> bool:
    password_bytes = password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed.encode())
    except ValueError:
        # Malformed hash in configuration
        return False


# ============================================================
# LOGIN
# ============================================================

def authenticate_admin(username: str, password: str) -> bool:
    if not hmac.compare_digest(username, settings.ADMIN_USERNAME):
        return False

    if settings.ADMIN_PASSWORD_HASH:
        return verify_password(password, settings.ADMIN_PASSWORD_HASH)

    if settings.ADMIN_PASSWORD:
        return hmac.compare_digest(password, settings.ADMIN_PASSWORD)

    # No credentials configured: admin login disabled
    return False


# ============================================================
# TOKEN CREATION
# ============================================================

def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# ============================================================
# CURRENT ADMIN (explicit context for every admin call)
# ============================================================

def get_current_admin(token: str = Depends(oauth2_scheme)) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    if payload.get("sub") is None or payload.get("role") != ADMIN_ROLE:
        raise HTTPException(status_code=401, detail="Invalid token")

    return payload
