# portal/core/security.py
import hmac
import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple

from jose import jwt, JWTError
from passlib.context import CryptContext

from portal.core.config import settings
from portal.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def is_password_hash(stored: Optional[str]) -> bool:
    if not isinstance(stored, str) or not stored:
        return False
    return pwd_context.identify(stored) is not None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def check_credential(plain_password: str, stored: Optional[str]) -> Tuple[bool, bool]:
    """
    Compares a submitted password against the stored credential.

    Returns (is_valid, needs_rehash). Values passlib recognises as hashes are
    verified through it; anything else is a legacy plain-text credential and is
    compared directly. A valid legacy match always needs a rehash so the row
    migrates to hashed storage on first login.
    """
    if not stored:
        return False, False

    if is_password_hash(stored):
        try:
            valid = verify_password(plain_password, stored)
        except (ValueError, TypeError) as e:
            logger.error(f"[Auth] Hash verification failed: {e}")
            return False, False
        return valid, valid and pwd_context.needs_update(stored)

    valid = hmac.compare_digest(plain_password.encode("utf-8"), stored.encode("utf-8"))
    return valid, valid


def create_access_token(data: dict, expires_delta: timedelta | None = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthenticationError("Could not validate credentials")
    return payload
