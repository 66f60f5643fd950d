import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.api.deps import get_db, get_current_user
from portal.core.config import settings
from portal.core.security import check_credential, create_access_token
from portal.crud import user as crud_user
from portal.schemas.user import SessionUser, Token, UserLogin

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=Token)
def login(form: UserLogin, db: Session = Depends(get_db)):
    if not form.email or not form.password or not form.role:
        raise HTTPException(status_code=400, detail="Missing email/password/role")

    try:
        user = crud_user.get_user_by_email(db, form.email, form.role)
    except SQLAlchemyError as e:
        logger.error(f"[Auth] Failed to fetch user {form.email}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch user")

    if not user:
        raise HTTPException(status_code=401, detail="No user found with this email")

    if not user.password:
        logger.warning(f"[Auth] User has no password set: {form.email}")
        raise HTTPException(status_code=401, detail="Invalid password")

    is_valid, needs_rehash = check_credential(form.password, user.password)
    if not is_valid:
        logger.warning(f"[Auth] Invalid password attempt for {form.email}")
        raise HTTPException(status_code=401, detail="Invalid password")

    if needs_rehash:
        # legacy plain-text row: store it hashed from now on
        try:
            crud_user.rehash_password(db, user, form.password)
            logger.info(f"[Auth] Migrated stored credential to a hash for {form.email}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[Auth] Could not rehash credential for {form.email}: {e}")

    identity = SessionUser(id=user.id, email=user.email, name=user.name or "", role=form.role)
    if settings.AUTH_DEBUG:
        logger.debug(f"[Auth] Issued session for {identity}")

    access_token = create_access_token(data={"sub": identity.email, **identity.model_dump()})
    return {"access_token": access_token, "token_type": "bearer", "user": identity}


@router.get("/session", response_model=SessionUser)
def read_session(current_user: SessionUser = Depends(get_current_user)):
    return current_user
