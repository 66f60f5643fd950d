# portal/api/deps.py
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from portal.core.exceptions import AuthenticationError
from portal.core.progress_loader import RequestLiveness, SqlProgressStore, StudentContext, load_context
from portal.core.security import decode_access_token
from portal.db.session import SessionLocal
from portal.schemas.user import SessionUser

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

SIGN_IN_REQUIRED = "Please sign in to continue."


def get_session_factory():
    return SessionLocal


def get_db(session_factory=Depends(get_session_factory)):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def get_store(session_factory=Depends(get_session_factory)) -> SqlProgressStore:
    return SqlProgressStore(session_factory)


def get_liveness(request: Request) -> RequestLiveness:
    return RequestLiveness(request)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> SessionUser:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=SIGN_IN_REQUIRED)
    try:
        payload = decode_access_token(token)
    except AuthenticationError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=SIGN_IN_REQUIRED)

    email = payload.get("email") or payload.get("sub")
    if not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=SIGN_IN_REQUIRED)

    return SessionUser(
        id=payload.get("id"),
        email=email,
        name=payload.get("name") or "",
        role=payload.get("role") or "student",
    )


def require_student(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
    if current_user.role != "student":
        raise HTTPException(status_code=403, detail="Students only")
    return current_user


async def get_student_context(
    current_user: SessionUser = Depends(require_student),
    store: SqlProgressStore = Depends(get_store),
) -> Optional[StudentContext]:
    # None means the student row could not be loaded; views render empty
    return await load_context(store, current_user.email)
