from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, Response, Depends
from fastapi import WebSocket
from sqlalchemy.orm import Session

from api.config import get_db, settings
from api.models.models import User
from api.schemas.auth_schemas import AuthTokenPayload
from api.schemas.result_schemas import ErrorKind, ServiceResult
from api.schemas.user_schemas import CurrentUser
from api.utils.common import ServiceResultError, display_name
from api.utils.jwt import verify_token, get_password_hash, create_access_token, verify_password
from api.utils.logger import configure_logging

logger = configure_logging()


def _token_from_ws_scope(scope: dict) -> Optional[str]:
    """Extract access_token from Cookie or query (?token=) in WebSocket scope. Returns None if missing."""
    qs = scope.get("query_string") or b""
    if qs:
        for part in qs.split(b"&"):
            if part.startswith(b"token="):
                return part[6:].decode("utf-8", errors="replace").strip()
    for name, value in scope.get("headers") or []:
        if name.lower() == b"cookie":
            cookie = value.decode("utf-8", errors="replace")
            for part in cookie.split(";"):
                part = part.strip()
                if part.startswith("access_token="):
                    return part[13:].strip()
            break
    return None


def _user_from_token(token: Optional[str], db: Session) -> Optional[User]:
    payload = verify_token(token)
    if payload is None or payload.sub is None:
        return None
    return get_user_by_email(payload.sub, db)


def get_current_user(access_token: Optional[str] = Cookie(None), db: Session = Depends(get_db)) -> CurrentUser:
    if not access_token:
        raise ServiceResultError(ServiceResult.fail(ErrorKind.UNAUTHENTICATED, "Missing token"))
    user = _user_from_token(access_token, db)
    if user is None:
        raise ServiceResultError(ServiceResult.fail(ErrorKind.UNAUTHENTICATED, "Invalid token"))
    return CurrentUser(
        id=int(user.id),
        email=user.email,
        name=display_name(user.email, user.preferences),
        preferences=user.preferences,
    )


def set_auth_cookie(response: Response, user: User) -> None:
    expires = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(AuthTokenPayload(sub=user.email, exp=datetime.now(timezone.utc) + expires))
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        secure=False,
        samesite="lax",
        max_age=int(expires.total_seconds()),
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key="access_token",
        httponly=True,
        secure=False,
        samesite="lax"
    )


def get_user_from_websocket(websocket: WebSocket, db: Session) -> Optional[User]:
    """Resolve the user from a WebSocket handshake (cookie or ?token=). None if unauthenticated."""
    return _user_from_token(_token_from_ws_scope(websocket.scope), db)


def get_user_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(email: str, password: str, db: Session) -> User:
    user = User(email=email.strip().lower(), hashed_password=get_password_hash(password), preferences={})
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("created user id=%s", user.id)
    return user


def authenticate_user(email: str, password: str, db: Session) -> Optional[User]:
    user = get_user_by_email(email, db)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
