from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from timeclock.config import settings
from timeclock.database import get_db
from timeclock.models.user import User
from timeclock.services.auth_service import AuthContext, lookup_user, resolve_session
from timeclock.utils.clock import Clock, get_clock
from timeclock.utils.errors import Unauthenticated

security = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_auth_context(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> AuthContext:
    return resolve_session(db, token, clock.utcnow())


def get_current_user(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> User:
    user = lookup_user(db, auth.user_id)
    if not user:
        raise Unauthenticated("사용자를 찾을 수 없거나 비활성 상태입니다.")
    return user
