"""Auth Service 도메인 서비스 레이어입니다. 세션 저장소/사용자 디렉터리 조회와 권한 검사를 캡슐화합니다."""

import hmac
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from timeclock.config import settings
from timeclock.models.session import LoginSession
from timeclock.models.user import User
from timeclock.utils.errors import Forbidden, SessionExpired, Unauthenticated
from timeclock.utils.permissions import is_admin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    user_id: int
    role: str
    username: str
    token: str

    @property
    def is_admin(self) -> bool:
        return is_admin(self.role)


def lookup_session(db: Session, token: str) -> Optional[LoginSession]:
    return db.query(LoginSession).filter(LoginSession.session_id == token).first()


def lookup_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.user_id == user_id, User.is_active == True).first()  # noqa: E712


def login(db: Session, username: str, password: str, now: datetime) -> tuple[LoginSession, User]:
    user = db.query(User).filter(User.username == username, User.is_active == True).first()  # noqa: E712
    # 비밀번호 해시는 외부 관심사이므로 저장된 자격 증명과 그대로 비교한다.
    if not user or not hmac.compare_digest(str(user.password).encode(), password.encode()):
        logger.warning("[auth] login rejected for username=%s", username)
        raise Unauthenticated("아이디 또는 비밀번호가 올바르지 않습니다.")

    login_session = LoginSession(
        session_id=str(uuid.uuid4()),
        user_id=user.user_id,
        expires_at=now + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES),
    )
    db.add(login_session)
    db.commit()
    db.refresh(login_session)
    logger.info("[auth] session created for user_id=%s", user.user_id)
    return login_session, user


def logout(db: Session, token: Optional[str]) -> bool:
    if not token:
        return False
    deleted = db.query(LoginSession).filter(LoginSession.session_id == token).delete()
    db.commit()
    return deleted > 0


def resolve_session(db: Session, token: Optional[str], now: datetime) -> AuthContext:
    """세션 토큰을 (user_id, role) 주체로 해석한다. DB에는 쓰지 않는다."""
    if not token:
        raise Unauthenticated()

    login_session = lookup_session(db, token)
    if login_session is None:
        logger.warning("[auth] unknown session token")
        raise Unauthenticated()
    if now >= login_session.expires_at:
        raise SessionExpired()

    user = lookup_user(db, login_session.user_id)
    if user is None:
        logger.warning("[auth] session refers to missing user_id=%s", login_session.user_id)
        raise Unauthenticated("사용자를 찾을 수 없거나 비활성 상태입니다.")

    return AuthContext(user_id=user.user_id, role=user.role, username=user.username, token=token)


def require_admin(auth: AuthContext) -> AuthContext:
    if not auth.is_admin:
        logger.warning("[auth] admin required, user_id=%s role=%s", auth.user_id, auth.role)
        raise Forbidden("관리자만 접근할 수 있습니다.")
    return auth


def require_self_or_admin(auth: AuthContext, target_user_id: int) -> AuthContext:
    if auth.user_id != target_user_id and not auth.is_admin:
        logger.warning(
            "[auth] user_id=%s denied access to user_id=%s records", auth.user_id, target_user_id
        )
        raise Forbidden("본인 기록만 조회할 수 있습니다.")
    return auth
