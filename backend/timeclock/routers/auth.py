"""Auth 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from timeclock.config import settings
from timeclock.database import get_db
from timeclock.middleware.auth_middleware import get_current_user, get_session_token
from timeclock.models.user import User
from timeclock.schemas.user import LoginRequest, LoginResponse, UserOut
from timeclock.services import auth_service
from timeclock.utils.clock import Clock, get_clock

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    login_session, user = auth_service.login(db, request.username, request.password, clock.utcnow())
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        login_session.session_id,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )
    return LoginResponse(
        access_token=login_session.session_id,
        expires_at=login_session.expires_at,
        user=UserOut.model_validate(user),
    )


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    auth_service.logout(db, token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, httponly=True, samesite="lax")
    return {"ok": True, "message": "로그아웃 되었습니다."}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
