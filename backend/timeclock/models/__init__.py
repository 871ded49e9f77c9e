"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from timeclock.models.user import User
from timeclock.models.session import LoginSession
from timeclock.models.attendance import AttendanceRecord

__all__ = [
    "User",
    "LoginSession",
    "AttendanceRecord",
]
