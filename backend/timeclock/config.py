"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./timeclock.db"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # Session
    SESSION_EXPIRE_MINUTES: int = 60
    SESSION_COOKIE_NAME: str = "session_id"

    # 근태 기준 시간대는 고정 오프셋(UTC+8)을 사용한다.
    LOCAL_UTC_OFFSET_HOURS: int = 8
    # 이 시각(로컬) 이전의 퇴근 타각은 전날 미완료 기록으로 이월될 수 있다.
    OVERNIGHT_CUTOFF_HOUR: int = 5
    DEFAULT_PERIOD: str = "period1"

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
