"""서비스 레이어 패키지 초기화 모듈입니다."""

from timeclock.services import (
    auth_service,
    attendance_ledger,
    attendance_service,
    report_service,
)
