"""출퇴근 기록을 일/구간 단위 조회 형태로 집계하는 서비스입니다."""

from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from timeclock.config import settings
from timeclock.models.attendance import AttendanceRecord
from timeclock.services import attendance_ledger
from timeclock.services.auth_service import AuthContext, require_self_or_admin
from timeclock.utils.clock import format_timestamp
from timeclock.utils.errors import InvalidInput


def _period_fields(record: AttendanceRecord) -> Dict[str, Optional[str]]:
    period = record.period or settings.DEFAULT_PERIOD
    return {
        f"{period}_check_in_time": format_timestamp(record.check_in_time),
        f"{period}_check_out_time": format_timestamp(record.check_out_time),
    }


def month_range(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise InvalidInput("month는 1~12 사이여야 합니다.")
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def get_today(db: Session, auth: AuthContext, target_user_id: int, today: date) -> dict:
    require_self_or_admin(auth, target_user_id)
    result: dict = {}
    for record in attendance_ledger.list_for_date(db, target_user_id, today):
        result.update(_period_fields(record))
    return result


def get_month(db: Session, auth: AuthContext, target_user_id: int, year: int, month: int) -> dict:
    require_self_or_admin(auth, target_user_id)
    start, end = month_range(year, month)

    # 기록이 없는 날은 만들지 않는다. 날짜 순서를 유지한다.
    days: Dict[int, dict] = {}
    for record in attendance_ledger.range_query(db, target_user_id, start, end):
        entry = days.setdefault(record.work_date.day, {"day": record.work_date.day})
        entry.update(_period_fields(record))

    records: List[dict] = list(days.values())
    return {"records": records}
