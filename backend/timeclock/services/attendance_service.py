"""Attendance Service 도메인 서비스 레이어입니다. 타각 이벤트를 정확히 하나의 기록 쓰기로 변환합니다."""

import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from timeclock.config import settings
from timeclock.schemas.attendance import PeriodTimes
from timeclock.services import attendance_ledger
from timeclock.services.auth_service import AuthContext, lookup_user, require_admin
from timeclock.utils.errors import InvalidInput, NotFound, StoreFailure

logger = logging.getLogger(__name__)


def normalize_period(period: Optional[str]) -> str:
    text = str(period or "").strip()
    return text or settings.DEFAULT_PERIOD


def _is_overnight_window(now: datetime) -> bool:
    return 0 <= now.hour < settings.OVERNIGHT_CUTOFF_HOUR


def _has_open_shift(db: Session, user_id: int, work_date: date, period: str) -> bool:
    record = attendance_ledger.find_by_key(db, user_id, work_date, period)
    return record is not None and record.check_in_time is not None and record.check_out_time is None


def resolve_checkout_date(db: Session, user_id: int, period: str, now: datetime) -> tuple[date, bool]:
    """퇴근 타각이 기록될 근무일과 전날 이월 여부를 결정한다.

    로컬 0시~5시 사이이고 전날 같은 구간에 출근만 찍힌 기록이 있으면 전날로 보낸다.
    하루 전까지만 확인한다.
    """
    today = now.date()
    if _is_overnight_window(now):
        yesterday = today - timedelta(days=1)
        if _has_open_shift(db, user_id, yesterday, period):
            return yesterday, True
    return today, False


def check_in(db: Session, auth: AuthContext, period: Optional[str], now: datetime) -> dict:
    period = normalize_period(period)
    work_date = now.date()
    created = attendance_ledger.upsert(
        db, auth.user_id, work_date, period, {"check_in_time": now}, now
    )
    logger.info(
        "[attendance] check-in user_id=%s date=%s period=%s created=%s",
        auth.user_id, work_date, period, created,
    )
    return {
        "message": "출근 타각이 완료되었습니다." if created else "출근 타각이 갱신되었습니다.",
        "created": created,
        "overnight": False,
        "work_date": work_date,
        "period": period,
    }


def check_out(db: Session, auth: AuthContext, period: Optional[str], now: datetime) -> dict:
    period = normalize_period(period)
    work_date, overnight = resolve_checkout_date(db, auth.user_id, period, now)
    created = attendance_ledger.upsert(
        db, auth.user_id, work_date, period, {"check_out_time": now}, now
    )
    logger.info(
        "[attendance] check-out user_id=%s date=%s period=%s created=%s overnight=%s",
        auth.user_id, work_date, period, created, overnight,
    )
    if overnight:
        message = "전날 근무의 퇴근 타각이 완료되었습니다."
    elif created:
        message = "퇴근 타각이 완료되었습니다."
    else:
        message = "퇴근 타각이 갱신되었습니다."
    return {
        "message": message,
        "created": created,
        "overnight": overnight,
        "work_date": work_date,
        "period": period,
    }


def _combine(work_date: date, hhmm: str) -> datetime:
    hour, minute = (int(part) for part in hhmm.split(":"))
    return datetime.combine(work_date, time(hour=hour, minute=minute))


def manual_punch(
    db: Session,
    auth: AuthContext,
    employee_id: int,
    work_date: date,
    periods: Dict[str, PeriodTimes],
    now: datetime,
) -> dict:
    require_admin(auth)
    if not periods:
        raise InvalidInput("보정할 구간이 없습니다.")
    if lookup_user(db, employee_id) is None:
        raise NotFound("대상 직원을 찾을 수 없습니다.")

    result = {"created": [], "updated": [], "skipped": []}
    for raw_period, times in periods.items():
        period = normalize_period(raw_period)
        values = {}
        if times.check_in:
            values["check_in_time"] = _combine(work_date, times.check_in)
        if times.check_out:
            values["check_out_time"] = _combine(work_date, times.check_out)
        if not values:
            result["skipped"].append(period)
            continue

        # 구간별로 독립 커밋한다. 실패 시 앞선 구간은 유지하고 이후 구간은 처리하지 않는다.
        try:
            created = attendance_ledger.upsert(db, employee_id, work_date, period, values, now)
        except SQLAlchemyError as exc:
            done = result["created"] + result["updated"]
            logger.error(
                "[attendance] manual punch failed user_id=%s date=%s period=%s completed=%s: %s",
                employee_id, work_date, period, done, exc,
            )
            raise StoreFailure(
                f"'{period}' 구간 저장 중 오류가 발생했습니다. 완료된 구간: {', '.join(done) or '없음'}"
            )
        result["created" if created else "updated"].append(period)

    logger.info(
        "[attendance] manual punch by admin_id=%s for user_id=%s date=%s %s",
        auth.user_id, employee_id, work_date, result,
    )
    return {"message": "보정 타각이 저장되었습니다.", **result}


def rename_period(db: Session, auth: AuthContext, old_period: str, new_period: str) -> dict:
    old_period = str(old_period or "").strip()
    new_period = str(new_period or "").strip()
    if not old_period or not new_period:
        raise InvalidInput("oldPeriod와 newPeriod가 필요합니다.")

    try:
        changes = attendance_ledger.rename_period(db, auth.user_id, old_period, new_period)
    except SQLAlchemyError as exc:
        logger.error(
            "[attendance] rename period failed user_id=%s %s->%s: %s",
            auth.user_id, old_period, new_period, exc,
        )
        raise StoreFailure("구간 이름 변경에 실패했습니다. 같은 날짜에 동일한 구간 이름이 이미 있는지 확인하세요.")

    logger.info(
        "[attendance] renamed period user_id=%s %s->%s changes=%s",
        auth.user_id, old_period, new_period, changes,
    )
    return {
        "success": True,
        "message": f"{changes}건의 기록에서 구간 이름을 변경했습니다.",
        "changes": changes,
    }
