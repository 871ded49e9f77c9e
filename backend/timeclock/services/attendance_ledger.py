"""출퇴근 기록 저장소 접근 계층입니다. (user_id, work_date, period) 자연키 기준 조회/업서트를 담당합니다."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session

from timeclock.models.attendance import AttendanceRecord

NATURAL_KEY = ("user_id", "work_date", "period")


def find_by_key(db: Session, user_id: int, work_date: date, period: str) -> Optional[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.user_id == user_id,
            AttendanceRecord.work_date == work_date,
            AttendanceRecord.period == period,
        )
        .first()
    )


def list_for_date(db: Session, user_id: int, work_date: date) -> List[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.user_id == user_id,
            AttendanceRecord.work_date == work_date,
        )
        .order_by(AttendanceRecord.period.asc())
        .all()
    )


def range_query(db: Session, user_id: int, start: date, end: date) -> List[AttendanceRecord]:
    """start <= work_date < end 범위의 기록을 날짜, 구간 순으로 반환한다."""
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.user_id == user_id,
            AttendanceRecord.work_date >= start,
            AttendanceRecord.work_date < end,
        )
        .order_by(AttendanceRecord.work_date.asc(), AttendanceRecord.period.asc())
        .all()
    )


def _conflict_upsert(dialect_name: str, row: Dict[str, Any], changes: Dict[str, Any]):
    table = AttendanceRecord.__table__
    if dialect_name in ("sqlite", "postgresql"):
        insert = sqlite.insert if dialect_name == "sqlite" else postgresql.insert
        return insert(table).values(**row).on_conflict_do_update(
            index_elements=list(NATURAL_KEY),
            set_=changes,
        )
    if dialect_name in ("mysql", "mariadb"):
        return mysql.insert(table).values(**row).on_duplicate_key_update(**changes)
    return None


def upsert(
    db: Session,
    user_id: int,
    work_date: date,
    period: str,
    values: Dict[str, Any],
    now: datetime,
) -> bool:
    """자연키 기준 insert-or-update. 전달된 컬럼만 기록하며 생성 여부를 반환한다.

    기존 행의 다른 컬럼은 건드리지 않는다. 한 번의 호출이 하나의 트랜잭션이다.
    """
    existing = find_by_key(db, user_id, work_date, period)
    changes = {**values, "updated_at": now}
    row = {
        "user_id": user_id,
        "work_date": work_date,
        "period": period,
        "created_at": now,
        **changes,
    }

    try:
        stmt = _conflict_upsert(db.get_bind().dialect.name, row, changes)
        if stmt is not None:
            db.execute(stmt)
        elif existing is not None:
            for column, value in changes.items():
                setattr(existing, column, value)
        else:
            db.add(AttendanceRecord(**row))
        db.commit()
    except Exception:
        db.rollback()
        raise

    return existing is None


def rename_period(db: Session, user_id: int, old_period: str, new_period: str) -> int:
    try:
        changed = (
            db.query(AttendanceRecord)
            .filter(
                AttendanceRecord.user_id == user_id,
                AttendanceRecord.period == old_period,
            )
            .update({AttendanceRecord.period: new_period}, synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    return changed
