"""Seed the database with test data."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date, datetime, time, timedelta
from timeclock.database import SessionLocal, engine, Base
import timeclock.models  # noqa: F401

from timeclock.models.user import User
from timeclock.models.attendance import AttendanceRecord
from timeclock.utils.clock import get_clock
from timeclock.utils.permissions import ADMIN, EMPLOYEE


def _previous_weekdays(today: date, count: int) -> list[date]:
    days = []
    cursor = today - timedelta(days=1)
    while len(days) < count:
        if cursor.weekday() < 5:
            days.append(cursor)
        cursor -= timedelta(days=1)
    return sorted(days)


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Users
        users = [
            User(username="admin", password="1234", name="관리자", role=ADMIN),
            User(username="emp001", password="1234", name="직원 김민수", role=EMPLOYEE),
            User(username="emp002", password="1234", name="직원 이서연", role=EMPLOYEE),
        ]
        db.add_all(users)
        db.flush()

        # 최근 평일 5일치 오전/오후 구간 기록
        now = get_clock().local_now()
        for work_date in _previous_weekdays(now.date(), 5):
            for employee in users[1:]:
                for period, start, end in (("period1", 9, 12), ("period2", 13, 18)):
                    db.add(AttendanceRecord(
                        user_id=employee.user_id,
                        work_date=work_date,
                        period=period,
                        check_in_time=datetime.combine(work_date, time(start)),
                        check_out_time=datetime.combine(work_date, time(end)),
                        created_at=now,
                        updated_at=now,
                    ))

        db.commit()
        print("Seed data inserted successfully.")
        print(f"  Users: {len(users)}")
        print()
        print("Test login credentials:")
        for u in users:
            print(f"  username={u.username}  password={u.password}  role={u.role}")

    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


if __name__ == "__main__":
    seed()
