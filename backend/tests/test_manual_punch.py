"""관리자 보정 타각(manual punch) 권한/부분 입력/부분 실패 정책 테스트입니다."""

import pytest
from datetime import date, datetime
from sqlalchemy.exc import OperationalError

from timeclock.models.attendance import AttendanceRecord
from timeclock.schemas.attendance import PeriodTimes
from timeclock.services import attendance_ledger, attendance_service
from timeclock.utils.errors import Forbidden, NotFound, StoreFailure
from tests.conftest import auth_headers, context_for


def _record(db, user_id, work_date, period):
    db.expire_all()
    return db.query(AttendanceRecord).filter(
        AttendanceRecord.user_id == user_id,
        AttendanceRecord.work_date == work_date,
        AttendanceRecord.period == period,
    ).first()


def test_manual_punch_creates_periods(client, db, seed_users, clock):
    alice_id = seed_users["alice"].user_id
    resp = client.post(
        "/api/attendance/manual-punch",
        json={
            "employee_id": alice_id,
            "date": "2024-02-27",
            "periods": {
                "period1": {"check_in": "09:00", "check_out": "12:00"},
                "period2": {"check_in": "13:00"},
            },
        },
        headers=auth_headers(client, "admin"),
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["created"] == ["period1", "period2"]

    period1 = _record(db, alice_id, date(2024, 2, 27), "period1")
    assert period1.check_in_time == datetime(2024, 2, 27, 9, 0)
    assert period1.check_out_time == datetime(2024, 2, 27, 12, 0)
    period2 = _record(db, alice_id, date(2024, 2, 27), "period2")
    assert period2.check_in_time == datetime(2024, 2, 27, 13, 0)
    assert period2.check_out_time is None
    # 갱신 시각은 요청 시점 기준이다.
    assert period2.updated_at == datetime(2024, 3, 1, 9, 0)


def test_manual_punch_keeps_values_not_supplied(client, db, seed_users, clock):
    alice_id = seed_users["alice"].user_id
    headers = auth_headers(client, "admin")
    client.post(
        "/api/attendance/manual-punch",
        json={"employee_id": alice_id, "date": "2024-02-27",
              "periods": {"period1": {"check_in": "09:00", "check_out": "18:00"}}},
        headers=headers,
    )

    resp = client.post(
        "/api/attendance/manual-punch",
        json={"employee_id": alice_id, "date": "2024-02-27",
              "periods": {"period1": {"check_out": "19:30"}, "period2": {}}},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["updated"] == ["period1"]
    assert resp.json()["skipped"] == ["period2"]

    record = _record(db, alice_id, date(2024, 2, 27), "period1")
    assert record.check_in_time == datetime(2024, 2, 27, 9, 0)
    assert record.check_out_time == datetime(2024, 2, 27, 19, 30)
    assert _record(db, alice_id, date(2024, 2, 27), "period2") is None


def test_manual_punch_admin_only(client, db, seed_users, clock):
    resp = client.post(
        "/api/attendance/manual-punch",
        json={"employee_id": seed_users["bob"].user_id, "date": "2024-02-27",
              "periods": {"period1": {"check_in": "09:00"}}},
        headers=auth_headers(client, "alice"),
    )
    assert resp.status_code == 403
    assert db.query(AttendanceRecord).count() == 0


def test_manual_punch_unknown_employee(client, seed_users, clock):
    resp = client.post(
        "/api/attendance/manual-punch",
        json={"employee_id": 9999, "date": "2024-02-27", "periods": {"period1": {"check_in": "09:00"}}},
        headers=auth_headers(client, "admin"),
    )
    assert resp.status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"date": "2024-02-27", "periods": {"period1": {"check_in": "09:00"}}},
        {"employee_id": 1, "periods": {"period1": {"check_in": "09:00"}}},
        {"employee_id": 1, "date": "2024-02-27"},
        {"employee_id": 1, "date": "2024-02-27", "periods": {}},
        {"employee_id": 1, "date": "2024-02-27", "periods": {"period1": {"check_in": "9am"}}},
        {"employee_id": 1, "date": "2024-02-27", "periods": {"period1": {"check_out": "24:00"}}},
    ],
)
def test_manual_punch_invalid_input(client, seed_users, clock, payload):
    resp = client.post("/api/attendance/manual-punch", json=payload, headers=auth_headers(client, "admin"))
    assert resp.status_code == 400


def test_manual_punch_stops_on_store_failure_and_keeps_prior(db, seed_users, monkeypatch):
    admin = context_for(seed_users["admin"])
    alice_id = seed_users["alice"].user_id
    original_upsert = attendance_ledger.upsert

    def flaky_upsert(db_, user_id, work_date, period, values, now):
        if period == "period2":
            raise OperationalError("UPDATE attendance", {}, Exception("database is locked"))
        return original_upsert(db_, user_id, work_date, period, values, now)

    monkeypatch.setattr(attendance_ledger, "upsert", flaky_upsert)

    periods = {
        "period1": PeriodTimes(check_in="09:00"),
        "period2": PeriodTimes(check_in="13:00"),
        "period3": PeriodTimes(check_in="19:00"),
    }
    with pytest.raises(StoreFailure) as exc_info:
        attendance_service.manual_punch(
            db, admin, alice_id, date(2024, 2, 27), periods, datetime(2024, 3, 1, 9, 0)
        )
    assert "period1" in exc_info.value.detail

    assert _record(db, alice_id, date(2024, 2, 27), "period1") is not None
    assert _record(db, alice_id, date(2024, 2, 27), "period2") is None
    assert _record(db, alice_id, date(2024, 2, 27), "period3") is None


def test_manual_punch_service_requires_admin(db, seed_users):
    alice = context_for(seed_users["alice"])
    with pytest.raises(Forbidden):
        attendance_service.manual_punch(
            db, alice, alice.user_id, date(2024, 2, 27),
            {"period1": PeriodTimes(check_in="09:00")}, datetime(2024, 3, 1, 9, 0),
        )


def test_manual_punch_service_unknown_employee(db, seed_users):
    admin = context_for(seed_users["admin"])
    with pytest.raises(NotFound):
        attendance_service.manual_punch(
            db, admin, 12345, date(2024, 2, 27),
            {"period1": PeriodTimes(check_in="09:00")}, datetime(2024, 3, 1, 9, 0),
        )
