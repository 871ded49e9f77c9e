"""출퇴근 타각/보정/집계 API 라우터입니다."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeclock.database import get_db
from timeclock.middleware.auth_middleware import get_auth_context
from timeclock.schemas.attendance import (
    ManualPunchRequest,
    ManualPunchResult,
    MonthlyAttendanceOut,
    PunchRequest,
    PunchResult,
    RenamePeriodRequest,
    RenamePeriodResult,
)
from timeclock.services import attendance_service, report_service
from timeclock.services.auth_service import AuthContext
from timeclock.utils.clock import Clock, get_clock

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


@router.post("/checkin", response_model=PunchResult)
def check_in(
    data: PunchRequest | None = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
    clock: Clock = Depends(get_clock),
):
    period = data.period if data else None
    return attendance_service.check_in(db, auth, period, clock.local_now())


@router.post("/checkout", response_model=PunchResult)
def check_out(
    data: PunchRequest | None = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
    clock: Clock = Depends(get_clock),
):
    period = data.period if data else None
    return attendance_service.check_out(db, auth, period, clock.local_now())


@router.get("/today")
def get_today(
    user_id: int | None = Query(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
    clock: Clock = Depends(get_clock),
):
    target_user_id = user_id or auth.user_id
    return report_service.get_today(db, auth, target_user_id, clock.local_today())


@router.get("/month", response_model=MonthlyAttendanceOut)
def get_month(
    year: int = Query(..., ge=1970, le=9999),
    month: int = Query(..., ge=1, le=12),
    user_id: int | None = Query(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    target_user_id = user_id or auth.user_id
    return report_service.get_month(db, auth, target_user_id, year, month)


@router.post("/manual-punch", response_model=ManualPunchResult)
def manual_punch(
    data: ManualPunchRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
    clock: Clock = Depends(get_clock),
):
    return attendance_service.manual_punch(
        db,
        auth,
        data.employee_id,
        data.work_date,
        data.periods,
        clock.local_now(),
    )


@router.post("/rename-period", response_model=RenamePeriodResult)
def rename_period(
    data: RenamePeriodRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
):
    return attendance_service.rename_period(db, auth, data.oldPeriod, data.newPeriod)
