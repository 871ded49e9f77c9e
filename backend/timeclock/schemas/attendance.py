"""출퇴근 타각/보정/집계 요청·응답 스키마입니다."""

import re
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class PunchRequest(BaseModel):
    period: Optional[str] = None


class PunchResult(BaseModel):
    message: str
    created: bool
    overnight: bool = False
    work_date: date
    period: str


class PeriodTimes(BaseModel):
    check_in: Optional[str] = None
    check_out: Optional[str] = None

    @field_validator("check_in", "check_out")
    @classmethod
    def validate_hhmm(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        if not HHMM_PATTERN.match(value):
            raise ValueError("시간은 HH:MM 형식이어야 합니다.")
        return value


class ManualPunchRequest(BaseModel):
    employee_id: int = Field(gt=0)
    work_date: date = Field(alias="date")
    periods: Dict[str, PeriodTimes] = Field(min_length=1)

    model_config = {"populate_by_name": True}


class ManualPunchResult(BaseModel):
    message: str
    created: List[str] = []
    updated: List[str] = []
    skipped: List[str] = []


class RenamePeriodRequest(BaseModel):
    oldPeriod: str = Field(min_length=1, max_length=50)
    newPeriod: str = Field(min_length=1, max_length=50)


class RenamePeriodResult(BaseModel):
    success: bool = True
    message: str
    changes: int


class MonthlyAttendanceOut(BaseModel):
    # 각 항목은 {"day": 1, "<period>_check_in_time": ..., "<period>_check_out_time": ...} 형태
    records: List[dict]
