"""(사용자, 근무일, 구간) 자연키 기반 출퇴근 기록 모델 정의입니다."""

from sqlalchemy import Column, Integer, Date, DateTime, String, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from timeclock.database import Base


class AttendanceRecord(Base):
    __tablename__ = "attendance"

    record_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    work_date = Column(Date, nullable=False)
    period = Column(String(50), nullable=False, default="period1")
    # 타각 시각은 모두 UTC+8 로컬 벽시계 기준(naive)으로 저장한다.
    check_in_time = Column(DateTime, nullable=True)
    check_out_time = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="attendance_records")

    __table_args__ = (
        UniqueConstraint("user_id", "work_date", "period", name="uq_attendance_user_date_period"),
        Index("idx_attendance_user_date", "user_id", "work_date"),
    )
