"""근태 계산에 쓰이는 시간 소스 추상화입니다. 테스트에서는 FixedClock으로 현재 시각을 고정합니다."""

from datetime import date, datetime, timedelta, timezone

from timeclock.config import settings

LOCAL_TZ = timezone(timedelta(hours=settings.LOCAL_UTC_OFFSET_HOURS))
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Clock:
    def now(self) -> datetime:
        raise NotImplementedError

    def utcnow(self) -> datetime:
        """세션 만료 비교용 naive UTC 시각."""
        return self.now().astimezone(timezone.utc).replace(tzinfo=None)

    def local_now(self) -> datetime:
        """UTC+8 로컬 벽시계 기준 naive 시각 (초 단위 절사)."""
        return self.now().astimezone(LOCAL_TZ).replace(tzinfo=None, microsecond=0)

    def local_today(self) -> date:
        return self.local_now().date()


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    def __init__(self, moment: datetime):
        self.set(moment)

    def set(self, moment: datetime) -> None:
        # naive 입력은 로컬 벽시계 시각으로 간주한다.
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=LOCAL_TZ)
        self._moment = moment

    def advance(self, **kwargs) -> None:
        self._moment = self._moment + timedelta(**kwargs)

    def now(self) -> datetime:
        return self._moment


_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(TIMESTAMP_FORMAT)
