"""
타임스탬프 파싱 및 날짜 변환 유틸리티

거래 서비스가 내려주는 ISO-8601 문자열을 datetime으로 변환하고,
주입된 타임존 기준으로 정렬 키와 달력 날짜를 계산합니다.
"""
from datetime import date, datetime, tzinfo
from typing import Any, Optional

from .exceptions import MalformedTimestampError


def parse_timestamp(
    value: Any, field: str = "timestamp", trade_id: Optional[str] = None
) -> datetime:
    """
    ISO-8601 타임스탬프 파싱

    끝의 "Z"는 UTC로 처리합니다. 빈 문자열이나 문자열이 아닌 값은
    MalformedTimestampError를 발생시킵니다.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise MalformedTimestampError(value, field=field, trade_id=trade_id)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise MalformedTimestampError(value, field=field, trade_id=trade_id) from e


def localize(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    datetime을 기준 타임존의 벽시계 시간으로 변환

    - naive 값은 이미 기준 타임존의 시간으로 간주
    - tz가 None이면 프로세스 로컬 타임존 사용
    """
    if dt.tzinfo is None:
        if tz is None:
            return dt
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def sort_key(dt: datetime, tz: Optional[tzinfo] = None) -> float:
    """naive/aware 값을 섞어도 비교 가능한 epoch 초"""
    return localize(dt, tz).timestamp()


def day_key(dt: datetime, tz: Optional[tzinfo] = None) -> date:
    """기준 타임존의 달력 날짜"""
    return localize(dt, tz).date()
