"""
Health Check 엔드포인트

시스템 상태 모니터링 및 헬스 체크를 위한 API
"""
import time
from datetime import datetime

from fastapi import APIRouter

from .. import __version__
from ..config import AnalyticsConfig, settings

router = APIRouter(prefix="/health", tags=["health"])

# 서버 시작 시간
SERVER_START_TIME = time.time()


@router.get("")
async def health_check():
    """
    기본 헬스 체크

    로드 밸런서, 모니터링 도구에서 사용됩니다.

    Returns:
        - status: "healthy"
        - timestamp: 현재 시간
        - uptime: 서버 가동 시간 (초)
        - version: API 버전
    """
    uptime_seconds = int(time.time() - SERVER_START_TIME)

    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "uptime_seconds": uptime_seconds,
        "uptime_human": format_uptime(uptime_seconds),
        "version": __version__,
        "environment": "production" if not settings.debug else "development",
        "analytics_timezone": AnalyticsConfig.TIMEZONE or "local",
    }


def format_uptime(seconds: int) -> str:
    """가동 시간을 사람이 읽기 쉬운 형태로 변환"""
    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")

    return " ".join(parts)
