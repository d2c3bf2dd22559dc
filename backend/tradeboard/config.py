import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, model_validator

from .utils.exceptions import InvalidParameterError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AnalyticsConfig:
    """거래 분석 엔진 설정"""

    # 일별 손익 집계 기준 타임존 (빈 값이면 프로세스 로컬 타임존)
    TIMEZONE = os.getenv("ANALYTICS_TIMEZONE", "")

    # 자산 곡선 라벨
    START_LABEL = "Start"
    TRADE_LABEL = "Trade {index}"

    # 요청당 최대 거래 수
    MAX_TRADES_PER_REQUEST = int(os.getenv("ANALYTICS_MAX_TRADES", "10000"))

    # RSI 기준값
    RSI_OVERBOUGHT = 70.0
    RSI_OVERSOLD = 30.0


class CorsConfig:
    """CORS 설정"""

    IS_DEVELOPMENT = os.getenv("ENVIRONMENT", "development") == "development"

    DEV_ORIGINS = [
        "http://localhost:3000",  # React 개발 서버
        "http://localhost:5173",  # Vite default
        "http://localhost:8080",  # 대시보드 정적 빌드
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8080",
    ]


class Settings(BaseModel):
    app_name: str = "Trading Bot Dashboard Analytics"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    # CORS 설정: 쉼표로 구분된 허용 도메인 목록 (예: "https://example.com,https://app.example.com")
    cors_origins: str = os.getenv("CORS_ORIGINS", "")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"
    # 로그 파일 경로 (빈 값이면 콘솔만)
    log_file: str = os.getenv("LOG_FILE", "")

    @model_validator(mode="after")
    def validate_log_level(self) -> "Settings":
        """로그 레벨 검증"""
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)} (got {self.log_level!r})"
            )
        return self


def resolve_timezone(name: Optional[str]) -> Optional[ZoneInfo]:
    """
    타임존 이름을 tzinfo로 변환

    빈 값이면 None (프로세스 로컬 타임존 사용).
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidParameterError("tz", f"Unknown time zone: {name}") from e


settings = Settings()
