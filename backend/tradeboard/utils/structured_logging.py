"""
구조화된 로깅 시스템
JSON 형식으로 로그를 출력하여 분석 및 모니터링을 용이하게 함
"""
import json
import logging
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, Optional

# Request context를 저장하기 위한 ContextVar
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

# LogRecord 기본 속성 (extra 필드와 구분하기 위함)
_RESERVED_RECORD_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    ]
)


class StructuredLogger:
    """JSON 형식의 구조화된 로그를 제공하는 로거"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.name = name

    def _build_log_data(
        self,
        level: str,
        event: str,
        message: str = "",
        request_id: Optional[str] = None,
        **extra_fields
    ) -> Dict[str, Any]:
        """로그 데이터 구성"""
        log_data = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": level,
            "logger": self.name,
            "event": event,
        }

        if message:
            log_data["message"] = message

        # Request ID 추가 (파라미터 우선, 없으면 context에서)
        final_request_id = request_id or request_id_var.get()
        if final_request_id:
            log_data["request_id"] = final_request_id

        if extra_fields:
            log_data.update(extra_fields)

        return log_data

    def log_event(
        self,
        level: str,
        event: str,
        message: str = "",
        request_id: Optional[str] = None,
        **extra_fields
    ):
        """
        구조화된 이벤트 로깅

        Args:
            level: 로그 레벨 (INFO, WARNING, ERROR, DEBUG)
            event: 이벤트 이름 (예: "analytics_computed", "malformed_timestamp")
            message: 로그 메시지
            request_id: 요청 ID (optional)
            **extra_fields: 추가 필드들

        Example:
            logger.log_event(
                "WARNING",
                "malformed_timestamp",
                "Trade excluded from equity curve",
                trade_id="t-1",
                field="timestamp",
            )
        """
        log_data = self._build_log_data(level, event, message, request_id, **extra_fields)

        # JSON으로 직렬화 (datetime 등은 문자열로)
        log_message = json.dumps(log_data, ensure_ascii=False, default=str)

        log_method = getattr(self.logger, level.lower(), self.logger.info)
        log_method(log_message)

    def info(self, event: str, message: str = "", **kwargs):
        """INFO 레벨 로그"""
        self.log_event("INFO", event, message, **kwargs)

    def warning(self, event: str, message: str = "", **kwargs):
        """WARNING 레벨 로그"""
        self.log_event("WARNING", event, message, **kwargs)

    def error(self, event: str, message: str = "", **kwargs):
        """ERROR 레벨 로그"""
        self.log_event("ERROR", event, message, **kwargs)

    def debug(self, event: str, message: str = "", **kwargs):
        """DEBUG 레벨 로그"""
        self.log_event("DEBUG", event, message, **kwargs)


class JSONFormatter(logging.Formatter):
    """
    JSON 형식으로 로그를 포맷팅하는 Formatter
    기존 logging 모듈과 통합 가능
    """

    def format(self, record: logging.LogRecord) -> str:
        """로그 레코드를 JSON 형식으로 변환"""
        # 이미 JSON 형식인 경우 (StructuredLogger 사용)
        try:
            json.loads(record.getMessage())
            return record.getMessage()
        except (json.JSONDecodeError, ValueError):
            pass

        log_data = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # 추가 필드들 (record.extra에서)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, ensure_ascii=False, default=str)


# Context 관리 함수들
def set_request_id(request_id: str):
    """Request ID 설정"""
    request_id_var.set(request_id)


def clear_context():
    """Context 초기화"""
    request_id_var.set(None)


def get_logger(name: str) -> StructuredLogger:
    """구조화된 로거 생성"""
    return StructuredLogger(name)
