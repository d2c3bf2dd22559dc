"""
전역 에러 핸들러

분석 API의 모든 실패를 같은 봉투 형식으로 반환합니다.

    {
        "success": false,
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Too many trades in one request",
            "details": {"field": "trades", "limit": 10000, "current": 12000},
            "timestamp": "2024-03-01T10:00:00+00:00",
            "request_id": "abc123"
        }
    }

- AppException: 예외가 가진 error_code / details 그대로 (거래 수 제한, 타임존 등)
- 요청 본문 검증 실패: 422, 어느 거래(trade_index)의 어느 필드인지 포함
- 라우팅 실패 (404 / 405): NOT_FOUND / METHOD_NOT_ALLOWED
- 그 외: 500, 상세 정보는 로그에만
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..utils.exceptions import AppException
from ..utils.structured_logging import get_logger

logger = logging.getLogger(__name__)
structured_logger = get_logger(__name__)

HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    request: Request,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": error_code,
                "message": message,
                "details": details or {},
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "request_id": getattr(request.state, "request_id", None),
            },
        },
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    AppException 핸들러

    details (limit/current, field/reason, trade_id 등)를 로그 필드로 펼쳐서 기록합니다.
    """
    structured_logger.warning(
        "request_rejected",
        exc.message,
        error_code=exc.error_code,
        status_code=exc.status_code,
        path=request.url.path,
        **exc.details,
    )
    return error_response(exc.status_code, exc.error_code, exc.message, request, exc.details)


def _describe_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """pydantic 에러 목록 -> 응답용 dict (trades 배열 안이면 trade_index 포함)"""
    described = []
    for error in exc.errors():
        loc = list(error["loc"])
        item: Dict[str, Any] = {
            "field": " -> ".join(str(part) for part in loc),
            "message": error["msg"],
            "type": error["type"],
        }
        # ("body", "trades", 3, "trade_status")
        if len(loc) >= 3 and loc[1] == "trades" and isinstance(loc[2], int):
            item["trade_index"] = loc[2]
        described.append(item)
    return described


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 본문 검증 실패 (예: 알 수 없는 trade_status, 범위 밖 rsi)"""
    errors = _describe_errors(exc)
    trade_indexes = sorted({e["trade_index"] for e in errors if "trade_index" in e})

    structured_logger.warning(
        "request_validation_failed",
        f"{len(errors)} invalid field(s)",
        path=request.url.path,
        error_count=len(errors),
        trade_indexes=trade_indexes,
    )
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Validation failed",
        request,
        {"errors": errors},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    error_code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    logger.info(f"{error_code}: {request.method} {request.url.path}")
    return error_response(exc.status_code, error_code, str(exc.detail), request)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외 - 응답에는 상세 정보를 넣지 않음"""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    structured_logger.error(
        "unhandled_exception",
        str(exc),
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "Internal server error",
        request,
    )


def register_exception_handlers(app):
    """FastAPI 앱에 예외 핸들러 등록"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
