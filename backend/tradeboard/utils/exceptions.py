"""
커스텀 예외 클래스

프로젝트 전체에서 사용할 표준화된 예외 클래스들.
각 예외는 HTTP 상태 코드와 명확한 에러 메시지를 포함합니다.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    애플리케이션 기본 예외 클래스

    모든 커스텀 예외의 부모 클래스입니다.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 검증 관련 예외 (4xx)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ValidationError(AppException):
    """입력 검증 실패 (400)"""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict] = None):
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=error_details,
        )


class InvalidParameterError(ValidationError):
    """잘못된 파라미터 (400)"""

    def __init__(self, parameter: str, reason: str):
        super().__init__(
            message=f"Invalid parameter: {parameter}",
            field=parameter,
            details={"reason": reason},
        )


class PayloadTooLargeError(ValidationError):
    """요청당 거래 수 제한 초과 (400)"""

    def __init__(self, resource: str, limit: int, current: int):
        super().__init__(
            message=f"Too many {resource} in one request",
            field=resource,
            details={"limit": limit, "current": current},
        )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 데이터 품질 관련 예외 (422)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class MalformedTimestampError(AppException):
    """
    파싱할 수 없는 타임스탬프 (422)

    분석 엔진은 이 예외를 레코드 단위로 잡아서 해당 거래만
    날짜 기반 뷰에서 제외합니다.
    """

    def __init__(self, value: Any, field: str = "timestamp", trade_id: Optional[str] = None):
        self.value = value
        self.field = field
        self.trade_id = trade_id

        details = {"field": field, "value": str(value)}
        if trade_id is not None:
            details["trade_id"] = trade_id

        super().__init__(
            message=f"Malformed timestamp in {field}: {value!r}",
            status_code=422,
            error_code="MALFORMED_TIMESTAMP",
            details=details,
        )
