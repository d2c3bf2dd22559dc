"""
Request Context 미들웨어
각 요청에 고유 ID를 부여하고 context에 저장
"""
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..utils.structured_logging import clear_context, set_request_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request Context 미들웨어
    - 각 요청에 고유한 request_id 생성 (X-Request-ID 헤더가 있으면 재사용)
    - request.state 와 로깅 context 에 저장
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        set_request_id(request_id)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()
