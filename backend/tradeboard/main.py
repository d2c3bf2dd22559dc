import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import analytics, health
from .config import CorsConfig, Settings, settings as default_settings
from .middleware.error_handler import register_exception_handlers
from .middleware.request_context import RequestContextMiddleware
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or default_settings

    setup_logging(
        log_level=settings.log_level,
        log_file=Path(settings.log_file) if settings.log_file else None,
        detailed=settings.debug,
        enable_json=settings.log_json,
    )

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## 트레이딩 봇 대시보드 분석 API

        ### 주요 기능
        - 📈 **자산 곡선**: 청산 거래 복리 재생으로 잔고 재구성
        - 📊 **심볼별 성과**: 승/패 수, 승률, 실현 수익률 합계
        - 📅 **일별 손익**: 청산 시각 기준 일별 집계
        - 🥧 **승/패 분포**
        - 🤖 **포트폴리오 요약**, 기술적 지표 상태 분류

        거래 데이터는 요청 본문으로 전달되며 서버에 저장되지 않습니다.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "health", "description": "시스템 상태 확인 및 헬스 체크"},
            {"name": "analytics", "description": "거래 성과 분석 (자산 곡선, 일별 손익 등)"},
        ],
    )

    # ============================================================
    # CORS 설정
    # 개발 환경: localhost 허용
    # 프로덕션 환경: CORS_ORIGINS 환경변수로만 허용 도메인 설정
    # ============================================================
    if CorsConfig.IS_DEVELOPMENT:
        allowed_origins = list(CorsConfig.DEV_ORIGINS)
        logger.info("🔧 CORS: Development mode - localhost origins allowed")
    else:
        allowed_origins = []
        logger.info("🔒 CORS: Production mode - only CORS_ORIGINS env var allowed")

    if settings.cors_origins:
        additional_origins = [
            origin.strip()
            for origin in settings.cors_origins.split(",")
            if origin.strip()
        ]
        allowed_origins.extend(additional_origins)
        logger.info(f"🔒 CORS: Added {len(additional_origins)} origins from CORS_ORIGINS env")

    if not CorsConfig.IS_DEVELOPMENT and not allowed_origins:
        logger.warning(
            "⚠️ CORS: No origins configured in production! "
            "Set CORS_ORIGINS environment variable (comma-separated domains)"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Request Context Middleware (request_id 생성)
    app.add_middleware(RequestContextMiddleware)

    # 전역 에러 핸들러 등록
    register_exception_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(analytics.router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tradeboard.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
    )
