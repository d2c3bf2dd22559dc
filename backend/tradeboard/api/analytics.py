"""
Analytics API endpoints

대시보드가 가져온 거래 기록 / 성과 스냅샷을 받아 차트용 파생 뷰를 반환합니다.
저장, 인증, 폴링은 하지 않습니다 (상태 없는 계산 API).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Query

from ..config import AnalyticsConfig, resolve_timezone
from ..schemas.analytics_schema import (
    AnalyticsReport,
    AnalyticsRequest,
    DailyPnL,
    Distribution,
    EquityPoint,
    SymbolStat,
    TradeHistory,
    TradeSetRequest,
)
from ..schemas.indicator_schema import IndicatorSignals, IndicatorSnapshot
from ..schemas.portfolio_schema import PortfolioOverview, PortfolioRequest
from ..services.indicator_signals import classify_indicators
from ..services.portfolio_overview import compute_portfolio_overview
from ..services.trade_analytics import TradeAnalyticsEngine
from ..services.trade_history import partition_trades
from ..utils.exceptions import PayloadTooLargeError
from ..utils.structured_logging import get_logger

logger = logging.getLogger(__name__)
structured_logger = get_logger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])

TZ_QUERY = Query(
    default=None,
    description="시각 해석 / 일별 집계 타임존 (예: Asia/Seoul). 생략 시 서버 설정값",
)


def _engine(tz: Optional[str] = None) -> TradeAnalyticsEngine:
    return TradeAnalyticsEngine(resolve_timezone(tz or AnalyticsConfig.TIMEZONE))


def _check_trade_limit(request: TradeSetRequest) -> None:
    limit = AnalyticsConfig.MAX_TRADES_PER_REQUEST
    if len(request.trades) > limit:
        structured_logger.warning(
            "analytics_payload_too_large",
            f"Rejected {len(request.trades)} trades (limit {limit})",
            trade_count=len(request.trades),
            limit=limit,
        )
        raise PayloadTooLargeError("trades", limit, len(request.trades))


@router.post("/report", response_model=AnalyticsReport)
async def get_report(request: AnalyticsRequest, tz: Optional[str] = TZ_QUERY):
    """
    전체 분석 리포트

    Returns:
        - equity_curve: 자산 곡선
        - symbol_performance: 심볼별 승/패 통계
        - daily_pnl: 일별 손익
        - distribution: 승/패 분포
        - malformed_trade_ids: 타임스탬프 오류로 제외된 거래
    """
    _check_trade_limit(request)
    return _engine(tz).analyze(request.trades, request.performance)


@router.post("/equity-curve", response_model=List[EquityPoint])
async def get_equity_curve(request: AnalyticsRequest, tz: Optional[str] = TZ_QUERY):
    """자산 곡선 (performance 없으면 빈 목록, 타임존 없는 시각은 tz 기준으로 정렬)"""
    _check_trade_limit(request)
    return _engine(tz).compute_equity_curve(request.trades, request.performance)


@router.post("/symbol-performance", response_model=List[SymbolStat])
async def get_symbol_performance(request: TradeSetRequest):
    """심볼별 성과"""
    _check_trade_limit(request)
    return _engine().compute_symbol_performance(request.trades)


@router.post("/daily-pnl", response_model=List[DailyPnL])
async def get_daily_pnl(request: TradeSetRequest, tz: Optional[str] = TZ_QUERY):
    """일별 손익 (날짜 오름차순)"""
    _check_trade_limit(request)
    return _engine(tz).compute_daily_pnl(request.trades)


@router.post("/distribution", response_model=Distribution)
async def get_distribution(request: TradeSetRequest):
    """승/패 분포"""
    _check_trade_limit(request)
    return _engine().compute_distribution(request.trades)


@router.post("/history", response_model=TradeHistory)
async def get_trade_history(request: TradeSetRequest):
    """진행 중 / 청산 거래 분리"""
    _check_trade_limit(request)
    return partition_trades(request.trades)


@router.post("/portfolio", response_model=PortfolioOverview)
async def get_portfolio_overview(request: PortfolioRequest):
    """트레이더 목록 합산 요약"""
    overview = compute_portfolio_overview(request.traders)
    logger.debug(
        f"Portfolio overview: {overview.trader_count} traders, "
        f"{overview.running_traders} running"
    )
    return overview


@router.post("/indicators", response_model=IndicatorSignals)
async def get_indicator_signals(snapshot: IndicatorSnapshot):
    """기술적 지표 상태 분류"""
    return classify_indicators(snapshot)
