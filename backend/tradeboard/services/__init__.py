# services/__init__.py

"""
순수 계산 서비스 모음

- trade_analytics: 자산 곡선 / 심볼별 성과 / 일별 손익 / 승패 분포
- portfolio_overview: 트레이더 목록 합산
- trade_history: 진행 중 / 청산 거래 분리
- indicator_signals: 기술적 지표 상태 분류
"""

from .indicator_signals import classify_indicators
from .portfolio_overview import compute_portfolio_overview
from .trade_analytics import TradeAnalyticsEngine
from .trade_history import partition_trades

__all__ = [
    "TradeAnalyticsEngine",
    "classify_indicators",
    "compute_portfolio_overview",
    "partition_trades",
]
