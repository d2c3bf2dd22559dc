"""
pytest 설정 및 공통 픽스처
"""
from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from tradeboard.main import create_app
from tradeboard.schemas.performance_schema import PerformanceSnapshot
from tradeboard.schemas.trade_schema import TradeRecord


def _trade_payload(**overrides: Any) -> Dict[str, Any]:
    """
    API 요청용 거래 dict 생성.

    기본값은 청산된 수익 거래 (BTCUSDT LONG +5%).
    """
    payload = {
        "trade_id": "t-1",
        "timestamp": "2024-03-01T09:00:00",
        "symbol": "BTCUSDT",
        "side": "LONG",
        "entry_price": 62000.0,
        "quantity": 0.01,
        "leverage": 10,
        "risk_pct": 0.02,
        "reward_pct": 0.04,
        "stop_loss": 60760.0,
        "take_profit": 64480.0,
        "current_roe": 0.05,
        "drawdown": 0.01,
        "max_roe": 0.06,
        "trade_status": "CLOSED_WIN",
        "exit_price": 65100.0,
        "exit_timestamp": "2024-03-01T15:00:00",
        "actual_return_pct": 5.0,
        "notes": "",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def trade_payload() -> Callable[..., Dict[str, Any]]:
    """API 요청용 거래 dict 팩토리"""
    return _trade_payload


@pytest.fixture
def make_trade() -> Callable[..., TradeRecord]:
    """
    TradeRecord 팩토리.

    OPEN 상태로 만들면 청산 필드는 자동으로 비워집니다.
    """

    def _make(**overrides: Any) -> TradeRecord:
        if overrides.get("trade_status") == "OPEN":
            overrides.setdefault("exit_price", None)
            overrides.setdefault("exit_timestamp", None)
            overrides.setdefault("actual_return_pct", None)
        return TradeRecord(**_trade_payload(**overrides))

    return _make


@pytest.fixture
def performance() -> PerformanceSnapshot:
    """current_balance 11000, total_pnl 1000 -> 시작 잔고 10000"""
    return PerformanceSnapshot(
        total_trades=1,
        winning_trades=1,
        losing_trades=0,
        win_rate=100.0,
        avg_win=1000.0,
        avg_loss=0.0,
        profit_factor=0.0,
        max_drawdown=0.0,
        current_balance=11000.0,
        total_pnl=1000.0,
        total_pnl_pct=10.0,
        sharpe_ratio=0.0,
    )


@pytest.fixture
def client() -> TestClient:
    """테스트용 HTTP 클라이언트"""
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
