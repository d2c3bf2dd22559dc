"""
거래 내역 분리 및 ROE 표시 톤

대시보드의 "Open Trades" / "Trade History" 탭에 사용됩니다.
"""

from typing import Literal, Sequence

from ..schemas.analytics_schema import TradeHistory
from ..schemas.trade_schema import TradeRecord

RoeTone = Literal["profit", "loss", "neutral"]


def partition_trades(trades: Sequence[TradeRecord]) -> TradeHistory:
    """진행 중 / 청산 거래로 분리 (입력 순서 유지)"""
    history = TradeHistory()
    for trade in trades:
        history.roe_tones[trade.trade_id] = roe_tone(trade.current_roe)
        if trade.is_closed:
            history.closed.append(trade)
        else:
            history.open.append(trade)
    return history


def roe_tone(value: float) -> RoeTone:
    if value > 0:
        return "profit"
    if value < 0:
        return "loss"
    return "neutral"
