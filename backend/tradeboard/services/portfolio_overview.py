from typing import Sequence

from ..schemas.portfolio_schema import PortfolioOverview, TraderSummary


def compute_portfolio_overview(traders: Sequence[TraderSummary]) -> PortfolioOverview:
    """트레이더 목록 합산 (총 잔고, 일일 손익, 거래 수, 실행 중 봇 수)"""
    total_balance = sum(t.balance for t in traders)
    total_daily_pnl = sum(t.daily_pnl for t in traders)

    # 잔고 0이면 비율 0 (나누기 0 방지)
    daily_pnl_pct = (total_daily_pnl / total_balance * 100) if total_balance else 0.0

    return PortfolioOverview(
        trader_count=len(traders),
        running_traders=sum(1 for t in traders if t.is_running),
        total_balance=total_balance,
        total_daily_pnl=total_daily_pnl,
        daily_pnl_pct=daily_pnl_pct,
        total_trades=sum(t.total_trades for t in traders),
        total_open_trades=sum(t.open_trades for t in traders),
    )
