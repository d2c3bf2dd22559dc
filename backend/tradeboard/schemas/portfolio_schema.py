"""
트레이더 목록 / 포트폴리오 요약 Pydantic 스키마
"""

from typing import List

from pydantic import BaseModel, Field


class TraderSummary(BaseModel):
    """트레이더 목록의 한 항목 (/trader/list 응답)"""
    id: str
    name: str
    is_running: bool = False
    balance: float = 0.0
    daily_pnl: float = 0.0
    total_trades: int = Field(default=0, ge=0)
    open_trades: int = Field(default=0, ge=0)


class PortfolioRequest(BaseModel):
    traders: List[TraderSummary] = Field(default_factory=list)


class PortfolioOverview(BaseModel):
    """전체 트레이더 합산 요약"""
    trader_count: int = 0
    running_traders: int = 0
    total_balance: float = 0.0
    total_daily_pnl: float = 0.0
    daily_pnl_pct: float = Field(default=0.0, description="일일 손익 / 총 잔고 (%)")
    total_trades: int = 0
    total_open_trades: int = 0
