"""
거래 분석 결과 Pydantic 스키마

분석 엔진이 생성하는 파생 뷰 (자산 곡선, 심볼별 성과, 일별 손익, 승/패 분포)
및 분석 API 요청/응답 형식.
"""

import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .performance_schema import PerformanceSnapshot
from .trade_schema import TradeRecord, TradeSideEnum

# ============================================================
# 파생 뷰
# ============================================================


class EquityPoint(BaseModel):
    """자산 곡선의 한 점"""
    time: str = Field(..., description="라벨 (Start, Trade N)")
    balance: float = Field(..., description="재구성된 잔고")
    pnl: float = Field(default=0.0, description="해당 단계 손익")
    symbol: Optional[str] = None
    side: Optional[TradeSideEnum] = None


class SymbolStat(BaseModel):
    """심볼별 승/패 통계"""
    symbol: str
    wins: int = 0
    losses: int = 0
    total_pnl: float = Field(default=0.0, description="실현 수익률 합계 (%)")
    total: int = 0
    win_rate: float = Field(default=0.0, ge=0, le=100, description="승률 (%)")


class DailyPnL(BaseModel):
    """일별 손익"""
    date: datetime.date
    pnl: float = Field(..., description="당일 실현 수익률 합계 (%)")


class DistributionSlice(BaseModel):
    name: str
    value: int


class Distribution(BaseModel):
    """승/패 분포"""
    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses

    def slices(self) -> List[DistributionSlice]:
        """파이 차트용 데이터"""
        return [
            DistributionSlice(name="Wins", value=self.wins),
            DistributionSlice(name="Losses", value=self.losses),
        ]


class AnalyticsReport(BaseModel):
    """네 가지 파생 뷰 전체"""
    equity_curve: List[EquityPoint] = Field(default_factory=list)
    symbol_performance: List[SymbolStat] = Field(default_factory=list)
    daily_pnl: List[DailyPnL] = Field(default_factory=list)
    distribution: Distribution = Field(default_factory=Distribution)
    malformed_trade_ids: List[str] = Field(
        default_factory=list,
        description="타임스탬프 파싱 실패로 날짜 기반 뷰에서 제외된 거래",
    )


class TradeHistory(BaseModel):
    """진행 중 / 청산 거래 분리"""
    open: List[TradeRecord] = Field(default_factory=list)
    closed: List[TradeRecord] = Field(default_factory=list)
    # trade_id -> "profit" | "loss" | "neutral" (current_roe 부호)
    roe_tones: Dict[str, str] = Field(default_factory=dict)


# ============================================================
# API 요청
# ============================================================


class TradeSetRequest(BaseModel):
    """거래 목록만 필요한 분석 요청"""
    trades: List[TradeRecord] = Field(default_factory=list)


class AnalyticsRequest(TradeSetRequest):
    """거래 목록 + 성과 스냅샷 분석 요청"""
    performance: Optional[PerformanceSnapshot] = None
