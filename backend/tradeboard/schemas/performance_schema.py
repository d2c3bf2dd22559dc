"""
성과 스냅샷 Pydantic 스키마

외부 트레이딩 서비스의 /trader/{id}/performance 응답 형식.
"""

from pydantic import BaseModel, ConfigDict, Field


class PerformanceSnapshot(BaseModel):
    """계좌 성과 스냅샷 (특정 시점)"""

    model_config = ConfigDict(frozen=True)

    total_trades: int = Field(default=0, ge=0, description="총 거래 수")
    winning_trades: int = Field(default=0, ge=0, description="수익 거래 수")
    losing_trades: int = Field(default=0, ge=0, description="손실 거래 수")
    win_rate: float = Field(default=0.0, description="승률 (%)")
    avg_win: float = Field(default=0.0, description="평균 수익")
    avg_loss: float = Field(default=0.0, description="평균 손실")
    profit_factor: float = Field(default=0.0, description="Profit Factor (외부 계산값)")
    max_drawdown: float = Field(default=0.0, description="최대 낙폭")
    current_balance: float = Field(default=0.0, description="현재 잔고")
    total_pnl: float = Field(default=0.0, description="총 실현 손익")
    total_pnl_pct: float = Field(default=0.0, description="총 실현 손익 (%)")
    sharpe_ratio: float = Field(default=0.0, description="샤프 비율")

    @property
    def starting_balance(self) -> float:
        """current_balance = starting_balance + total_pnl"""
        return self.current_balance - self.total_pnl
