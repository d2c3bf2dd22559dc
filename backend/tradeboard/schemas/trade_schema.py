"""
거래 기록 Pydantic 스키마

외부 트레이딩 서비스의 /trader/{id}/trades 응답 형식을 그대로 따릅니다.
타임스탬프는 원본 문자열로 유지하고 분석 엔진에서 파싱합니다.
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ============================================================
# Enum 정의
# ============================================================


class TradeSideEnum(str, Enum):
    """포지션 방향"""
    LONG = "LONG"
    SHORT = "SHORT"


class TradeStatusEnum(str, Enum):
    """거래 상태"""
    OPEN = "OPEN"
    CLOSED_WIN = "CLOSED_WIN"
    CLOSED_LOSS = "CLOSED_LOSS"


# ============================================================
# 거래 기록 스키마
# ============================================================


class TradeRecord(BaseModel):
    """거래 1건의 스냅샷 (불변)"""

    model_config = ConfigDict(frozen=True)

    trade_id: str = Field(..., description="거래 ID")
    timestamp: str = Field(..., description="진입(기록) 시각, ISO-8601")
    symbol: str = Field(..., description="거래 심볼")
    side: TradeSideEnum = Field(..., description="LONG / SHORT")
    entry_price: float = Field(default=0.0, description="진입가")
    quantity: float = Field(default=0.0, description="수량")
    leverage: float = Field(default=1.0, description="레버리지")
    risk_pct: float = Field(default=0.0, description="손절 비율 설정값")
    reward_pct: float = Field(default=0.0, description="익절 비율 설정값")
    stop_loss: float = Field(default=0.0, description="손절가")
    take_profit: float = Field(default=0.0, description="익절가")
    current_roe: float = Field(default=0.0, description="현재 ROE")
    drawdown: float = Field(default=0.0, description="낙폭")
    max_roe: float = Field(default=0.0, description="최대 ROE")
    trade_status: TradeStatusEnum = Field(..., description="OPEN / CLOSED_WIN / CLOSED_LOSS")
    exit_price: Optional[float] = Field(None, description="청산가 (청산 시에만)")
    exit_timestamp: Optional[str] = Field(None, description="청산 시각 (청산 시에만)")
    actual_return_pct: Optional[float] = Field(None, description="실현 수익률 % (청산 시에만)")
    notes: str = Field(default="", description="메모")

    @property
    def is_closed(self) -> bool:
        return self.trade_status != TradeStatusEnum.OPEN

    def has_exit_details(self) -> bool:
        """청산 필드가 모두 채워져 있는지 확인"""
        return (
            self.exit_price is not None
            and bool(self.exit_timestamp)
            and self.actual_return_pct is not None
        )

    def realized_return(self) -> float:
        """실현 수익률 (%) - 없거나 NaN이면 0"""
        value = self.actual_return_pct
        if value is None or math.isnan(value):
            return 0.0
        return value
