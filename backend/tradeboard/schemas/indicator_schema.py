"""
기술적 지표 스냅샷 / 신호 분류 Pydantic 스키마
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TradeSignalEnum(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RsiStatusEnum(str, Enum):
    OVERBOUGHT = "Overbought"
    OVERSOLD = "Oversold"
    NEUTRAL = "Neutral"


class TrendStatusEnum(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"
    NEUTRAL = "Neutral"


class BollingerStatusEnum(str, Enum):
    ABOVE_UPPER = "Above Upper"
    BELOW_LOWER = "Below Lower"
    ABOVE_MIDDLE = "Above Middle"
    BELOW_MIDDLE = "Below Middle"


class IndicatorSnapshot(BaseModel):
    """/trader/{id}/indicators/{symbol} 응답"""
    symbol: str
    price: float
    rsi: float = Field(..., ge=0, le=100)
    bollinger_upper: float
    bollinger_middle: float
    bollinger_lower: float
    ma_short: float
    ma_long: float
    volume: float = Field(default=0.0, ge=0)
    volume_avg: float = Field(default=0.0, ge=0)
    signal: TradeSignalEnum = TradeSignalEnum.HOLD
    signal_strength: float = 0.0
    last_updated: Optional[str] = None


class IndicatorSignals(BaseModel):
    """지표별 상태 분류 결과"""
    symbol: str
    signal: TradeSignalEnum
    signal_strength: float
    rsi_status: RsiStatusEnum
    ma_status: TrendStatusEnum
    bollinger_status: BollingerStatusEnum
    volume_above_average: bool
    volume_deviation_pct: float = Field(..., description="(volume / volume_avg - 1) * 100")
