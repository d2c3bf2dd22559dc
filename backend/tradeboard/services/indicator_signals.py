"""
기술적 지표 상태 분류

RSI / 이동평균 / 볼린저 밴드 / 거래량 값을 대시보드 배지 상태로 변환합니다.
"""

from typing import Tuple

from ..config import AnalyticsConfig
from ..schemas.indicator_schema import (
    BollingerStatusEnum,
    IndicatorSignals,
    IndicatorSnapshot,
    RsiStatusEnum,
    TrendStatusEnum,
)


def classify_rsi(
    rsi: float,
    overbought: float = AnalyticsConfig.RSI_OVERBOUGHT,
    oversold: float = AnalyticsConfig.RSI_OVERSOLD,
) -> RsiStatusEnum:
    if rsi >= overbought:
        return RsiStatusEnum.OVERBOUGHT
    if rsi <= oversold:
        return RsiStatusEnum.OVERSOLD
    return RsiStatusEnum.NEUTRAL


def classify_moving_averages(price: float, ma_short: float, ma_long: float) -> TrendStatusEnum:
    """단기/장기 이평선 배열과 현재가 위치로 추세 판단"""
    if ma_short > ma_long and price > ma_short:
        return TrendStatusEnum.BULLISH
    if ma_short < ma_long and price < ma_short:
        return TrendStatusEnum.BEARISH
    return TrendStatusEnum.NEUTRAL


def classify_bollinger(
    price: float, upper: float, lower: float, middle: float
) -> BollingerStatusEnum:
    if price >= upper:
        return BollingerStatusEnum.ABOVE_UPPER
    if price <= lower:
        return BollingerStatusEnum.BELOW_LOWER
    if price > middle:
        return BollingerStatusEnum.ABOVE_MIDDLE
    return BollingerStatusEnum.BELOW_MIDDLE


def volume_deviation(volume: float, volume_avg: float) -> Tuple[bool, float]:
    """(평균 대비 초과 여부, 편차 %) - 평균 0이면 편차 0"""
    deviation = (volume / volume_avg - 1) * 100 if volume_avg > 0 else 0.0
    return volume > volume_avg, deviation


def classify_indicators(
    snapshot: IndicatorSnapshot,
    overbought: float = AnalyticsConfig.RSI_OVERBOUGHT,
    oversold: float = AnalyticsConfig.RSI_OVERSOLD,
) -> IndicatorSignals:
    above_average, deviation = volume_deviation(snapshot.volume, snapshot.volume_avg)

    return IndicatorSignals(
        symbol=snapshot.symbol,
        signal=snapshot.signal,
        signal_strength=snapshot.signal_strength,
        rsi_status=classify_rsi(snapshot.rsi, overbought, oversold),
        ma_status=classify_moving_averages(snapshot.price, snapshot.ma_short, snapshot.ma_long),
        bollinger_status=classify_bollinger(
            snapshot.price,
            snapshot.bollinger_upper,
            snapshot.bollinger_lower,
            snapshot.bollinger_middle,
        ),
        volume_above_average=above_average,
        volume_deviation_pct=deviation,
    )
