"""
거래 분석 엔진

정렬되지 않은 거래 기록 목록을 대시보드 차트용 파생 뷰로 변환합니다.

계산 항목:
- equity_curve: 자산 곡선 (복리 재구성)
- symbol_performance: 심볼별 승/패 통계
- daily_pnl: 일별 실현 손익
- distribution: 승/패 분포

입력을 변경하지 않으며 호출 간 상태를 유지하지 않습니다.
같은 입력에 대해 항상 같은 결과를 반환합니다.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..config import AnalyticsConfig
from ..schemas.analytics_schema import (
    AnalyticsReport,
    DailyPnL,
    Distribution,
    EquityPoint,
    SymbolStat,
)
from ..schemas.performance_schema import PerformanceSnapshot
from ..schemas.trade_schema import TradeRecord, TradeStatusEnum
from ..utils.exceptions import MalformedTimestampError
from ..utils.structured_logging import get_logger
from ..utils.timestamps import day_key, parse_timestamp, sort_key

logger = logging.getLogger(__name__)
structured_logger = get_logger(__name__)


@dataclass
class _SymbolTally:
    """심볼별 누적값"""
    wins: int = 0
    losses: int = 0
    total_pnl: float = 0.0


class TradeAnalyticsEngine:
    """
    거래 분석 엔진

    Args:
        tz: 일별 집계 기준 타임존. None이면 프로세스 로컬 타임존.
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    # ============================================================
    # 자산 곡선
    # ============================================================

    def compute_equity_curve(
        self,
        trades: Sequence[TradeRecord],
        performance: Optional[PerformanceSnapshot],
    ) -> List[EquityPoint]:
        """
        자산 곡선 재구성

        시작 잔고 = current_balance - total_pnl 에서 출발하여
        청산된 거래를 진입 시각 순으로 재생합니다.
        각 거래의 손익은 그 시점 잔고 대비 비율 (복리).
        """
        return self._equity_curve(trades, performance, malformed=set())

    def _equity_curve(
        self,
        trades: Sequence[TradeRecord],
        performance: Optional[PerformanceSnapshot],
        malformed: Set[str],
    ) -> List[EquityPoint]:
        if not trades or performance is None:
            return []

        balance = performance.starting_balance
        curve = [EquityPoint(time=AnalyticsConfig.START_LABEL, balance=balance, pnl=0.0)]

        keyed: List[Tuple[float, TradeRecord]] = []
        for trade in trades:
            if not trade.is_closed:
                continue
            opened_at = self._parse(trade, "timestamp", malformed)
            if opened_at is None:
                continue
            keyed.append((sort_key(opened_at, self.tz), trade))

        # sorted()는 안정 정렬 - 동일 시각은 입력 순서 유지
        ordered = [trade for _, trade in sorted(keyed, key=lambda item: item[0])]
        logger.debug(f"Replaying {len(ordered)} closed trades from balance {balance:.2f}")

        for index, trade in enumerate(ordered, start=1):
            pnl = trade.realized_return() / 100 * balance
            balance += pnl
            curve.append(
                EquityPoint(
                    time=AnalyticsConfig.TRADE_LABEL.format(index=index),
                    balance=balance,
                    pnl=pnl,
                    symbol=trade.symbol,
                    side=trade.side,
                )
            )

        return curve

    # ============================================================
    # 심볼별 성과
    # ============================================================

    def compute_symbol_performance(self, trades: Sequence[TradeRecord]) -> List[SymbolStat]:
        """심볼별 승/패 수, 실현 수익률 합계, 승률"""
        tallies: "OrderedDict[str, _SymbolTally]" = OrderedDict()

        for trade in trades:
            if not trade.is_closed:
                continue

            tally = tallies.setdefault(trade.symbol, _SymbolTally())
            if trade.trade_status == TradeStatusEnum.CLOSED_WIN:
                tally.wins += 1
            else:
                tally.losses += 1
            tally.total_pnl += trade.realized_return()

        result = []
        for symbol, tally in tallies.items():
            total = tally.wins + tally.losses
            result.append(
                SymbolStat(
                    symbol=symbol,
                    wins=tally.wins,
                    losses=tally.losses,
                    total_pnl=tally.total_pnl,
                    total=total,
                    win_rate=(tally.wins / total * 100) if total > 0 else 0.0,
                )
            )
        return result

    # ============================================================
    # 일별 손익
    # ============================================================

    def compute_daily_pnl(self, trades: Sequence[TradeRecord]) -> List[DailyPnL]:
        """
        일별 실현 손익 합계

        청산 시각이 없는 거래는 제외합니다.
        날짜 경계는 엔진의 타임존 기준.
        """
        return self._daily_pnl(trades, malformed=set())

    def _daily_pnl(self, trades: Sequence[TradeRecord], malformed: Set[str]) -> List[DailyPnL]:
        daily: Dict = {}

        for trade in trades:
            if not trade.is_closed or not trade.exit_timestamp:
                continue
            exited_at = self._parse(trade, "exit_timestamp", malformed)
            if exited_at is None:
                continue
            key = day_key(exited_at, self.tz)
            daily[key] = daily.get(key, 0.0) + trade.realized_return()

        return [DailyPnL(date=day, pnl=pnl) for day, pnl in sorted(daily.items())]

    # ============================================================
    # 승/패 분포
    # ============================================================

    def compute_distribution(self, trades: Sequence[TradeRecord]) -> Distribution:
        """청산 거래 중 CLOSED_WIN / CLOSED_LOSS 개수"""
        wins = 0
        losses = 0
        for trade in trades:
            if trade.trade_status == TradeStatusEnum.CLOSED_WIN:
                wins += 1
            elif trade.trade_status == TradeStatusEnum.CLOSED_LOSS:
                losses += 1
            # 그 외 상태는 무시
        return Distribution(wins=wins, losses=losses)

    # ============================================================
    # 전체 리포트
    # ============================================================

    def analyze(
        self,
        trades: Sequence[TradeRecord],
        performance: Optional[PerformanceSnapshot] = None,
    ) -> AnalyticsReport:
        """네 가지 뷰를 한 번에 계산"""
        malformed: Set[str] = set()
        incomplete = sum(1 for t in trades if t.is_closed and not t.has_exit_details())

        report = AnalyticsReport(
            equity_curve=self._equity_curve(trades, performance, malformed),
            symbol_performance=self.compute_symbol_performance(trades),
            daily_pnl=self._daily_pnl(trades, malformed),
            distribution=self.compute_distribution(trades),
            malformed_trade_ids=sorted(malformed),
        )

        structured_logger.info(
            "analytics_computed",
            f"Analytics computed for {len(trades)} trades",
            trade_count=len(trades),
            equity_points=len(report.equity_curve),
            symbols=len(report.symbol_performance),
            days=len(report.daily_pnl),
            malformed=len(malformed),
            incomplete_closed=incomplete,
        )
        return report

    # ============================================================
    # 내부 유틸
    # ============================================================

    @staticmethod
    def _parse(trade: TradeRecord, field: str, malformed: Set[str]) -> Optional[datetime]:
        """타임스탬프 파싱 - 실패 시 기록 후 None"""
        try:
            return parse_timestamp(getattr(trade, field), field=field, trade_id=trade.trade_id)
        except MalformedTimestampError as e:
            malformed.add(trade.trade_id)
            structured_logger.warning(
                "malformed_timestamp",
                e.message,
                trade_id=trade.trade_id,
                field=field,
                value=e.details.get("value"),
            )
            return None


def compute_equity_curve(
    trades: Sequence[TradeRecord],
    performance: Optional[PerformanceSnapshot],
    tz: Optional[tzinfo] = None,
) -> List[EquityPoint]:
    return TradeAnalyticsEngine(tz).compute_equity_curve(trades, performance)


def compute_symbol_performance(trades: Sequence[TradeRecord]) -> List[SymbolStat]:
    return TradeAnalyticsEngine().compute_symbol_performance(trades)


def compute_daily_pnl(trades: Sequence[TradeRecord], tz: Optional[tzinfo] = None) -> List[DailyPnL]:
    return TradeAnalyticsEngine(tz).compute_daily_pnl(trades)


def compute_distribution(trades: Sequence[TradeRecord]) -> Distribution:
    return TradeAnalyticsEngine().compute_distribution(trades)
