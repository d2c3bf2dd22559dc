"""
TradeAnalyticsEngine 유닛 테스트

자산 곡선 / 심볼별 성과 / 일별 손익 / 승패 분포 계산 검증.
"""
from datetime import date
from zoneinfo import ZoneInfo

import pytest

from tradeboard.schemas.trade_schema import TradeSideEnum
from tradeboard.services.trade_analytics import (
    TradeAnalyticsEngine,
    compute_daily_pnl,
    compute_distribution,
    compute_equity_curve,
    compute_symbol_performance,
)

UTC = ZoneInfo("UTC")
SEOUL = ZoneInfo("Asia/Seoul")


@pytest.fixture
def engine():
    return TradeAnalyticsEngine(tz=UTC)


@pytest.mark.unit
class TestEquityCurve:
    """compute_equity_curve 테스트"""

    def test_single_win_with_open_trade(self, engine, make_trade, performance):
        """수익 거래 1건 + 진행 중 거래 1건: Start 10000 -> Trade 1 11000"""
        trades = [
            make_trade(trade_id="a", actual_return_pct=10.0, timestamp="2024-03-01T09:00:00"),
            make_trade(trade_id="b", trade_status="OPEN", timestamp="2024-03-02T09:00:00"),
        ]

        curve = engine.compute_equity_curve(trades, performance)

        assert len(curve) == 2
        assert curve[0].time == "Start"
        assert curve[0].balance == pytest.approx(10000.0)
        assert curve[0].pnl == 0.0
        assert curve[0].symbol is None
        assert curve[1].time == "Trade 1"
        assert curve[1].balance == pytest.approx(11000.0)
        assert curve[1].pnl == pytest.approx(1000.0)
        assert curve[1].symbol == "BTCUSDT"
        assert curve[1].side == TradeSideEnum.LONG

    def test_compounds_on_running_balance(self, engine, make_trade, performance):
        """손익은 원금이 아니라 직전 잔고 기준 (복리)"""
        trades = [
            make_trade(trade_id="a", actual_return_pct=10.0, timestamp="2024-03-01T09:00:00"),
            make_trade(
                trade_id="b",
                trade_status="CLOSED_LOSS",
                actual_return_pct=-10.0,
                timestamp="2024-03-01T10:00:00",
            ),
        ]

        curve = engine.compute_equity_curve(trades, performance)

        assert [p.time for p in curve] == ["Start", "Trade 1", "Trade 2"]
        assert curve[1].balance == pytest.approx(11000.0)
        assert curve[2].pnl == pytest.approx(-1100.0)
        assert curve[2].balance == pytest.approx(9900.0)

    def test_sorted_by_open_timestamp_not_exit(self, engine, make_trade, performance):
        """진입 시각 기준 정렬 (청산 시각 무시)"""
        trades = [
            make_trade(
                trade_id="late",
                symbol="ETHUSDT",
                timestamp="2024-03-05T00:00:00",
                exit_timestamp="2024-03-05T01:00:00",
            ),
            make_trade(
                trade_id="early",
                symbol="SOLUSDT",
                timestamp="2024-03-01T00:00:00",
                exit_timestamp="2024-03-10T00:00:00",
            ),
        ]

        curve = engine.compute_equity_curve(trades, performance)

        assert [p.symbol for p in curve[1:]] == ["SOLUSDT", "ETHUSDT"]

    def test_ties_keep_input_order(self, engine, make_trade, performance):
        """동일 시각은 입력 순서 유지 (안정 정렬)"""
        same_time = "2024-03-01T09:00:00"
        trades = [
            make_trade(trade_id="1", symbol="AUSDT", timestamp=same_time),
            make_trade(trade_id="2", symbol="BUSDT", timestamp=same_time),
            make_trade(trade_id="3", symbol="CUSDT", timestamp=same_time),
        ]

        curve = engine.compute_equity_curve(trades, performance)

        assert [p.symbol for p in curve[1:]] == ["AUSDT", "BUSDT", "CUSDT"]

    def test_mixed_offsets_sorted_chronologically(self, engine, make_trade, performance):
        """오프셋이 다른 타임스탬프도 실제 시각 순으로 정렬"""
        trades = [
            # 2024-03-01 09:00 UTC
            make_trade(trade_id="a", symbol="AUSDT", timestamp="2024-03-01T18:00:00+09:00"),
            # 2024-03-01 08:00 UTC
            make_trade(trade_id="b", symbol="BUSDT", timestamp="2024-03-01T08:00:00Z"),
        ]

        curve = engine.compute_equity_curve(trades, performance)

        assert [p.symbol for p in curve[1:]] == ["BUSDT", "AUSDT"]

    def test_missing_return_adds_zero(self, engine, make_trade, performance):
        """actual_return_pct 없으면 손익 0"""
        trades = [make_trade(actual_return_pct=None)]

        curve = engine.compute_equity_curve(trades, performance)

        assert len(curve) == 2
        assert curve[1].pnl == 0.0
        assert curve[1].balance == pytest.approx(10000.0)

    def test_nan_return_adds_zero(self, engine, make_trade, performance):
        trades = [make_trade(actual_return_pct=float("nan"))]

        curve = engine.compute_equity_curve(trades, performance)

        assert curve[1].pnl == 0.0

    def test_empty_trades_returns_empty(self, engine, performance):
        assert engine.compute_equity_curve([], performance) == []

    def test_missing_performance_returns_empty(self, engine, make_trade):
        """performance 없으면 Start 점도 만들지 않음"""
        assert engine.compute_equity_curve([make_trade()], None) == []

    def test_only_open_trades_yields_start_point(self, engine, make_trade, performance):
        trades = [make_trade(trade_status="OPEN")]

        curve = engine.compute_equity_curve(trades, performance)

        assert len(curve) == 1
        assert curve[0].time == "Start"

    def test_length_is_closed_count_plus_one(self, engine, make_trade, performance):
        trades = [
            make_trade(trade_id=str(i), timestamp=f"2024-03-{i + 1:02d}T00:00:00")
            for i in range(7)
        ] + [make_trade(trade_id="open", trade_status="OPEN")]

        curve = engine.compute_equity_curve(trades, performance)

        assert len(curve) == 7 + 1

    def test_replay_is_reproducible(self, engine, make_trade, performance):
        """같은 입력 두 번 계산 시 동일한 잔고 시퀀스"""
        trades = [
            make_trade(trade_id="a", actual_return_pct=3.3, timestamp="2024-03-02T00:00:00"),
            make_trade(trade_id="b", actual_return_pct=-1.7, timestamp="2024-03-01T00:00:00"),
            make_trade(trade_id="c", actual_return_pct=0.9, timestamp="2024-03-03T00:00:00"),
        ]

        first = [p.balance for p in engine.compute_equity_curve(trades, performance)]
        second = [p.balance for p in engine.compute_equity_curve(trades, performance)]

        assert first == second

    def test_does_not_reorder_input(self, engine, make_trade, performance):
        trades = [
            make_trade(trade_id="late", timestamp="2024-03-05T00:00:00"),
            make_trade(trade_id="early", timestamp="2024-03-01T00:00:00"),
        ]

        engine.compute_equity_curve(trades, performance)

        assert [t.trade_id for t in trades] == ["late", "early"]

    def test_malformed_timestamp_excluded(self, engine, make_trade, performance):
        """파싱 불가 타임스탬프 거래는 곡선에서 제외"""
        trades = [
            make_trade(trade_id="good", actual_return_pct=10.0),
            make_trade(trade_id="bad", timestamp="yesterday-ish"),
        ]

        curve = engine.compute_equity_curve(trades, performance)

        assert len(curve) == 2
        assert curve[1].balance == pytest.approx(11000.0)


@pytest.mark.unit
class TestSymbolPerformance:
    """compute_symbol_performance 테스트"""

    def test_one_win_one_loss(self, engine, make_trade):
        """같은 심볼 +5 / -3 -> 승률 50%, 합계 2"""
        trades = [
            make_trade(trade_id="a", actual_return_pct=5.0),
            make_trade(trade_id="b", trade_status="CLOSED_LOSS", actual_return_pct=-3.0),
        ]

        stats = engine.compute_symbol_performance(trades)

        assert len(stats) == 1
        stat = stats[0]
        assert stat.symbol == "BTCUSDT"
        assert stat.wins == 1
        assert stat.losses == 1
        assert stat.total == 2
        assert stat.win_rate == pytest.approx(50.0)
        assert stat.total_pnl == pytest.approx(2.0)

    def test_groups_in_first_seen_order(self, engine, make_trade):
        trades = [
            make_trade(trade_id="1", symbol="ETHUSDT"),
            make_trade(trade_id="2", symbol="BTCUSDT"),
            make_trade(trade_id="3", symbol="ETHUSDT", trade_status="CLOSED_LOSS"),
            make_trade(trade_id="4", symbol="SOLUSDT", trade_status="OPEN"),
        ]

        stats = engine.compute_symbol_performance(trades)

        assert [s.symbol for s in stats] == ["ETHUSDT", "BTCUSDT"]
        eth = stats[0]
        assert (eth.wins, eth.losses, eth.total) == (1, 1, 2)

    def test_open_trades_excluded(self, engine, make_trade):
        stats = engine.compute_symbol_performance([make_trade(trade_status="OPEN")])
        assert stats == []

    def test_missing_return_counts_as_zero(self, engine, make_trade):
        stats = engine.compute_symbol_performance([make_trade(actual_return_pct=None)])
        assert stats[0].total_pnl == 0.0
        assert stats[0].wins == 1

    def test_invariants_hold(self, engine, make_trade):
        """wins + losses == total, 0 <= win_rate <= 100"""
        trades = [
            make_trade(
                trade_id=str(i),
                symbol=["BTCUSDT", "ETHUSDT", "XRPUSDT"][i % 3],
                trade_status="CLOSED_WIN" if i % 4 else "CLOSED_LOSS",
                actual_return_pct=(i % 5) - 2.0,
            )
            for i in range(20)
        ]

        for stat in engine.compute_symbol_performance(trades):
            assert stat.wins + stat.losses == stat.total
            assert 0.0 <= stat.win_rate <= 100.0

    def test_counts_are_integers(self, engine, make_trade):
        trades = [make_trade(trade_id=str(i), actual_return_pct=1.5) for i in range(3)]

        stat = engine.compute_symbol_performance(trades)[0]

        assert type(stat.wins) is int
        assert type(stat.losses) is int
        assert stat.model_dump()["wins"] == 3
        assert stat.total_pnl == pytest.approx(4.5)


@pytest.mark.unit
class TestDailyPnL:
    """compute_daily_pnl 테스트"""

    def test_sums_per_day_and_sorts(self, engine, make_trade):
        trades = [
            make_trade(trade_id="a", exit_timestamp="2024-03-02T10:00:00Z", actual_return_pct=1.5),
            make_trade(trade_id="b", exit_timestamp="2024-03-01T10:00:00Z", actual_return_pct=2.0),
            make_trade(trade_id="c", exit_timestamp="2024-03-02T23:00:00Z", actual_return_pct=-0.5),
        ]

        daily = engine.compute_daily_pnl(trades)

        assert [d.date for d in daily] == [date(2024, 3, 1), date(2024, 3, 2)]
        assert daily[0].pnl == pytest.approx(2.0)
        assert daily[1].pnl == pytest.approx(1.0)

    def test_chronological_not_lexical_order(self, engine, make_trade):
        """연도가 바뀌어도 날짜 순서 유지"""
        trades = [
            make_trade(trade_id="a", exit_timestamp="2024-01-02T00:00:00Z"),
            make_trade(trade_id="b", exit_timestamp="2023-12-31T00:00:00Z"),
            make_trade(trade_id="c", exit_timestamp="2023-02-10T00:00:00Z"),
        ]

        daily = engine.compute_daily_pnl(trades)

        assert [d.date for d in daily] == [
            date(2023, 2, 10),
            date(2023, 12, 31),
            date(2024, 1, 2),
        ]

    def test_missing_exit_timestamp_excluded(self, engine, make_trade):
        """청산 거래라도 exit_timestamp 없으면 제외"""
        trades = [
            make_trade(trade_id="a", exit_timestamp=None),
            make_trade(trade_id="b", exit_timestamp=""),
            make_trade(trade_id="c", trade_status="OPEN", exit_timestamp="2024-03-01T00:00:00Z"),
        ]

        assert engine.compute_daily_pnl(trades) == []

    def test_timezone_moves_day_boundary(self, make_trade):
        """같은 시각도 타임존에 따라 다른 날짜로 집계"""
        trades = [make_trade(exit_timestamp="2024-03-01T20:00:00Z", actual_return_pct=4.0)]

        utc_daily = TradeAnalyticsEngine(tz=UTC).compute_daily_pnl(trades)
        seoul_daily = TradeAnalyticsEngine(tz=SEOUL).compute_daily_pnl(trades)

        assert utc_daily[0].date == date(2024, 3, 1)
        assert seoul_daily[0].date == date(2024, 3, 2)

    def test_naive_timestamp_is_wall_clock_time(self, make_trade):
        """naive 값은 기준 타임존의 벽시계 시간으로 해석"""
        trades = [make_trade(exit_timestamp="2024-03-01T23:30:00")]

        assert TradeAnalyticsEngine(tz=SEOUL).compute_daily_pnl(trades)[0].date == date(2024, 3, 1)
        assert TradeAnalyticsEngine().compute_daily_pnl(trades)[0].date == date(2024, 3, 1)

    def test_malformed_exit_timestamp_excluded(self, engine, make_trade):
        trades = [
            make_trade(trade_id="good", exit_timestamp="2024-03-01T10:00:00Z"),
            make_trade(trade_id="bad", exit_timestamp="31/02/2024"),
        ]

        daily = engine.compute_daily_pnl(trades)

        assert len(daily) == 1
        assert daily[0].pnl == pytest.approx(5.0)


@pytest.mark.unit
class TestDistribution:
    """compute_distribution 테스트"""

    def test_counts_wins_and_losses(self, engine, make_trade):
        trades = [
            make_trade(trade_id="1"),
            make_trade(trade_id="2"),
            make_trade(trade_id="3", trade_status="CLOSED_LOSS"),
            make_trade(trade_id="4", trade_status="OPEN"),
        ]

        dist = engine.compute_distribution(trades)

        assert dist.wins == 2
        assert dist.losses == 1
        assert dist.total == 3
        assert [(s.name, s.value) for s in dist.slices()] == [("Wins", 2), ("Losses", 1)]

    def test_empty(self, engine):
        dist = engine.compute_distribution([])
        assert (dist.wins, dist.losses) == (0, 0)


@pytest.mark.unit
class TestAnalyze:
    """analyze (전체 리포트) 테스트"""

    def test_empty_trades_with_performance(self, engine, performance):
        report = engine.analyze([], performance)

        assert report.equity_curve == []
        assert report.symbol_performance == []
        assert report.daily_pnl == []
        assert report.distribution.wins == 0
        assert report.distribution.losses == 0
        assert report.malformed_trade_ids == []

    def test_reports_malformed_ids_once(self, engine, make_trade, performance):
        """timestamp / exit_timestamp 모두 깨진 거래도 한 번만 보고"""
        trades = [
            make_trade(trade_id="ok"),
            make_trade(trade_id="broken", timestamp="??", exit_timestamp="??"),
            make_trade(trade_id="also-broken", timestamp="2024-13-45T00:00:00"),
        ]

        report = engine.analyze(trades, performance)

        assert report.malformed_trade_ids == ["also-broken", "broken"]
        # 날짜와 무관한 뷰에는 그대로 포함
        assert report.distribution.wins == 3
        assert report.symbol_performance[0].total == 3
        assert len(report.equity_curve) == 2

    def test_matches_individual_operations(self, engine, make_trade, performance):
        trades = [
            make_trade(trade_id="a", symbol="ETHUSDT", actual_return_pct=2.0),
            make_trade(trade_id="b", trade_status="CLOSED_LOSS", actual_return_pct=-1.0),
        ]

        report = engine.analyze(trades, performance)

        assert report.equity_curve == engine.compute_equity_curve(trades, performance)
        assert report.symbol_performance == engine.compute_symbol_performance(trades)
        assert report.daily_pnl == engine.compute_daily_pnl(trades)
        assert report.distribution == engine.compute_distribution(trades)


@pytest.mark.unit
class TestModuleFunctions:
    """모듈 수준 함수 테스트"""

    def test_functions_delegate_to_engine(self, make_trade, performance):
        trades = [make_trade(exit_timestamp="2024-03-01T20:00:00Z")]

        assert len(compute_equity_curve(trades, performance, tz=UTC)) == 2
        assert compute_symbol_performance(trades)[0].wins == 1
        assert compute_daily_pnl(trades, tz=SEOUL)[0].date == date(2024, 3, 2)
        assert compute_distribution(trades).wins == 1
