#!/usr/bin/env python3
"""
거래 분석 스크립트 - JSON 파일의 거래 기록으로 분석 리포트 출력

사용법:
    python3 analyze_trades.py <payload.json> [OPTIONS]

입력 형식:
    {"trades": [...], "performance": {...}}

옵션:
    --tz <ZONE>     일별 집계 타임존 (예: Asia/Seoul, 생략 시 로컬)
    --json          JSON 리포트 그대로 출력
"""

import argparse
import json
import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from tradeboard.config import resolve_timezone
from tradeboard.schemas.analytics_schema import AnalyticsReport, AnalyticsRequest
from tradeboard.services.trade_analytics import TradeAnalyticsEngine
from tradeboard.utils.exceptions import AppException


def load_payload(path: str) -> AnalyticsRequest:
    with open(path, encoding="utf-8") as f:
        return AnalyticsRequest.model_validate(json.load(f))


def print_report(report: AnalyticsReport):
    print()
    print("=" * 60)
    print("📈 EQUITY CURVE")
    print("=" * 60)
    if not report.equity_curve:
        print("ℹ️  No equity data (missing trades or performance)")
    for point in report.equity_curve:
        suffix = f"  {point.symbol} {point.side.value}" if point.symbol and point.side else ""
        print(f"  {point.time:<12} ${point.balance:>14,.2f}  ({point.pnl:+,.2f}){suffix}")

    print()
    print("=" * 60)
    print("📊 SYMBOL PERFORMANCE")
    print("=" * 60)
    for stat in report.symbol_performance:
        print(
            f"  {stat.symbol:<12} W {stat.wins:>3}  L {stat.losses:>3}  "
            f"win rate {stat.win_rate:5.1f}%  pnl {stat.total_pnl:+.2f}%"
        )

    print()
    print("=" * 60)
    print("📅 DAILY P&L")
    print("=" * 60)
    for day in report.daily_pnl:
        print(f"  {day.date.isoformat()}  {day.pnl:+.2f}%")

    print()
    dist = report.distribution
    print(f"🥧 Wins: {dist.wins}  Losses: {dist.losses}")

    if report.malformed_trade_ids:
        print()
        print(f"⚠️  Excluded (malformed timestamp): {', '.join(report.malformed_trade_ids)}")
    print()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Analyze trade history exported from a trading bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("payload", help="JSON file with trades and performance")
    parser.add_argument("--tz", default="", help="Time zone for daily P&L (default: local)")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s - %(message)s")

    try:
        request = load_payload(args.payload)
        engine = TradeAnalyticsEngine(resolve_timezone(args.tz))
    except (OSError, json.JSONDecodeError, ValidationError, AppException) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    report = engine.analyze(request.trades, request.performance)

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
