# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to run the analysis.
#
# COMMANDS:
# ---------
# 1. Analyze an upload:
#    python -m enrolment_monitor.cli analyze data.csv
#    python -m enrolment_monitor.cli analyze data.csv --month 2024-03
#    python -m enrolment_monitor.cli analyze data.csv --json
#
# 2. Generate a demo dataset:
#    python -m enrolment_monitor.cli demo --seed 7 --output demo.csv
#
# 3. Explain a state's first risk event:
#    python -m enrolment_monitor.cli insight data.csv "Punjab"
#
# ==============================================

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Optional, Sequence

from enrolment_monitor.config import get_config
from enrolment_monitor.dashboard import EnrolmentDashboard
from enrolment_monitor.demo import generate_mock_csv
from enrolment_monitor.errors import InvalidDatasetError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enrolment-monitor",
        description="Aggregate enrolment uploads and flag border-state spikes."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Summarize a CSV upload")
    analyze.add_argument("file", type=Path)
    analyze.add_argument("--month", help="Show a single-month snapshot (YYYY-MM)")
    analyze.add_argument("--json", action="store_true", help="Print the full result as JSON")

    demo = sub.add_parser("demo", help="Generate a demo CSV")
    demo.add_argument("--seed", type=int)
    demo.add_argument("--output", type=Path)

    insight = sub.add_parser("insight", help="Explain a state's first risk event")
    insight.add_argument("file", type=Path)
    insight.add_argument("state")

    return parser


def _print_summary(dashboard: EnrolmentDashboard, month: Optional[str]) -> None:
    result = dashboard.result
    status = dashboard.get_status()

    print("=" * 60)
    print(f"Records: {status['records']}  States: {status['states']}  "
          f"Risk events: {status['risk_events']}")
    print("=" * 60)

    print("\nStates by total enrolments:")
    for rank, summary in enumerate(result.ranked_states(), start=1):
        print(f"  {rank:>3}. {summary.state:<45} {summary.total_enrolments:>10}  "
              f"{summary.status.value}")

    if result.risks:
        print("\nRisk events:")
        for event in result.risks:
            print(f"  ✗ {event.date}  {event.state}: {event.daily_total} "
                  f"(threshold {event.percentile_95})")
    else:
        print("\n✓ No risk events")

    if month:
        snapshot = result.month_snapshot(month)
        print(f"\nSnapshot for {month} (total {result.snapshot_total(month)}):")
        if not snapshot:
            print(f"  No data (months available: {', '.join(result.months)})")
        for state, total in sorted(snapshot.items(), key=lambda item: -item[1]):
            print(f"  {state:<45} {total:>10}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if args.command == "demo":
        csv_text = generate_mock_csv(rng=random.Random(args.seed))
        if args.output:
            args.output.write_text(csv_text, encoding="utf-8")
            print(f"✓ Wrote demo dataset to {args.output}")
        else:
            sys.stdout.write(csv_text)
        return 0

    dashboard = EnrolmentDashboard(config)
    try:
        dashboard.load_csv(args.file.read_text(encoding="utf-8-sig"))
    except InvalidDatasetError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    if args.command == "analyze":
        if args.json:
            print(json.dumps(dashboard.result.to_dict(), indent=2))
        else:
            _print_summary(dashboard, args.month)
        return 0

    insight = dashboard.insight_for(args.state)
    if insight is None:
        print(f"✓ No risk events for {args.state}")
        return 0
    print(json.dumps(insight.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
