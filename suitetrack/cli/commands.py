from __future__ import annotations

import argparse
import json
import sys

from suitetrack.config import CatalogConfig, ConfigError, default_catalog, load_catalog
from suitetrack.executions import ExecutionSnapshot, ExecutionState, Outcome, TrackerError
from suitetrack.log import configure_logging
from suitetrack.query import StatusSummary
from suitetrack.tracker import Tracker

from .args import build_parser


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        configure_logging(args.log_level, args.log_format)

        match args.command:
            case "run":
                return cmd_run(args)
            case "catalog":
                return cmd_catalog(args)
            case _:
                return 2

    except (ConfigError, TrackerError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def main() -> None:
    sys.exit(run_cli())


def cmd_run(args: argparse.Namespace) -> int:
    tracker = Tracker(_load(args))

    if args.target:
        execution_id = tracker.start_one(args.target)
    else:
        execution_id = tracker.start_all()

    printed = 0

    def stream(snapshot: ExecutionSnapshot) -> None:
        nonlocal printed
        if not args.json:
            for line in snapshot.output[printed:]:
                print(line)
        printed = len(snapshot.output)

    snapshot = tracker.query.wait_for(
        execution_id,
        timeout=args.timeout,
        interval=args.poll_interval,
        on_poll=stream,
    )
    summary = tracker.get_status_summary(execution_id)

    if args.json:
        print(json.dumps(snapshot.to_dict(), indent=2))
    else:
        _print_result(snapshot, summary)

    return 1 if snapshot.state is ExecutionState.FAILED or summary.failed else 0


def cmd_catalog(args: argparse.Namespace) -> int:
    info = Tracker(_load(args)).get_catalog()

    if args.json:
        print(json.dumps(info.to_dict(), indent=2))
        return 0

    for group, names in info.groups.items():
        print(f"{group}: {' '.join(names)}")
    print(f"{info.total_groups} groups, {info.total_subjects} tests")
    return 0


def _load(args: argparse.Namespace) -> CatalogConfig:
    if args.config is None:
        return default_catalog()
    return load_catalog(args.config)


def _print_result(snapshot: ExecutionSnapshot, summary: StatusSummary) -> None:
    for result in snapshot.results:
        match result.outcome:
            case Outcome.PASSED:
                print(f"OK {result.subject}, {result.duration_ms}ms")
            case Outcome.FAILED:
                print(f"FAIL {result.subject}, {result.duration_ms}ms, {result.message}")
            case Outcome.SKIPPED:
                print(f"SKIP {result.subject}, {result.message}")

    print(
        f"{summary.state.value}: {summary.total_results} tests, "
        f"{summary.passed} passed, {summary.failed} failed, {summary.skipped} skipped"
    )
