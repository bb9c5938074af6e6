from __future__ import annotations

import argparse

from suitetrack.log import LOG_FORMATS, LOG_LEVELS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="suitetrack")

    parser.add_argument(
        "--config",
        default=None,
        help="Path to a catalog file (.yml/.yaml, .toml, .json); built-in catalog if omitted",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        help="Log level for messages on stderr",
    )
    parser.add_argument(
        "--log-format",
        default="console",
        choices=LOG_FORMATS,
        help="Log renderer",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Run the whole catalog or one test")
    run.add_argument(
        "target",
        nargs="?",
        help="Single test to run, as Group.name",
    )
    run.add_argument(
        "--json",
        action="store_true",
        help="Print the finished execution as JSON",
    )
    run.add_argument(
        "--timeout",
        type=float,
        default=300.0,
        help="Seconds to wait for the execution to finish",
    )
    run.add_argument(
        "--poll-interval",
        type=float,
        default=0.1,
        help="Seconds between status polls",
    )

    # catalog
    catalog = subparsers.add_parser("catalog", help="List groups and tests")
    catalog.add_argument(
        "--json",
        action="store_true",
        help="Print the catalog as JSON",
    )

    return parser
