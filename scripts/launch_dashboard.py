#!/usr/bin/env python3
"""Launch the ET₀ telemetry dashboard."""

from __future__ import annotations

import argparse
import logging

from et_monitor.gui.main_window import qt_timer_factory, run_dashboard
from et_monitor.io import load_dashboard_config
from et_monitor.orchestration import build_session


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--settings", help="Optional path to a dashboard YAML file.")
    parser.add_argument(
        "--source",
        choices=("simulated", "remote"),
        help="Override the telemetry source configured in the settings file.",
    )
    parser.add_argument("--url", help="Backend URL for the remote source.")
    parser.add_argument("--seed", type=int, help="Seed the simulated sensor noise.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_dashboard_config(args.settings)
    if args.source:
        config.source = args.source
    if args.url:
        config.remote.url = args.url
    if args.seed is not None:
        config.seed = args.seed
    if config.source == "remote" and not config.remote.url:
        raise SystemExit("A remote URL is required for the remote source (--url or remote.url).")

    session = build_session(config, timer_factory=qt_timer_factory)
    run_dashboard(session, config, settings_file=args.settings)


if __name__ == "__main__":
    main()
