#!/usr/bin/env python3
"""Print telemetry points as they are appended, without the GUI."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from datetime import datetime

from et_monitor.io import load_dashboard_config
from et_monitor.orchestration import build_session
from et_monitor.telemetry import TelemetryBuffer


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--settings", help="Optional path to a dashboard YAML file.")
    parser.add_argument("--url", help="Poll this backend URL instead of simulating points.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_dashboard_config(args.settings)
    if args.url:
        config.source = "remote"
        config.remote.url = args.url
    tz = config.zone()
    session = build_session(config)
    printed = 0

    def print_new(buffer: TelemetryBuffer) -> None:
        nonlocal printed
        for point in buffer.points[printed:]:
            stamp = datetime.fromtimestamp(point.timestamp / 1000.0, tz=tz).strftime("%H:%M")
            print(
                f"{stamp}  ET0={point.et0:.3f}  predicted={point.predicted:.3f}  "
                f"T={point.temp:.1f}C  RH={point.humidity:.0f}%  wind={point.wind:.1f}m/s  "
                f"solar={point.solar:.0f}W/m2"
            )
        printed = len(buffer)

    session.scheduler.subscribe(print_new)
    interval_s = session.scheduler.poll_interval_ms / 1000.0
    try:
        session.start()
        while not session.buffer.is_terminal:
            time.sleep(interval_s)
            session.scheduler.poll()
    except KeyboardInterrupt:
        pass
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
