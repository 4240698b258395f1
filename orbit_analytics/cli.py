"""
ORbit Analytics CLI
Markdown report over a JSON payload of pre-fetched facility data.
"""

import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone

from orbit_analytics.__version__ import __version__
from orbit_analytics.calendars.holidays import holidays_for_year
from orbit_analytics.config.loader import load_config
from orbit_analytics.observability.factory import build_observers

logger = logging.getLogger(__name__)


# -------------------------------------------------
# PROGRAMMATIC ENTRY (CLI / API)
# -------------------------------------------------
def run_single_file(
    input_path: str,
    config_path: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
    charts: bool = False,
) -> Dict[str, Any]:
    """
    Returns:
        {
            "markdown": <path>,
            "charts": {name: path},
            "run_dir": <path>
        }
    """
    from orbit_analytics.reporting import report

    # -------------------------------------------------
    # Config & run directory
    # -------------------------------------------------
    if config:
        final_config = config
    else:
        final_config = load_config(config_path)

    if not final_config.get("run_dir"):
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H-%M-%S")
        final_config["run_dir"] = str(Path(final_config.get("output_dir", "runs")) / stamp)

    if charts:
        final_config.setdefault("report", {})["charts"] = True

    run_dir = Path(final_config["run_dir"])
    run_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Run directory: %s", run_dir)

    observers = build_observers(final_config)
    result = report.run(input_path, final_config, observers=observers)

    if not isinstance(result, dict) or "markdown" not in result:
        raise RuntimeError(f"report.run() returned invalid contract: {result}")

    return {
        "markdown": result["markdown"],
        "charts": result.get("charts", {}),
        "run_dir": result["run_dir"],
    }


def print_holidays(year: int) -> None:
    for h in holidays_for_year(year):
        observed = f"  (observed {h.observed_date.isoformat()})" if h.is_shifted else ""
        print(f"{h.date.isoformat()}  {h.name}{observed}")


# -------------------------------------------------
# CLI ENTRY
# -------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=f"ORbit Analytics v{__version__}"
    )

    parser.add_argument("input", nargs="?", help="Input JSON payload")
    parser.add_argument("--config", required=False, help="Path to config YAML")

    parser.add_argument("--holidays", type=int, metavar="YEAR", help="List federal holidays for YEAR")
    parser.add_argument("--charts", action="store_true", help="Render PNG charts next to the report")
    parser.add_argument("--version", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    # ---- VERSION ----
    if args.version:
        print(f"ORbit Analytics v{__version__}")
        return 0

    # ---- LOGGING ----
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    # ---- HOLIDAYS ----
    if args.holidays is not None:
        print_holidays(args.holidays)
        return 0

    # ---- SINGLE FILE ----
    if not args.input:
        parser.error("Input file required")

    input_path = Path(args.input)
    if not input_path.exists():
        parser.error(f"Input file not found: {input_path}")

    result = run_single_file(
        input_path=str(input_path),
        config_path=args.config,
        charts=args.charts,
    )

    print("\nReport generated")
    print(f"Markdown: {result['markdown']}")
    for name, path in result["charts"].items():
        print(f"Chart ({name}): {path}")
    print(f"Run folder: {result['run_dir']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
