from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import uvicorn
from pydantic import TypeAdapter, ValidationError

from .api.main import create_app, set_evaluator
from .config import settings
from .engine import RuleEvaluator, load_catalogue
from .metrics import METRICS
from .models import MerchantSnapshot
from .scanner import FleetBatchResult, FleetScanner

logger = logging.getLogger("merchant_twin.main")

_ANSI = {
    "critical": "\033[91m",
    "high":     "\033[93m",
    "medium":   "\033[96m",
    "low":      "\033[97m",
    "ok":       "\033[92m",
    "RESET":    "\033[0m",
}

_SNAPSHOTS = TypeAdapter(list[MerchantSnapshot])


def _colour(severity: str, text: str) -> str:
    return f"{_ANSI.get(severity, '')}{text}{_ANSI['RESET']}"


# ---------------------------------------------------------------------------
# scan
# ---------------------------------------------------------------------------

def load_snapshots(path: Path) -> list[MerchantSnapshot]:
    """Read a JSON list of merchant snapshots. Raises ValueError on bad input."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValueError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e
    try:
        return _SNAPSHOTS.validate_python(raw)
    except ValidationError as e:
        raise ValueError(f"{path} does not hold a list of merchant snapshots:\n{e}") from e


def _print_batch(batch: FleetBatchResult) -> None:
    for result in batch.merchant_results:
        snap = result.snapshot
        if not result.failures:
            print(f"{_colour('ok', '[OK]')} {snap.id} {snap.display_name}", flush=True)
            continue
        top = result.failures[0]
        sev = top.severity.value if top.severity else "low"
        print(
            f"{_colour(sev, f'[{sev.upper()}]')} {snap.id} {snap.display_name} "
            f"failures={result.summary.failures} warnings={result.summary.warnings} "
            f"calls_at_risk={result.summary.calls_at_risk:,}",
            flush=True,
        )
        for entry in result.failures:
            esev = entry.severity.value if entry.severity else "low"
            print(f"    {_colour(esev, entry.code):<32} {entry.outcome.message}", flush=True)

    fleet = batch.fleet
    print(
        f"\nFleet: {fleet.total_merchants} merchant(s), "
        f"{fleet.merchants_with_critical} critical, "
        f"{fleet.merchants_with_any_failure} failing, "
        f"{fleet.healthy_merchants} healthy, "
        f"{fleet.total_calls_at_risk:,} calls at risk",
        flush=True,
    )
    for row in fleet.top_failures:
        print(f"  {row.code:<24} {row.count:>4}  {row.pct:>3}%", flush=True)


def run_scan(path: Path, workers: int | None = None) -> int:
    try:
        snapshots = load_snapshots(path)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    scanner = FleetScanner(RuleEvaluator(load_catalogue()), workers=workers)
    _print_batch(scanner.scan_fleet(snapshots))
    logger.debug("METRICS %s", METRICS.as_dict())
    return 0


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------

def run_server(host: str, port: int) -> None:
    set_evaluator(RuleEvaluator(load_catalogue()))
    logger.info("Merchant Twin API on http://%s:%d", host, port)
    uvicorn.run(create_app(), host=host, port=port, log_level="warning")


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level", default=settings.LOG_LEVEL.upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    parser = argparse.ArgumentParser(description="Merchant Twin failure diagnosis engine")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", parents=[common], help="run the HTTP API")
    serve.add_argument("--host", default=settings.API_HOST)
    serve.add_argument("--port", type=int, default=settings.API_PORT)

    scan = sub.add_parser("scan", parents=[common], help="scan a JSON file of merchant snapshots")
    scan.add_argument("file", type=Path)
    scan.add_argument("--workers", type=int, default=None)

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> NoReturn:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.command == "scan":
        sys.exit(run_scan(args.file, workers=args.workers))

    run_server(args.host, args.port)
    sys.exit(0)


if __name__ == "__main__":
    main()
