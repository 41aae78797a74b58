"""CLI entry point for paydate."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

from paydate.utils.errors import PaydateError

logger = logging.getLogger(__name__)


def _setup_logging(cfg: dict[str, Any], verbose: bool) -> None:
    level = "DEBUG" if verbose else str((cfg.get("logging") or {}).get("level", "INFO"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _load_cfg(args: argparse.Namespace) -> tuple[dict[str, Any], Path | None]:
    """Load --config, else $PAYDATE_CONFIG, else run with defaults."""
    from paydate.utils.config import load_config, resolve_config_path

    path = resolve_config_path(args.config)
    if path is None:
        return {}, None
    return load_config(path), path.resolve().parent


def _load_holiday_set(args: argparse.Namespace, cfg: dict[str, Any], cfg_dir: Path | None) -> frozenset[date]:
    from paydate.utils.config import holidays_path
    from paydate.utils.io import load_holidays

    if args.holidays:
        return load_holidays(args.holidays)
    configured = holidays_path(cfg, base=cfg_dir)
    if configured is not None:
        return load_holidays(configured)
    logger.info("No holiday file given; only weekends are avoided")
    return frozenset()


def _cmd_due_date(args: argparse.Namespace) -> int:
    from paydate.pipeline.resolver import ResolverConfig, resolve_due_date_detailed
    from paydate.utils.calendar import to_instant

    cfg, cfg_dir = _load_cfg(args)
    _setup_logging(cfg, args.verbose)
    holidays = _load_holiday_set(args, cfg, cfg_dir)

    result = resolve_due_date_detailed(
        fund_day=to_instant(args.fund_day),
        holidays=holidays,
        pay_span=args.pay_span,
        pay_day=to_instant(args.pay_day),
        direct_deposit=not args.no_direct_deposit,
        cfg=ResolverConfig.from_dict(cfg),
    )
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"Due date: {result.due_date.isoformat()}")
    return 0


def _cmd_batch(args: argparse.Namespace) -> int:
    from paydate.pipeline.resolver import ResolverConfig, resolve_batch
    from paydate.utils.io import load_funding_records, save_results

    cfg, cfg_dir = _load_cfg(args)
    _setup_logging(cfg, args.verbose)
    holidays = _load_holiday_set(args, cfg, cfg_dir)

    records = load_funding_records(args.input)
    df = resolve_batch(records, holidays=holidays, cfg=ResolverConfig.from_dict(cfg))

    out_path = Path(args.out)
    save_results(df, out_path)
    print(f"Written {len(df)} rows → {out_path}")
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--holidays", default=None, help="Holiday file (CSV/Parquet column 'date', or YAML list)")
    p.add_argument("--config", default=None, help="Path to config YAML")
    p.add_argument("-v", "--verbose", action="store_true", help="Log every search step")


def _run(handler: Any, args: argparse.Namespace) -> int:
    try:
        return handler(args)
    except (PaydateError, FileNotFoundError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="paydate")
    sub = parser.add_subparsers(dest="command")

    p_due = sub.add_parser("due-date", help="Resolve the due date for a single loan")
    p_due.add_argument("--fund-day", required=True, help="Funding date YYYY-MM-DD")
    p_due.add_argument("--pay-day", required=True, help="A known payday YYYY-MM-DD")
    p_due.add_argument("--pay-span", required=True, help="weekly | bi-weekly | monthly")
    p_due.add_argument(
        "--no-direct-deposit", action="store_true",
        help="Borrower is paid by paper check (adds one day)",
    )
    p_due.add_argument("--json", action="store_true", help="Print the full resolution as JSON")
    _add_common(p_due)

    p_batch = sub.add_parser("batch", help="Resolve due dates for a file of funding records")
    p_batch.add_argument("--input", required=True, help="Records CSV/Parquet (fund_day, pay_span, pay_day, direct_deposit)")
    p_batch.add_argument("--out", required=True, help="Output path (.parquet or .csv)")
    _add_common(p_batch)

    args = parser.parse_args(argv)

    if args.command == "due-date":
        sys.exit(_run(_cmd_due_date, args))
    elif args.command == "batch":
        sys.exit(_run(_cmd_batch, args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
