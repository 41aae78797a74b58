"""Due-date resolution: first payday-aligned, non-holiday, non-weekend date
at least `minimum_days` after funding."""
from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

import pandas as pd

from paydate.pipeline.adjust import DEFAULT_MAX_SHIFTS, adjust_for_non_paydays
from paydate.pipeline.cadence import PaySpan, next_payday
from paydate.utils.calendar import ONE_DAY, to_holiday_set, to_instant
from paydate.utils.errors import ConfigError, PaydateError

logger = logging.getLogger(__name__)

MINIMUM_DAYS = 10
MAX_ITERATIONS = 1000


@dataclass
class ResolverConfig:
    minimum_days: int = MINIMUM_DAYS
    max_adjust_shifts: int = DEFAULT_MAX_SHIFTS
    strict_pay_span: bool = False

    def __post_init__(self) -> None:
        if self.minimum_days < 0:
            raise ConfigError(f"minimum_days must be >= 0, got {self.minimum_days}")
        if self.max_adjust_shifts < 1:
            raise ConfigError(f"max_adjust_shifts must be >= 1, got {self.max_adjust_shifts}")

    @classmethod
    def from_dict(cls, cfg: dict[str, Any] | None) -> ResolverConfig:
        """Build from the ``due_date`` section of a loaded config mapping."""
        section = (cfg or {}).get("due_date", {}) or {}
        try:
            minimum_days = int(section.get("minimum_days", MINIMUM_DAYS))
            max_adjust_shifts = int(section.get("max_adjust_shifts", DEFAULT_MAX_SHIFTS))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid due_date setting: {exc}") from exc
        strict = section.get("strict_pay_span", False)
        if not isinstance(strict, bool):
            raise ConfigError(f"strict_pay_span must be true or false, got {strict!r}")
        return cls(
            minimum_days=minimum_days,
            max_adjust_shifts=max_adjust_shifts,
            strict_pay_span=strict,
        )


@dataclass(frozen=True)
class FundingRecord:
    """Inputs for one due-date computation."""

    fund_day: date
    pay_span: PaySpan | str
    pay_day: date
    direct_deposit: bool
    holidays: frozenset[date] = field(default_factory=frozenset)


@dataclass
class DueDateResolution:
    due_date: date
    minimum_payday: date
    nominal_payday: date
    iterations: int
    direct_deposit: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "due_date": self.due_date.isoformat(),
            "minimum_payday": self.minimum_payday.isoformat(),
            "nominal_payday": self.nominal_payday.isoformat(),
            "iterations": self.iterations,
            "direct_deposit": self.direct_deposit,
        }


def resolve_due_date_detailed(
    fund_day: Any,
    holidays: Iterable[Any] | None,
    pay_span: PaySpan | str,
    pay_day: Any,
    direct_deposit: bool,
    cfg: ResolverConfig | None = None,
) -> DueDateResolution:
    """
    Search successive paydays until the adjusted candidate reaches the minimum.

    Each iteration projects the next payday, adds one day when the borrower is
    paid by paper check, then moves the date off holidays/weekends. The
    minimum is tested against the *adjusted* date, so a backward holiday shift
    below the minimum sends the search on to the next payday.
    """
    if cfg is None:
        cfg = ResolverConfig()
    fund_day = to_instant(fund_day)
    pay_day = to_instant(pay_day)
    holiday_set = to_holiday_set(holidays)
    span = PaySpan.parse(pay_span, strict=cfg.strict_pay_span)

    minimum_payday = fund_day + cfg.minimum_days * ONE_DAY
    iteration = 0
    due_date: date | None = None
    nominal = fund_day

    while due_date is None or due_date < minimum_payday:
        if iteration >= MAX_ITERATIONS:
            raise PaydateError(
                f"No due date on or after {minimum_payday} within {MAX_ITERATIONS} paydays"
            )
        nominal = next_payday(fund_day, span, pay_day, iteration)
        candidate = nominal
        if not direct_deposit:
            candidate += ONE_DAY
        due_date = adjust_for_non_paydays(candidate, holiday_set, max_shifts=cfg.max_adjust_shifts)
        logger.debug(
            "iteration=%d payday=%s candidate=%s adjusted=%s minimum=%s",
            iteration, nominal, candidate, due_date, minimum_payday,
        )
        iteration += 1

    return DueDateResolution(
        due_date=due_date,
        minimum_payday=minimum_payday,
        nominal_payday=nominal,
        iterations=iteration,
        direct_deposit=bool(direct_deposit),
    )


def resolve_due_date(
    fund_day: Any,
    holidays: Iterable[Any] | None,
    pay_span: PaySpan | str,
    pay_day: Any,
    direct_deposit: bool,
    cfg: ResolverConfig | None = None,
) -> date:
    """Return the first valid due date for a loan funded on `fund_day`."""
    return resolve_due_date_detailed(
        fund_day, holidays, pay_span, pay_day, direct_deposit, cfg=cfg
    ).due_date


def resolve_record(record: FundingRecord, cfg: ResolverConfig | None = None) -> DueDateResolution:
    return resolve_due_date_detailed(
        record.fund_day,
        record.holidays,
        record.pay_span,
        record.pay_day,
        record.direct_deposit,
        cfg=cfg,
    )


def resolve_batch(
    records: pd.DataFrame,
    holidays: Collection[date] | None = None,
    cfg: ResolverConfig | None = None,
) -> pd.DataFrame:
    """
    Resolve every row of a funding-record frame.

    Expects columns fund_day, pay_span, pay_day, direct_deposit; returns a copy
    with due_date, minimum_payday and iterations appended. The first failing
    row raises.
    """
    holiday_set = to_holiday_set(holidays)
    out = records.copy()
    due_dates: list[date] = []
    minimums: list[date] = []
    iterations: list[int] = []

    for row in records.itertuples(index=False):
        res = resolve_due_date_detailed(
            row.fund_day,
            holiday_set,
            row.pay_span,
            row.pay_day,
            bool(row.direct_deposit),
            cfg=cfg,
        )
        due_dates.append(res.due_date)
        minimums.append(res.minimum_payday)
        iterations.append(res.iterations)

    out["due_date"] = due_dates
    out["minimum_payday"] = minimums
    out["iterations"] = pd.Series(iterations, index=out.index, dtype="int64")
    logger.info("Resolved %d funding record(s)", len(out))
    return out
