"""Payday cadence projection: the Nth payday after a loan is funded.

Paydays are located by day-of-month alignment rather than by walking the
calendar: weekly and bi-weekly spans step 7 / 14 days, monthly steps the
length of the *funding* month on every iteration, anything else steps 30.
"""
from __future__ import annotations

import logging
from datetime import date
from enum import Enum

from paydate.utils.calendar import ONE_DAY, day_of_month, days_in_month
from paydate.utils.errors import UnknownPaySpanError

logger = logging.getLogger(__name__)

FALLBACK_CADENCE_DAYS = 30


class PaySpan(str, Enum):
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: PaySpan | str | None, strict: bool = False) -> PaySpan | None:
        """
        Map a pay-span tag onto PaySpan. Tags must match exactly.

        Unrecognised tags return None (30-day fallback) unless `strict`,
        in which case UnknownPaySpanError is raised.
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        if strict:
            raise UnknownPaySpanError(f"Unknown pay span: {value!r}")
        logger.warning("Unknown pay span %r; using %d-day cadence", value, FALLBACK_CADENCE_DAYS)
        return None


def cadence_length(
    fund_day: date,
    pay_span: PaySpan | str | None,
    pay_day: date,
    iteration: int,
    strict: bool = False,
) -> int:
    """
    Days between paydays for this iteration.

    Zero on the first iteration when the known payday is still ahead of the
    funding date: that payday is itself the first candidate.
    """
    if pay_day > fund_day and iteration == 0:
        return 0
    # None means an already-parsed fallback span
    span = pay_span
    if span is not None and not isinstance(span, PaySpan):
        span = PaySpan.parse(span, strict=strict)
    if span is PaySpan.WEEKLY:
        return 7
    if span is PaySpan.BI_WEEKLY:
        return 14
    if span is PaySpan.MONTHLY:
        return days_in_month(fund_day)
    return FALLBACK_CADENCE_DAYS


def next_payday(
    fund_day: date,
    pay_span: PaySpan | str | None,
    pay_day: date,
    iteration: int,
    strict: bool = False,
) -> date:
    """Project the `iteration`-th payday after `fund_day`."""
    if iteration < 0:
        raise ValueError(f"iteration must be >= 0, got {iteration}")
    frequency = cadence_length(fund_day, pay_span, pay_day, iteration, strict=strict)
    offset = day_of_month(fund_day) - day_of_month(pay_day)
    remaining_days = frequency * iteration - offset
    return fund_day + remaining_days * ONE_DAY
