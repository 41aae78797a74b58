"""Non-payday adjustment: move a candidate due date off holidays and weekends.

Holidays are checked before weekends on every pass:

- holiday on a Monday → back 3 days (the preceding Friday)
- any other holiday   → back 1 day
- Saturday / Sunday   → forward 1 day

A shift can land on another holiday or weekend, so the rules are re-applied
until the date settles. A holiday set can make that loop cycle forever (a
Sunday holiday sends Sunday → Saturday → Sunday ...), so revisiting a date or
exceeding ``max_shifts`` raises UnboundedAdjustmentError.
"""
from __future__ import annotations

import logging
from collections.abc import Collection
from datetime import date, timedelta

from paydate.utils.calendar import MONDAY, ONE_DAY, is_weekend, weekday_of
from paydate.utils.errors import UnboundedAdjustmentError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SHIFTS = 31


def is_holiday(d: date, holidays: Collection[date]) -> bool:
    return d in holidays


def is_payday_eligible(d: date, holidays: Collection[date]) -> bool:
    """Return True if d is neither a weekend day nor a holiday."""
    return not is_weekend(d) and not is_holiday(d, holidays)


def _shift(d: date, holidays: Collection[date]) -> timedelta | None:
    """Return the shift one adjustment pass applies to d, or None if d is valid."""
    if is_holiday(d, holidays):
        if weekday_of(d) == MONDAY:
            return -3 * ONE_DAY
        return -ONE_DAY
    if is_weekend(d):
        return ONE_DAY
    return None


def adjust_for_non_paydays(
    candidate: date,
    holidays: Collection[date],
    max_shifts: int = DEFAULT_MAX_SHIFTS,
) -> date:
    """
    Return the date reached from `candidate` by repeatedly applying the
    holiday-then-weekend shift rules until neither applies.

    The result may fall in a different month than `candidate`.
    """
    seen = {candidate}
    current = candidate
    for _ in range(max_shifts):
        step = _shift(current, holidays)
        if step is None:
            return current
        nxt = current + step
        logger.debug("non-payday %s → %s", current, nxt)
        if nxt in seen:
            raise UnboundedAdjustmentError(
                f"Adjustment of {candidate} cycles at {nxt}; holiday set never settles"
            )
        seen.add(nxt)
        current = nxt

    if _shift(current, holidays) is None:
        return current
    raise UnboundedAdjustmentError(
        f"Adjustment of {candidate} exceeded {max_shifts} shifts (stopped at {current})"
    )
