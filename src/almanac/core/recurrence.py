"""Recurrence stepping and termination - pure functions, no I/O."""

from datetime import date, timedelta

from .dates import add_months, add_years, is_last_day_of_month
from .events import DayPolicy, RecurrenceRule, RepeatKind

# Safety cap for rules that repeat forever
UNBOUNDED_UNTIL = date(2100, 12, 31)


def next_occurrence(current: date, rule: RecurrenceRule) -> date:
    """
    Advance a date by exactly one recurrence step.

    Monthly and yearly steps are computed from `current`, not from the
    event's original date, so a clamp carries forward:
    Jan 31 -> Feb 28 -> Mar 28.

    Raises:
        ValueError: If the rule does not repeat.
    """
    match rule.kind:
        case RepeatKind.DAILY:
            return current + timedelta(days=rule.interval)
        case RepeatKind.WEEKLY:
            return current + timedelta(weeks=rule.interval)
        case RepeatKind.MONTHLY:
            return add_months(current, rule.interval, snap_to_end=rule.snaps_to_month_end)
        case RepeatKind.YEARLY:
            return add_years(current, rule.interval, snap_to_end=rule.snaps_to_month_end)
    raise ValueError(f"Cannot step a {rule.kind.value} rule")


def step_occurrence(current: date, rule: RecurrenceRule) -> date | None:
    """Like next_occurrence, but None once a step would leave the calendar (past year 9999)."""
    try:
        return next_occurrence(current, rule)
    except (OverflowError, ValueError):
        if not rule.is_recurring:
            raise
        return None


def nth_occurrence(start: date, rule: RecurrenceRule, n: int, until: date | None = None) -> date:
    """
    Date of the nth occurrence (1-based), stepping one occurrence at a time.

    With `until`, stepping stops at the first date past it and that date is
    returned, since nothing later can matter to the caller. Returns date.max
    when the nth occurrence would fall past the end of the calendar.
    """
    current = start
    for _ in range(n - 1):
        if until is not None and current > until:
            break
        current = step_occurrence(current, rule)
        if current is None:
            return date.max
    return current


def termination_bound(
    start: date,
    rule: RecurrenceRule,
    window_end: date,
    unbounded_until: date = UNBOUNDED_UNTIL,
) -> date:
    """
    Latest date a recurrence may still produce an occurrence on.

    Precedence: explicit termination date, then unbounded (capped at
    `unbounded_until`), then occurrence count, then the query window end.
    A count bound is only resolved as far as `window_end`; when the count
    reaches past it, the first occurrence after the window is returned.
    """
    if rule.termination_date:
        return rule.termination_date
    if rule.unbounded:
        return unbounded_until
    if rule.occurrence_limit:
        return nth_occurrence(start, rule, rule.occurrence_limit, until=window_end)
    return window_end


def day_policy_options(start: date, kind: RepeatKind) -> list[DayPolicy]:
    """
    Day policies a rule starting on `start` can choose between.

    "Last day of month" is only offered when the start date is itself a
    month's last day. Daily and weekly rules have no day policy.
    """
    if kind not in (RepeatKind.MONTHLY, RepeatKind.YEARLY):
        return []
    if is_last_day_of_month(start):
        return [DayPolicy.SPECIFIC_DAY, DayPolicy.LAST_DAY_OF_MONTH]
    return [DayPolicy.SPECIFIC_DAY]
