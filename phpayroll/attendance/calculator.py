# phpayroll/attendance/calculator.py

import logging
from collections import OrderedDict
from datetime import datetime, timedelta
from decimal import Decimal

from phpayroll.models.records import CENTS, ZERO, HoursSummary
from phpayroll.snapshot import normalize_employee_id

logger = logging.getLogger(__name__)

STANDARD_DAILY_HOURS = Decimal('8')


# --- HELPER: MINUTES AND HOURS ---
def minutes_since_midnight(t):
    return t.hour * 60 + t.minute


def worked_minutes(punch):
    """Whole minutes between time-in and time-out; a time-out before time-in crossed midnight."""
    start = datetime.combine(punch.date, punch.time_in)
    end = datetime.combine(punch.date, punch.time_out)
    if punch.time_out < punch.time_in:
        end += timedelta(hours=24)
    return int((end - start).total_seconds() // 60)


def hours_worked(punch):
    return Decimal(worked_minutes(punch)) / Decimal(60)


def split_hours(hours, standard_hours=STANDARD_DAILY_HOURS):
    """Splits one day's hours into (regular, overtime)."""
    regular_hours = min(hours, standard_hours)
    overtime_hours = max(ZERO, hours - standard_hours)
    return regular_hours, overtime_hours


def same_employee(punch, employee_id):
    return normalize_employee_id(punch.employee_id) == normalize_employee_id(employee_id)


# --- PUNCH SELECTION ---
def punches_for(snapshot, employee_id, year, month):
    return [
        punch for punch in snapshot.punches
        if same_employee(punch, employee_id)
        and punch.date.year == year and punch.date.month == month
    ]


def punches_in_period(snapshot, employee_id, period):
    return [
        punch for punch in snapshot.punches
        if same_employee(punch, employee_id) and period.contains(punch.date)
    ]


# --- CORE LOGIC: DAILY HOURS ---
def daily_hours(snapshot, employee_id, period):
    """Worked hours per calendar date in the period, ordered by date.

    Several punches on the same date add up to one working day; the 8 hour
    regular/overtime split is applied to the day, not to each punch.
    """
    days = {}
    for punch in punches_in_period(snapshot, employee_id, period):
        days[punch.date] = days.get(punch.date, ZERO) + hours_worked(punch)
    return OrderedDict(sorted(days.items()))


def aggregate(snapshot, employee_id, period):
    """Regular and overtime hours an employee worked in a pay period."""
    total_reg_hours = ZERO
    total_ot_hours = ZERO

    days = daily_hours(snapshot, employee_id, period)
    for hours in days.values():
        regular_hours, overtime_hours = split_hours(hours)
        total_reg_hours += regular_hours
        total_ot_hours += overtime_hours

    if not days:
        logger.debug("No attendance for employee %s in %s-%02d (%s half)",
                     employee_id, period.year, period.month, period.half.value)

    return HoursSummary(
        regular_hours=total_reg_hours.quantize(CENTS),
        overtime_hours=total_ot_hours.quantize(CENTS),
    )
