# phpayroll/payroll/deductions.py

import logging
from collections import OrderedDict, namedtuple
from datetime import time
from decimal import Decimal

from phpayroll.attendance.calculator import minutes_since_midnight, punches_for, punches_in_period
from phpayroll.errors import LookupMiss
from phpayroll.models.records import CENTS, ZERO, to_decimal

logger = logging.getLogger(__name__)

# Everything a deduction may look at. Each calculator uses only what it needs.
DeductionInputs = namedtuple(
    'DeductionInputs',
    ['snapshot', 'employee_id', 'hourly_rate', 'period', 'gross', 'shift_start', 'late_grace_minutes']
)

DEFAULT_SHIFT_START = time(8, 0)
DEFAULT_LATE_GRACE_MINUTES = 10


# --- SSS CONTRIBUTION TABLE ---
def find_contribution(gross, table):
    """Contribution of the first bracket with lower < gross <= upper."""
    gross = to_decimal(gross)
    for bracket in table:
        if bracket.matches(gross):
            return bracket.contribution
    if gross == 0:
        return ZERO
    highest = max((b.upper for b in table if b.upper is not None), default=None)
    raise LookupMiss(
        f"No SSS contribution bracket covers a gross wage of {gross}",
        gross=str(gross),
        highest_bound=None if highest is None else str(highest),
    )


def calculate_sss(inputs):
    contribution = find_contribution(inputs.gross, inputs.snapshot.contribution_table)
    return to_decimal(contribution).quantize(CENTS)


# --- PHILHEALTH CONTRIBUTION ---
PHILHEALTH_RATE = Decimal('0.03')
PHILHEALTH_CEILING = Decimal('60000.00')
PHILHEALTH_MAX_SHARE = Decimal('1800.00')


def calculate_philhealth(inputs):
    gross = to_decimal(inputs.gross)
    if gross > PHILHEALTH_CEILING:
        return PHILHEALTH_MAX_SHARE
    # Employee share is 50% of the premium
    return ((gross * PHILHEALTH_RATE) / 2).quantize(CENTS)


# --- PAG-IBIG (HDMF) CONTRIBUTION ---
PAGIBIG_LOW_BAND = (Decimal('1000.00'), Decimal('1500.00'))
PAGIBIG_LOW_RATE = Decimal('0.03')
PAGIBIG_RATE = Decimal('0.04')
PAGIBIG_CAP = Decimal('100.00')


def calculate_pagibig(inputs):
    gross = to_decimal(inputs.gross)
    low, high = PAGIBIG_LOW_BAND
    if low < gross <= high:
        contribution = gross * PAGIBIG_LOW_RATE
    else:
        contribution = gross * PAGIBIG_RATE
    return min(contribution, PAGIBIG_CAP).quantize(CENTS)


# --- LATE PENALTY ---
def late_threshold_minutes(shift_start=None, grace_minutes=None):
    """Minutes since midnight from which a time-in counts as late (08:10 by default)."""
    if shift_start is None:
        shift_start = DEFAULT_SHIFT_START
    if grace_minutes is None:
        grace_minutes = DEFAULT_LATE_GRACE_MINUTES
    return minutes_since_midnight(shift_start) + grace_minutes


def _late_penalty(inputs, punches):
    threshold = late_threshold_minutes(inputs.shift_start, inputs.late_grace_minutes)
    per_minute_rate = to_decimal(inputs.hourly_rate) / 60
    total_late_deduction = ZERO

    for punch in punches:
        late_time = minutes_since_midnight(punch.time_in)
        if late_time >= threshold:
            deduction = per_minute_rate * (late_time - threshold)
            total_late_deduction += max(ZERO, deduction)
    return total_late_deduction.quantize(CENTS)


def calculate_late_penalty(inputs):
    """Per-minute pay for every minute past the late threshold, over the whole month.

    Independent of gross: it reads the raw punches for the employee's month
    and charges hourly_rate / 60 for each minute past the threshold.
    """
    punches = punches_for(inputs.snapshot, inputs.employee_id, inputs.period.year, inputs.period.month)
    total_late_deduction = _late_penalty(inputs, punches)
    if total_late_deduction:
        logger.debug("Late penalty for employee %s in %s-%02d: %s",
                     inputs.employee_id, inputs.period.year, inputs.period.month, total_late_deduction)
    return total_late_deduction


def calculate_period_late_penalty(inputs):
    """Late penalty for the punches inside the pay period only."""
    punches = punches_in_period(inputs.snapshot, inputs.employee_id, inputs.period)
    total_late_deduction = _late_penalty(inputs, punches)
    if total_late_deduction:
        logger.debug("Late penalty for employee %s from %s to %s: %s", inputs.employee_id,
                     inputs.period.start.isoformat(), inputs.period.end.isoformat(), total_late_deduction)
    return total_late_deduction


# Deductions taken before withholding tax, in the order they appear on a payslip.
DEDUCTIONS = OrderedDict([
    ('social_insurance', calculate_sss),
    ('health_insurance', calculate_philhealth),
    ('housing_fund', calculate_pagibig),
    ('tardiness_penalty', calculate_late_penalty),
])

# A two-halves payslip charges each late arrival in the half it happened.
PAYSLIP_DEDUCTIONS = OrderedDict(DEDUCTIONS)
PAYSLIP_DEDUCTIONS['tardiness_penalty'] = calculate_period_late_penalty

# These reduce taxable income; the late penalty does not.
STATUTORY_DEDUCTIONS = ('social_insurance', 'health_insurance', 'housing_fund')


def run_deductions(inputs, deductions=None):
    """Runs every registered deduction; any failure propagates and aborts the run."""
    if deductions is None:
        deductions = DEDUCTIONS
    return OrderedDict((name, compute(inputs)) for name, compute in deductions.items())
