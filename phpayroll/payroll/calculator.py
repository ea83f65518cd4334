# phpayroll/payroll/calculator.py

import logging
from decimal import Decimal

from phpayroll.attendance.calculator import daily_hours, split_hours
from phpayroll.errors import CalculationFault, InvalidArgument, InvalidRate
from phpayroll.models.records import (
    CENTS, ZERO, DeductionSet, NetPay, PayBreakdown, PayPeriod, to_decimal
)
from phpayroll.payroll.deductions import (
    DEDUCTIONS, PAYSLIP_DEDUCTIONS, STATUTORY_DEDUCTIONS, DeductionInputs, run_deductions
)
from phpayroll.payroll.tax import compute_withholding_tax

logger = logging.getLogger(__name__)

DAY_SHIFT_OVERTIME_RATE = Decimal('1.25')
NIGHT_SHIFT_OVERTIME_RATE = Decimal('1.10')
# Holiday premium may never exceed this many times the base pay for the hours worked
HOLIDAY_PREMIUM_CAP = Decimal('1.3')


def overtime_rate(night_shift):
    return NIGHT_SHIFT_OVERTIME_RATE if night_shift else DAY_SHIFT_OVERTIME_RATE


# --- CORE LOGIC: GROSS WAGE ---
def compute_gross(snapshot, employee_id, hourly_rate, period, night_shift=False):
    """Gross pay for one employee and pay period.

    Holiday days pay regular hours at rate * multiplier. The part above the
    base rate is also tracked as holiday_premium, together with a premium on
    holiday overtime. That premium is reporting only: gross is
    regular_pay + overtime_pay, and the overtime part of the premium is not
    paid through gross at all.
    """
    hourly_rate = to_decimal(hourly_rate)
    if hourly_rate <= 0:
        raise InvalidRate(f"Invalid hourly rate for Employee ID {employee_id}: {hourly_rate}",
                          employee_id=str(employee_id), hourly_rate=str(hourly_rate))

    ot_rate = overtime_rate(night_shift)
    total_reg_hours = ZERO
    total_ot_hours = ZERO
    regular_pay = ZERO
    overtime_pay = ZERO
    holiday_premium = ZERO

    for day, hours in daily_hours(snapshot, employee_id, period).items():
        regular_hours, overtime_hours = split_hours(hours)
        holiday = snapshot.holidays.classify(day)

        if holiday.is_holiday:
            multiplier = holiday.multiplier
            regular_pay += regular_hours * hourly_rate * multiplier
            holiday_premium += regular_hours * hourly_rate * (multiplier - 1)
            overtime_pay += overtime_hours * hourly_rate * ot_rate
            holiday_premium += overtime_hours * hourly_rate * (multiplier - 1)
            logger.debug("%s is a %s holiday (x%s) for employee %s",
                         day.isoformat(), holiday.kind.value, multiplier, employee_id)
        else:
            regular_pay += regular_hours * hourly_rate
            overtime_pay += overtime_hours * hourly_rate * ot_rate

        total_reg_hours += regular_hours
        total_ot_hours += overtime_hours

    premium_cap = (total_reg_hours + total_ot_hours) * hourly_rate * HOLIDAY_PREMIUM_CAP
    if holiday_premium > premium_cap:
        raise CalculationFault(
            f"Holiday premium {holiday_premium.quantize(CENTS)} exceeds the allowed maximum "
            f"{premium_cap.quantize(CENTS)} for employee {employee_id}",
            employee_id=str(employee_id),
        )

    regular_pay = regular_pay.quantize(CENTS)
    overtime_pay = overtime_pay.quantize(CENTS)
    breakdown = PayBreakdown(
        employee_id=str(employee_id),
        period=period,
        hourly_rate=hourly_rate,
        night_shift=bool(night_shift),
        regular_hours=total_reg_hours.quantize(CENTS),
        overtime_hours=total_ot_hours.quantize(CENTS),
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        holiday_premium=holiday_premium.quantize(CENTS),
        gross=regular_pay + overtime_pay,
    )
    logger.debug("Gross for employee %s, %s-%02d %s half: %s",
                 employee_id, period.year, period.month, period.half.value, breakdown.gross)
    return breakdown


class GrossWage:
    """Gross wage of one employee for one half of a month.

    Inputs are checked when the object is built so that a bad request fails
    before any attendance is read. The hourly rate comes from the roster
    unless one is passed in.
    """

    def __init__(self, snapshot, employee_id, year, month, first_half=True,
                 shift_start=None, night_shift=False, hourly_rate=None):
        if employee_id is None or not str(employee_id).strip():
            raise InvalidArgument("Employee ID must not be empty")
        if not isinstance(month, int) or not 1 <= month <= 12:
            raise InvalidArgument(f"Month must be between 1 and 12, got {month!r}")
        if year != snapshot.payroll_year:
            raise InvalidArgument(
                f"Year {year} is not supported; payroll data is loaded for {snapshot.payroll_year}",
                year=year,
            )
        if shift_start is None:
            raise InvalidArgument("Shift start time is required")

        self.snapshot = snapshot
        self.employee_id = str(employee_id).strip()
        self.period = PayPeriod.of(year, month, first_half)
        self.shift_start = shift_start
        self.night_shift = bool(night_shift)
        self._hourly_rate = hourly_rate
        self._breakdown = None

    @property
    def employee(self):
        return self.snapshot.find_employee(self.employee_id)

    @property
    def hourly_rate(self):
        if self._hourly_rate is None:
            self._hourly_rate = self.employee.hourly_rate
        return to_decimal(self._hourly_rate)

    def calculate(self):
        self._breakdown = compute_gross(
            self.snapshot, self.employee_id, self.hourly_rate, self.period, self.night_shift
        )
        return self._breakdown

    @property
    def breakdown(self):
        if self._breakdown is None:
            return self.calculate()
        return self._breakdown

    @property
    def gross(self):
        return self.breakdown.gross

    @property
    def hours_worked(self):
        return self.breakdown.hours_worked


# --- DEDUCTIONS AND NET WAGE ---
def compute_deductions(snapshot, breakdown, shift_start=None, late_grace_minutes=None,
                       tax_table=None, deductions=None):
    """Runs the registered deductions on a gross breakdown, then withholding tax."""
    inputs = DeductionInputs(
        snapshot=snapshot,
        employee_id=breakdown.employee_id,
        hourly_rate=breakdown.hourly_rate,
        period=breakdown.period,
        gross=breakdown.gross,
        shift_start=shift_start,
        late_grace_minutes=late_grace_minutes,
    )
    amounts = run_deductions(inputs, deductions if deductions is not None else DEDUCTIONS)

    statutory = sum((amounts.get(name, ZERO) for name in STATUTORY_DEDUCTIONS), ZERO)
    taxable_income = breakdown.gross - statutory
    withholding_tax = compute_withholding_tax(
        taxable_income, tax_table if tax_table is not None else snapshot.tax_table
    )

    return DeductionSet(
        social_insurance=amounts.get('social_insurance', ZERO),
        health_insurance=amounts.get('health_insurance', ZERO),
        housing_fund=amounts.get('housing_fund', ZERO),
        tardiness_penalty=amounts.get('tardiness_penalty', ZERO),
        withholding_tax=withholding_tax,
        taxable_income=taxable_income.quantize(CENTS),
    )


def compute_net(gross, hours_worked, deductions, breakdown=None):
    net = to_decimal(gross) - deductions.total_deductions
    return NetPay(
        gross=to_decimal(gross),
        hours_worked=to_decimal(hours_worked),
        deductions=deductions,
        net=net.quantize(CENTS),
        breakdown=breakdown,
    )


class NetWage:
    """Net wage built on a GrossWage: gross minus contributions, late penalty and tax."""

    def __init__(self, gross_wage, late_grace_minutes=None, tax_table=None, deductions=None):
        self.gross_wage = gross_wage
        self.late_grace_minutes = late_grace_minutes
        self.tax_table = tax_table
        self.deductions_registry = deductions
        self._result = None

    def calculate(self):
        breakdown = self.gross_wage.breakdown
        deductions = compute_deductions(
            self.gross_wage.snapshot,
            breakdown,
            shift_start=self.gross_wage.shift_start,
            late_grace_minutes=self.late_grace_minutes,
            tax_table=self.tax_table,
            deductions=self.deductions_registry,
        )
        self._result = compute_net(breakdown.gross, breakdown.hours_worked, deductions, breakdown)
        return self._result

    @property
    def result(self):
        if self._result is None:
            return self.calculate()
        return self._result

    @property
    def deductions(self):
        return self.result.deductions

    @property
    def net(self):
        return self.result.net

    @property
    def taxable_income(self):
        return self.deductions.taxable_income


# --- MAIN PAYROLL CALCULATOR ---
def calculate_payroll_for_employee(snapshot, employee_id, year, month, shift_start,
                                   night_shift=False, late_grace_minutes=None):
    """Payslip data for both halves of a month, as the payroll officer reviews it.

    Each half charges only its own late arrivals, so a month's tardiness is
    deducted once across the payslip.
    """
    employee = snapshot.find_employee(employee_id)
    halves = {}
    for label, first_half in (('first_half', True), ('second_half', False)):
        gross_wage = GrossWage(
            snapshot, employee_id, year, month,
            first_half=first_half, shift_start=shift_start, night_shift=night_shift,
            hourly_rate=employee.hourly_rate,
        )
        halves[label] = NetWage(gross_wage, late_grace_minutes=late_grace_minutes,
                                deductions=PAYSLIP_DEDUCTIONS).calculate()

    return {
        'employee_id': employee.employee_id,
        'employee_name': employee.display_name,
        'hourly_rate': str(employee.hourly_rate),
        'year': year,
        'month': month,
        'first_half': halves['first_half'].to_dict(),
        'second_half': halves['second_half'].to_dict(),
    }
