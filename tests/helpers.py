"""
Builders shared by the payroll engine tests.
"""

from datetime import date, time
from decimal import Decimal

from phpayroll.models.records import (
    AttendancePunch,
    CompensationBracket,
    HolidayKind,
    HolidaySpec,
    PayPeriod,
    RosterEntry,
)
from phpayroll.payroll.deductions import DeductionInputs
from phpayroll.snapshot import PayrollSnapshot

PAYROLL_YEAR = 2022
SHIFT_START = time(8, 0)

# Coarse SSS table: ranges are (lower, upper] with an open-ended top bracket
SSS_TABLE = [
    CompensationBracket(Decimal('0'), Decimal('3250.00'), Decimal('135.00')),
    CompensationBracket(Decimal('3250.00'), Decimal('3750.00'), Decimal('157.50')),
    CompensationBracket(Decimal('3750.00'), Decimal('4250.00'), Decimal('180.00')),
    CompensationBracket(Decimal('4250.00'), Decimal('24750.00'), Decimal('900.00')),
    CompensationBracket(Decimal('24750.00'), None, Decimal('1125.00')),
]

ROSTER = [
    RosterEntry('10001', 'Manuel', 'Garcia', Decimal('100.00')),
    RosterEntry('10002', 'Antonio', 'Lim', Decimal('480.00')),
    RosterEntry('10003', 'Bianca', 'Aquino', Decimal('1000.00')),
]


def t(text):
    hour, minute = text.split(':')
    return time(int(hour), int(minute))


def d(text):
    return date.fromisoformat(text)


def punch(employee_id, day, time_in, time_out):
    return AttendancePunch(
        employee_id=employee_id,
        date=d(day),
        time_in=t(time_in),
        time_out=t(time_out),
    )


def holiday(day, multiplier, kind=HolidayKind.REGULAR, name=''):
    return HolidaySpec(date=d(day), kind=kind, multiplier=Decimal(str(multiplier)), name=name)


def build_snapshot(punches=(), holidays=(), roster=None, contribution_table=None,
                   payroll_year=PAYROLL_YEAR, tax_table=None):
    return PayrollSnapshot.build(
        payroll_year,
        punches=punches,
        roster=ROSTER if roster is None else roster,
        holidays=holidays,
        contribution_table=SSS_TABLE if contribution_table is None else contribution_table,
        tax_table=tax_table,
    )


def deduction_inputs(gross='0', snapshot=None, employee_id='10001', hourly_rate='100',
                     period=None, shift_start=SHIFT_START, late_grace_minutes=10):
    return DeductionInputs(
        snapshot=snapshot if snapshot is not None else build_snapshot(),
        employee_id=employee_id,
        hourly_rate=Decimal(hourly_rate),
        period=period if period is not None else PayPeriod.of(PAYROLL_YEAR, 6, True),
        gross=Decimal(gross),
        shift_start=shift_start,
        late_grace_minutes=late_grace_minutes,
    )
