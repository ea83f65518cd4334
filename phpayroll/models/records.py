# phpayroll/models/records.py

import calendar
import enum
from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from typing import Optional

from phpayroll.errors import InvalidArgument

CENTS = Decimal('0.01')
ZERO = Decimal('0.00')


def to_decimal(value):
    """Coerces ints, floats and numeric strings into Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class HolidayKind(enum.Enum):
    NONE = 'None'
    REGULAR = 'Regular'
    SPECIAL = 'Special'

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        text = str(value or '').strip().lower()
        for kind in cls:
            if kind.value.lower() == text:
                return kind
        raise InvalidArgument(f"Unknown holiday kind: {value!r}")


class PayPeriodHalf(enum.Enum):
    FIRST = 'first'
    SECOND = 'second'


# --- SOURCE RECORDS ---

@dataclass(frozen=True)
class AttendancePunch:
    """One day's time-in/time-out for an employee, as read from the source."""
    employee_id: str
    date: date
    time_in: time
    time_out: time
    first_name: str = ''
    last_name: str = ''

    @property
    def name(self):
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class RosterEntry:
    employee_id: str
    first_name: str
    last_name: str
    hourly_rate: Decimal

    @property
    def display_name(self):
        return f"{self.last_name}, {self.first_name}"


@dataclass(frozen=True)
class HolidaySpec:
    date: date
    kind: HolidayKind
    multiplier: Decimal
    name: str = ''

    def __post_init__(self):
        if self.kind is HolidayKind.NONE:
            raise InvalidArgument(f"Holiday on {self.date} must be Regular or Special")
        if to_decimal(self.multiplier) < 1:
            raise InvalidArgument(f"Holiday multiplier for {self.date} must be at least 1.0",
                                  multiplier=str(self.multiplier))


@dataclass(frozen=True)
class HolidayClass:
    kind: HolidayKind
    multiplier: Decimal

    @property
    def is_holiday(self):
        return self.kind is not HolidayKind.NONE


NOT_A_HOLIDAY = HolidayClass(HolidayKind.NONE, Decimal('1.0'))


@dataclass(frozen=True)
class CompensationBracket:
    """Range (lower, upper] of gross wage mapped to a fixed contribution. upper=None is open-ended."""
    lower: Decimal
    upper: Optional[Decimal]
    contribution: Decimal

    def matches(self, gross):
        if gross <= self.lower:
            return False
        return self.upper is None or gross <= self.upper


@dataclass(frozen=True)
class TaxBracket:
    """Withholding tax row: base_tax + rate_percent of the excess over excess_over, up to ceiling."""
    ceiling: Optional[Decimal]
    excess_over: Decimal
    base_tax: Decimal
    rate_percent: Decimal


@dataclass(frozen=True)
class PayPeriod:
    year: int
    month: int
    half: PayPeriodHalf = PayPeriodHalf.FIRST

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise InvalidArgument(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def of(cls, year, month, first_half=True):
        return cls(year, month, PayPeriodHalf.FIRST if first_half else PayPeriodHalf.SECOND)

    @property
    def is_first_half(self):
        return self.half is PayPeriodHalf.FIRST

    @property
    def start(self):
        return date(self.year, self.month, 1 if self.is_first_half else 16)

    @property
    def end(self):
        if self.is_first_half:
            return date(self.year, self.month, 15)
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def contains(self, day):
        return self.start <= day <= self.end

    def to_dict(self):
        return {
            'year': self.year,
            'month': self.month,
            'half': self.half.value,
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
        }


# --- DERIVED RESULTS ---

@dataclass(frozen=True)
class HoursSummary:
    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO

    @property
    def total_hours(self):
        return self.regular_hours + self.overtime_hours

    def to_dict(self):
        return {
            'regular_hours': str(self.regular_hours),
            'overtime_hours': str(self.overtime_hours),
            'total_hours': str(self.total_hours),
        }


@dataclass(frozen=True)
class PayBreakdown:
    employee_id: str
    period: PayPeriod
    hourly_rate: Decimal
    night_shift: bool
    regular_hours: Decimal
    overtime_hours: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    holiday_premium: Decimal
    gross: Decimal

    @property
    def hours_worked(self):
        return self.regular_hours + self.overtime_hours

    def to_dict(self):
        return {
            'employee_id': self.employee_id,
            'period': self.period.to_dict(),
            'hourly_rate': str(self.hourly_rate),
            'night_shift': self.night_shift,
            'regular_hours': str(self.regular_hours),
            'overtime_hours': str(self.overtime_hours),
            'hours_worked': str(self.hours_worked),
            'regular_pay': str(self.regular_pay),
            'overtime_pay': str(self.overtime_pay),
            'holiday_premium': str(self.holiday_premium),
            'gross': str(self.gross),
        }


@dataclass(frozen=True)
class DeductionSet:
    social_insurance: Decimal
    health_insurance: Decimal
    housing_fund: Decimal
    tardiness_penalty: Decimal
    withholding_tax: Decimal
    taxable_income: Decimal = ZERO

    @property
    def statutory_contributions(self):
        return self.social_insurance + self.health_insurance + self.housing_fund

    @property
    def total_deductions(self):
        return self.statutory_contributions + self.tardiness_penalty + self.withholding_tax

    def to_dict(self):
        return {
            'social_insurance': str(self.social_insurance),
            'health_insurance': str(self.health_insurance),
            'housing_fund': str(self.housing_fund),
            'tardiness_penalty': str(self.tardiness_penalty),
            'withholding_tax': str(self.withholding_tax),
            'taxable_income': str(self.taxable_income),
            'total_deductions': str(self.total_deductions),
        }


@dataclass(frozen=True)
class NetPay:
    gross: Decimal
    hours_worked: Decimal
    deductions: DeductionSet
    net: Decimal
    breakdown: Optional[PayBreakdown] = field(default=None, compare=False)

    def to_dict(self):
        payload = {
            'gross': str(self.gross),
            'hours_worked': str(self.hours_worked),
            'deductions': self.deductions.to_dict(),
            'net': str(self.net),
        }
        if self.breakdown is not None:
            payload['breakdown'] = self.breakdown.to_dict()
        return payload
