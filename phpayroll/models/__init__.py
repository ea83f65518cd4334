# phpayroll/models/__init__.py

from .records import (
    AttendancePunch,
    CompensationBracket,
    DeductionSet,
    HolidayClass,
    HolidayKind,
    HolidaySpec,
    HoursSummary,
    NetPay,
    PayBreakdown,
    PayPeriod,
    PayPeriodHalf,
    RosterEntry,
    TaxBracket,
)

__all__ = [
    'AttendancePunch',
    'CompensationBracket',
    'DeductionSet',
    'HolidayClass',
    'HolidayKind',
    'HolidaySpec',
    'HoursSummary',
    'NetPay',
    'PayBreakdown',
    'PayPeriod',
    'PayPeriodHalf',
    'RosterEntry',
    'TaxBracket',
]
