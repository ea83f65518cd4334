# phpayroll/payroll/holidays.py

import logging
from types import MappingProxyType

from phpayroll.errors import InvalidArgument
from phpayroll.models.records import NOT_A_HOLIDAY, HolidayClass, to_decimal

logger = logging.getLogger(__name__)


class HolidayCalendar:
    """Read-only date -> holiday lookup built from the loaded holiday table.

    The calendar knows nothing about pay rules; multipliers are whatever the
    table says and the wage engine applies them as given.
    """

    def __init__(self, holidays=()):
        table = {}
        for spec in holidays:
            if spec.date in table:
                raise InvalidArgument(f"Duplicate holiday entry for {spec.date.isoformat()}")
            table[spec.date] = spec
        self._table = MappingProxyType(table)
        logger.debug("Holiday calendar loaded with %d entries", len(table))

    def __len__(self):
        return len(self._table)

    def __contains__(self, day):
        return day in self._table

    def __iter__(self):
        return iter(sorted(self._table.values(), key=lambda spec: spec.date))

    def get(self, day):
        return self._table.get(day)

    def classify(self, day):
        spec = self._table.get(day)
        if spec is None:
            return NOT_A_HOLIDAY
        return HolidayClass(spec.kind, to_decimal(spec.multiplier))

    def in_range(self, start, end):
        return [spec for spec in self if start <= spec.date <= end]
