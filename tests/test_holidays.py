"""
Tests for the holiday calendar lookup.
"""

from decimal import Decimal

import pytest

from phpayroll.errors import InvalidArgument
from phpayroll.models.records import HolidayKind, HolidaySpec
from phpayroll.payroll.holidays import HolidayCalendar
from tests.helpers import d, holiday


@pytest.fixture
def calendar():
    return HolidayCalendar([
        holiday('2022-06-12', '2.0', name='Independence Day'),
        holiday('2022-08-21', '1.3', kind=HolidayKind.SPECIAL, name='Ninoy Aquino Day'),
    ])


def test_absent_date_is_not_a_holiday(calendar):
    result = calendar.classify(d('2022-06-13'))
    assert result.kind is HolidayKind.NONE
    assert result.multiplier == Decimal('1.0')
    assert not result.is_holiday


def test_multiplier_comes_from_the_table(calendar):
    regular = calendar.classify(d('2022-06-12'))
    special = calendar.classify(d('2022-08-21'))
    assert regular.kind is HolidayKind.REGULAR and regular.multiplier == Decimal('2.0')
    assert special.kind is HolidayKind.SPECIAL and special.multiplier == Decimal('1.3')


def test_duplicate_dates_are_rejected():
    with pytest.raises(InvalidArgument):
        HolidayCalendar([holiday('2022-06-12', '2.0'), holiday('2022-06-12', '1.3')])


def test_multiplier_below_one_is_rejected():
    with pytest.raises(InvalidArgument):
        HolidaySpec(date=d('2022-06-12'), kind=HolidayKind.REGULAR, multiplier=Decimal('0.9'))


def test_range_query(calendar):
    assert [h.name for h in calendar.in_range(d('2022-06-01'), d('2022-06-30'))] == ['Independence Day']
    assert len(calendar) == 2
    assert d('2022-08-21') in calendar
    assert calendar.get(d('2022-08-21')).name == 'Ninoy Aquino Day'
    assert calendar.get(d('2022-08-22')) is None


@pytest.mark.parametrize('text, kind', [
    ('Regular', HolidayKind.REGULAR),
    (' special ', HolidayKind.SPECIAL),
])
def test_holiday_kind_parsing(text, kind):
    assert HolidayKind.parse(text) is kind


def test_unknown_holiday_kind():
    with pytest.raises(InvalidArgument):
        HolidayKind.parse('Bank')
