"""
Tests for reading source sheets into payroll records.
"""

from datetime import date, datetime, time
from decimal import Decimal

import openpyxl
import pytest

from phpayroll.attendance import loader
from phpayroll.errors import RecordFormatError
from phpayroll.models.records import HolidayKind


def write_sheet(path, header, rows):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.append(header)
    for row in rows:
        sheet.append(row)
    workbook.save(path)
    return str(path)


@pytest.mark.parametrize('text, expected', [
    ('3250-3749.99', (Decimal('3250'), Decimal('3749.99'))),
    ('1,000 - 3,250', (Decimal('1000'), Decimal('3250'))),
    ('24750-Over', (Decimal('24750'), None)),
    ('24750-', (Decimal('24750'), None)),
])
def test_parse_compensation_range(text, expected):
    assert loader.parse_compensation_range(text) == expected


@pytest.mark.parametrize('text', ['3250', 'abc-def', '4000-3000', ''])
def test_parse_compensation_range_rejects_malformed(text):
    with pytest.raises(RecordFormatError):
        loader.parse_compensation_range(text)


def test_numeric_ids_keep_the_spreadsheet_suffix():
    assert loader.cell_as_string(10001.0) == '10001.0'
    assert loader.cell_as_string(' 10001 ') == '10001'
    assert loader.cell_as_string(None) == ''


def test_parse_date_and_time_accept_text_and_native_cells():
    assert loader.parse_date('06/03/2022') == date(2022, 6, 3)
    assert loader.parse_date(datetime(2022, 6, 3, 0, 0)) == date(2022, 6, 3)
    assert loader.parse_time('8:05') == time(8, 5)
    assert loader.parse_time(time(8, 5, 30)) == time(8, 5)


def test_load_attendance(tmp_path):
    path = write_sheet(tmp_path / 'attendance.xlsx',
                       ['Employee #', 'First Name', 'Last Name', 'Date', 'Log In', 'Log Out'], [
                           ['10001', 'Manuel', 'Garcia', '06/03/2022', '8:05', '17:00'],
                           [None, None, None, None, None, None],
                           ['10002', 'Antonio', 'Lim', datetime(2022, 6, 3), time(22, 0), time(6, 0)],
                       ])
    punches = loader.load_attendance(path)

    assert len(punches) == 2
    assert punches[0].employee_id == '10001'
    assert punches[0].name == 'Manuel Garcia'
    assert punches[0].time_in == time(8, 5)
    assert punches[1].date == date(2022, 6, 3)
    assert punches[1].time_out == time(6, 0)


def test_malformed_attendance_row_reports_its_position(tmp_path):
    path = write_sheet(tmp_path / 'attendance.xlsx',
                       ['Employee #', 'First Name', 'Last Name', 'Date', 'Log In', 'Log Out'], [
                           ['10001', 'Manuel', 'Garcia', '06/03/2022', '8:05', '17:00'],
                           ['10001', 'Manuel', 'Garcia', '2022-06-04', '8:05', '17:00'],
                       ])
    with pytest.raises(RecordFormatError) as excinfo:
        loader.load_attendance(path)
    assert excinfo.value.details['row'] == 3
    assert excinfo.value.details['file'] == path


def test_load_roster(tmp_path):
    path = write_sheet(tmp_path / 'roster.xlsx', ['Employee #', 'Last Name', 'First Name', 'Hourly Rate'], [
        ['10001', 'Garcia', 'Manuel', '535.71'],
        ['10002', 'Lim', 'Antonio', '1,200.50'],
    ])
    roster = loader.load_roster(path)

    assert roster[0].display_name == 'Garcia, Manuel'
    assert roster[0].hourly_rate == Decimal('535.71')
    assert roster[1].hourly_rate == Decimal('1200.50')


def test_load_contribution_table_keeps_sheet_order(tmp_path):
    path = write_sheet(tmp_path / 'sss.xlsx', ['Compensation Range', 'Contribution'], [
        ['0-3250', '135.00'],
        ['3250-3750', '157.50'],
        ['24750-Over', '1125.00'],
    ])
    table = loader.load_contribution_table(path)

    assert [bracket.contribution for bracket in table] == [
        Decimal('135.00'), Decimal('157.50'), Decimal('1125.00'),
    ]
    assert table[-1].upper is None


def test_load_holidays(tmp_path):
    path = write_sheet(tmp_path / 'holidays.xlsx', ['Date', 'Type', 'Multiplier', 'Name'], [
        ['06/12/2022', 'Regular', '2.0', 'Independence Day'],
        ['08/21/2022', 'Special', '1.3', 'Ninoy Aquino Day'],
    ])
    holidays = loader.load_holidays(path)

    assert holidays[0].kind is HolidayKind.REGULAR
    assert holidays[0].multiplier == Decimal('2.0')
    assert holidays[1].name == 'Ninoy Aquino Day'


def test_holiday_row_with_unknown_type(tmp_path):
    path = write_sheet(tmp_path / 'holidays.xlsx', ['Date', 'Type', 'Multiplier'], [
        ['06/12/2022', 'Lunar', '2.0'],
    ])
    with pytest.raises(RecordFormatError) as excinfo:
        loader.load_holidays(path)
    assert excinfo.value.details['row'] == 2
