# phpayroll/attendance/loader.py

import logging
from datetime import date, datetime, time
from decimal import Decimal

import openpyxl

from phpayroll.errors import InvalidArgument, RecordFormatError
from phpayroll.models.records import (
    AttendancePunch, CompensationBracket, HolidayKind, HolidaySpec, RosterEntry, to_decimal
)

logger = logging.getLogger(__name__)

DATE_FORMAT = '%m/%d/%Y'
TIME_FORMAT = '%H:%M'

# --- HELPER: SOURCE TABLE PARSING ---
OPEN_ENDED_MARKERS = ('', 'over', 'above', 'and over')


def parse_compensation_range(text):
    """Parses '3250-3749.99' into (lower, upper); '24750-Over' gives an open upper bound."""
    text = str(text or '').replace(',', '').strip()
    parts = text.split('-')
    if len(parts) != 2:
        raise RecordFormatError(f"Invalid compensation range format: {text!r}")
    lower_text, upper_text = parts[0].strip(), parts[1].strip()
    try:
        lower = Decimal(lower_text)
        upper = None if upper_text.lower() in OPEN_ENDED_MARKERS else Decimal(upper_text)
    except ArithmeticError as e:
        raise RecordFormatError(f"Invalid numeric format in compensation range: {text!r}") from e
    if upper is not None and upper < lower:
        raise RecordFormatError(f"Compensation range upper bound below lower bound: {text!r}")
    return lower, upper


# --- CELL PARSING ---
def cell_as_string(value):
    """Text of a cell; numeric ids come through as '10001.0' the way the sheet stores them."""
    if value is None:
        return ''
    if isinstance(value, float):
        return repr(value)
    return str(value).strip()


def parse_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = cell_as_string(value)
    if not text:
        raise RecordFormatError("Date cell is empty.")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise RecordFormatError(f"Invalid date {text!r}; expected MM/dd/yyyy") from e


def parse_time(value):
    if isinstance(value, datetime):
        return value.time().replace(second=0, microsecond=0)
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    text = cell_as_string(value)
    if not text:
        raise RecordFormatError("Time cell is empty.")
    try:
        return datetime.strptime(text, TIME_FORMAT).time()
    except ValueError as e:
        raise RecordFormatError(f"Invalid time {text!r}; expected H:mm") from e


def parse_punch_row(row):
    """(id, first name, last name, date, time in, time out) -> AttendancePunch."""
    if len(row) < 6:
        raise RecordFormatError("Insufficient data to create an attendance record", columns=len(row))
    employee_id = cell_as_string(row[0])
    if not employee_id:
        raise RecordFormatError("Attendance row has no employee ID")
    return AttendancePunch(
        employee_id=employee_id,
        first_name=cell_as_string(row[1]),
        last_name=cell_as_string(row[2]),
        date=parse_date(row[3]),
        time_in=parse_time(row[4]),
        time_out=parse_time(row[5]),
    )


def parse_roster_row(row):
    """(id, last name, first name, hourly rate) -> RosterEntry."""
    if len(row) < 4:
        raise RecordFormatError("Insufficient data to create a roster entry", columns=len(row))
    try:
        hourly_rate = to_decimal(cell_as_string(row[3]).replace(',', ''))
    except ArithmeticError as e:
        raise RecordFormatError(f"Invalid hourly rate {row[3]!r}") from e
    return RosterEntry(
        employee_id=cell_as_string(row[0]),
        last_name=cell_as_string(row[1]),
        first_name=cell_as_string(row[2]),
        hourly_rate=hourly_rate,
    )


def parse_contribution_row(row):
    """('lower-upper', contribution) -> CompensationBracket."""
    if len(row) < 2:
        raise RecordFormatError("Insufficient data to create a contribution bracket", columns=len(row))
    lower, upper = parse_compensation_range(row[0])
    try:
        contribution = to_decimal(cell_as_string(row[1]).replace(',', ''))
    except ArithmeticError as e:
        raise RecordFormatError(f"Invalid contribution amount {row[1]!r}") from e
    return CompensationBracket(lower=lower, upper=upper, contribution=contribution)


def parse_holiday_row(row):
    """(date, kind, multiplier[, name]) -> HolidaySpec."""
    if len(row) < 3:
        raise RecordFormatError("Insufficient data to create a holiday", columns=len(row))
    try:
        return HolidaySpec(
            date=parse_date(row[0]),
            kind=HolidayKind.parse(row[1]),
            multiplier=to_decimal(cell_as_string(row[2])),
            name=cell_as_string(row[3]) if len(row) > 3 else '',
        )
    except (InvalidArgument, ArithmeticError) as e:
        raise RecordFormatError(f"Invalid holiday row: {e}") from e


# --- WORKBOOK READING ---
def iter_sheet_rows(file_path):
    """Yields (row number, values) from the first sheet, skipping the header and blank rows."""
    workbook = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        for row_number, values in enumerate(sheet.iter_rows(min_row=2, values_only=True), start=2):
            if values is None or all(v is None or str(v).strip() == '' for v in values):
                continue
            yield row_number, values
    finally:
        workbook.close()


def _load(file_path, parse_row, label):
    records = []
    for row_number, values in iter_sheet_rows(file_path):
        try:
            records.append(parse_row(values))
        except RecordFormatError as e:
            e.details.setdefault('row', row_number)
            e.details.setdefault('file', str(file_path))
            raise
    logger.info("Loaded %d %s from %s", len(records), label, file_path)
    return records


def load_attendance(file_path):
    return _load(file_path, parse_punch_row, 'attendance records')


def load_roster(file_path):
    return _load(file_path, parse_roster_row, 'employees')


def load_contribution_table(file_path):
    return _load(file_path, parse_contribution_row, 'contribution brackets')


def load_holidays(file_path):
    return _load(file_path, parse_holiday_row, 'holidays')
