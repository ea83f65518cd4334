# phpayroll/models/tables.py

from decimal import Decimal

from phpayroll import db
from phpayroll.models.records import (
    AttendancePunch, CompensationBracket, HolidayKind, HolidaySpec, RosterEntry, to_decimal
)


class Employee(db.Model):
    __tablename__ = 'employee'
    id = db.Column(db.Integer, primary_key=True)
    employee_id_number = db.Column(db.String(20), index=True, unique=True, nullable=False)
    first_name = db.Column(db.String(64), nullable=False)
    last_name = db.Column(db.String(64), nullable=False)
    hourly_rate = db.Column(db.Numeric(10, 2), nullable=False)

    def to_record(self):
        return RosterEntry(
            employee_id=self.employee_id_number,
            first_name=self.first_name,
            last_name=self.last_name,
            hourly_rate=to_decimal(self.hourly_rate),
        )

    def __repr__(self):
        return f'<Employee {self.employee_id_number}>'


class AttendanceRecord(db.Model):
    __tablename__ = 'attendance_record'

    id = db.Column(db.Integer, primary_key=True)
    # Kept exactly as read from the source sheet, e.g. '10001.0'
    employee_id_number = db.Column(db.String(20), index=True, nullable=False)
    first_name = db.Column(db.String(64), default='')
    last_name = db.Column(db.String(64), default='')
    date = db.Column(db.Date, index=True, nullable=False)
    time_in = db.Column(db.Time, nullable=False)
    time_out = db.Column(db.Time, nullable=False)

    @classmethod
    def from_record(cls, punch):
        return cls(
            employee_id_number=punch.employee_id,
            first_name=punch.first_name,
            last_name=punch.last_name,
            date=punch.date,
            time_in=punch.time_in,
            time_out=punch.time_out,
        )

    def to_record(self):
        return AttendancePunch(
            employee_id=self.employee_id_number,
            date=self.date,
            time_in=self.time_in,
            time_out=self.time_out,
            first_name=self.first_name or '',
            last_name=self.last_name or '',
        )

    def __repr__(self):
        return f'<AttendanceRecord {self.employee_id_number} on {self.date}>'


class Holiday(db.Model):
    __tablename__ = 'holiday'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False, default='')
    date = db.Column(db.Date, nullable=False, unique=True)
    type = db.Column(db.String(20), nullable=False, default='Regular')
    multiplier = db.Column(db.Numeric(4, 2), nullable=False, default=Decimal('1.00'))

    @classmethod
    def from_record(cls, spec):
        return cls(name=spec.name, date=spec.date, type=spec.kind.value, multiplier=spec.multiplier)

    def to_record(self):
        return HolidaySpec(
            date=self.date,
            kind=HolidayKind.parse(self.type),
            multiplier=to_decimal(self.multiplier),
            name=self.name or '',
        )

    def __repr__(self):
        return f'<Holiday {self.name} on {self.date}>'


class ContributionBracket(db.Model):
    __tablename__ = 'contribution_bracket'
    id = db.Column(db.Integer, primary_key=True)
    # Table order is significant: the first matching bracket wins
    position = db.Column(db.Integer, nullable=False, index=True)
    lower_bound = db.Column(db.Numeric(12, 2), nullable=False)
    upper_bound = db.Column(db.Numeric(12, 2), nullable=True)
    contribution = db.Column(db.Numeric(10, 2), nullable=False)

    @classmethod
    def from_record(cls, bracket, position):
        return cls(
            position=position,
            lower_bound=bracket.lower,
            upper_bound=bracket.upper,
            contribution=bracket.contribution,
        )

    def to_record(self):
        return CompensationBracket(
            lower=to_decimal(self.lower_bound),
            upper=None if self.upper_bound is None else to_decimal(self.upper_bound),
            contribution=to_decimal(self.contribution),
        )

    def __repr__(self):
        return f'<ContributionBracket {self.lower_bound}-{self.upper_bound}>'
