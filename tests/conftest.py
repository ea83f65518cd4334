"""
Global pytest configuration and fixtures
"""

import pytest

from phpayroll import create_app, db
from phpayroll.models.tables import AttendanceRecord, ContributionBracket, Employee, Holiday
from tests.helpers import ROSTER, SSS_TABLE, build_snapshot, d, holiday, t


@pytest.fixture
def snapshot():
    """Empty attendance with the default roster and SSS table"""
    return build_snapshot()


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def seeded_app(app):
    """Application whose tables hold a small June 2022 payroll"""
    for entry in ROSTER:
        db.session.add(Employee(
            employee_id_number=entry.employee_id,
            first_name=entry.first_name,
            last_name=entry.last_name,
            hourly_rate=entry.hourly_rate,
        ))
    for position, bracket in enumerate(SSS_TABLE):
        db.session.add(ContributionBracket.from_record(bracket, position))
    db.session.add(Holiday.from_record(holiday('2022-06-12', '1.3', name='Independence Day')))

    # Spreadsheet-style id with the numeric '.0' suffix
    rows = [
        ('10001.0', '2022-06-01', '08:00', '16:00'),
        ('10001.0', '2022-06-02', '08:00', '18:00'),
        ('10001.0', '2022-06-12', '08:00', '16:00'),
        ('10001.0', '2022-06-20', '08:25', '16:25'),
    ]
    for employee_id, day, time_in, time_out in rows:
        db.session.add(AttendanceRecord(
            employee_id_number=employee_id,
            first_name='Manuel',
            last_name='Garcia',
            date=d(day),
            time_in=t(time_in),
            time_out=t(time_out),
        ))
    db.session.commit()
    return app


@pytest.fixture
def client(seeded_app):
    return seeded_app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()
