# phpayroll/cli.py

import click
from flask import current_app
from flask.cli import AppGroup

from phpayroll import db
from phpayroll.attendance import loader
from phpayroll.errors import PayrollError
from phpayroll.models.tables import AttendanceRecord, ContributionBracket, Employee, Holiday

payroll_cli = AppGroup('payroll', help='Manage the payroll lookup tables and attendance data.')


def _replace_table(model, rows):
    """Swaps the whole table for the given rows in one transaction, then reloads the snapshot."""
    try:
        model.query.delete()
        db.session.add_all(rows)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.extensions['payroll_snapshot'].reload()
    click.echo(f"Imported {len(rows)} rows into {model.__tablename__}.")


def _read(load, file_path):
    try:
        return load(file_path)
    except PayrollError as e:
        raise click.ClickException(f"{e.message} {e.details}") from e


@payroll_cli.command('init-db')
def init_db():
    """Create the payroll tables."""
    db.create_all()
    click.echo('Payroll tables created.')


@payroll_cli.command('import-attendance')
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
def import_attendance(file_path):
    """Replace attendance punches with the rows of an .xlsx sheet."""
    punches = _read(loader.load_attendance, file_path)
    _replace_table(AttendanceRecord, [AttendanceRecord.from_record(p) for p in punches])


@payroll_cli.command('import-roster')
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
def import_roster(file_path):
    """Replace the employee roster with the rows of an .xlsx sheet."""
    entries = _read(loader.load_roster, file_path)
    _replace_table(Employee, [
        Employee(
            employee_id_number=entry.employee_id,
            first_name=entry.first_name,
            last_name=entry.last_name,
            hourly_rate=entry.hourly_rate,
        )
        for entry in entries
    ])


@payroll_cli.command('import-contributions')
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
def import_contributions(file_path):
    """Replace the SSS contribution table; sheet order is lookup order."""
    brackets = _read(loader.load_contribution_table, file_path)
    _replace_table(ContributionBracket, [
        ContributionBracket.from_record(bracket, position)
        for position, bracket in enumerate(brackets)
    ])


@payroll_cli.command('import-holidays')
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
def import_holidays(file_path):
    """Replace the holiday calendar with the rows of an .xlsx sheet."""
    holidays = _read(loader.load_holidays, file_path)
    _replace_table(Holiday, [Holiday.from_record(spec) for spec in holidays])
