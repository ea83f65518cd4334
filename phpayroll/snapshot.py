# phpayroll/snapshot.py

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType

from flask import current_app

from phpayroll.errors import EmployeeNotFound, InvalidArgument
from phpayroll.models.records import CompensationBracket, to_decimal

logger = logging.getLogger(__name__)


def normalize_employee_id(employee_id):
    """Strips whitespace and the '.0' suffix spreadsheets leave on numeric ids."""
    text = str(employee_id if employee_id is not None else '').strip()
    if text.endswith('.0'):
        text = text[:-2]
    return text


@dataclass(frozen=True)
class PayrollSnapshot:
    """Everything one calculation session reads, loaded once and never mutated."""
    payroll_year: int
    punches: tuple
    roster: MappingProxyType
    holidays: 'HolidayCalendar'
    contribution_table: tuple
    tax_table: tuple
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc), compare=False)

    @classmethod
    def build(cls, payroll_year, punches=(), roster=(), holidays=(),
              contribution_table=(), tax_table=None):
        # Dynamic import to avoid circular dependency with the payroll blueprint
        from phpayroll.payroll.holidays import HolidayCalendar
        from phpayroll.payroll.tax import build_tax_table

        if not isinstance(payroll_year, int) or payroll_year < 1:
            raise InvalidArgument(f"Invalid payroll year: {payroll_year!r}")

        roster_map = {}
        for entry in roster:
            key = normalize_employee_id(entry.employee_id)
            if key in roster_map:
                logger.warning("Duplicate roster entry for employee %s; keeping the first", key)
                continue
            roster_map[key] = entry

        brackets = tuple(
            CompensationBracket(to_decimal(b.lower),
                                None if b.upper is None else to_decimal(b.upper),
                                to_decimal(b.contribution))
            for b in contribution_table
        )
        outside_year = sum(1 for p in punches if p.date.year != payroll_year)
        if outside_year:
            logger.warning("%d attendance punches fall outside payroll year %d", outside_year, payroll_year)

        snapshot = cls(
            payroll_year=payroll_year,
            punches=tuple(punches),
            roster=MappingProxyType(roster_map),
            holidays=holidays if isinstance(holidays, HolidayCalendar) else HolidayCalendar(holidays),
            contribution_table=brackets,
            tax_table=build_tax_table(tax_table),
        )
        logger.info(
            "Payroll snapshot for %d loaded: %d punches, %d employees, %d holidays, %d contribution brackets",
            payroll_year, len(snapshot.punches), len(snapshot.roster), len(snapshot.holidays),
            len(snapshot.contribution_table)
        )
        return snapshot

    def find_employee(self, employee_id):
        entry = self.roster.get(normalize_employee_id(employee_id))
        if entry is None:
            raise EmployeeNotFound(f"Employee ID {employee_id} not found.", employee_id=str(employee_id))
        return entry


def load_snapshot_from_db(payroll_year, tax_table=None):
    """Reads the persisted tables into a fresh snapshot. Needs an application context."""
    from phpayroll.models.tables import AttendanceRecord, ContributionBracket, Employee, Holiday

    punches = [row.to_record() for row in AttendanceRecord.query.order_by(
        AttendanceRecord.date, AttendanceRecord.id).all()]
    roster = [row.to_record() for row in Employee.query.order_by(Employee.employee_id_number).all()]
    holidays = [row.to_record() for row in Holiday.query.order_by(Holiday.date).all()]
    brackets = [row.to_record() for row in ContributionBracket.query.order_by(
        ContributionBracket.position).all()]

    return PayrollSnapshot.build(
        payroll_year,
        punches=punches,
        roster=roster,
        holidays=holidays,
        contribution_table=brackets,
        tax_table=tax_table,
    )


class SnapshotStore:
    """Owns the load/reload lifecycle of the current snapshot.

    Calculations grab ``current()`` once and keep using that object; ``reload()``
    builds a complete replacement before swapping it in, so a reload never
    changes data underneath a running calculation.
    """

    def __init__(self, loader):
        self._loader = loader
        self._snapshot = None
        self._lock = threading.Lock()

    @property
    def loaded(self):
        return self._snapshot is not None

    def current(self):
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._loader()
            return self._snapshot

    def reload(self):
        snapshot = self._loader()
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def replace(self, snapshot):
        with self._lock:
            self._snapshot = snapshot
        return snapshot


def current_snapshot():
    """The snapshot of the running application's session."""
    return current_app.extensions['payroll_snapshot'].current()
