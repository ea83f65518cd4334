# run.py

import os
from phpayroll import create_app, db
from phpayroll.models.tables import AttendanceRecord, ContributionBracket, Employee, Holiday
from phpayroll.payroll.calculator import GrossWage, NetWage


app = create_app(os.environ.get('FLASK_ENV', 'default'))

@app.shell_context_processor
def make_shell_context():
    """Adds the database, payroll tables, the session snapshot and the wage engines to the Flask shell."""
    return dict(
        db=db, Employee=Employee, AttendanceRecord=AttendanceRecord, Holiday=Holiday,
        ContributionBracket=ContributionBracket, GrossWage=GrossWage, NetWage=NetWage,
        snapshot=app.extensions['payroll_snapshot'],
    )

if __name__ == '__main__':
    app.run()
