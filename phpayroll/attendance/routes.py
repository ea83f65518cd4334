# phpayroll/attendance/routes.py

from flask import jsonify
from phpayroll.attendance import bp
from phpayroll.attendance.calculator import aggregate, daily_hours
from phpayroll.attendance.forms import PayPeriodForm, validated_query
from phpayroll.models.records import CENTS, PayPeriod
from phpayroll.snapshot import current_snapshot


@bp.route('/employees/<employee_id>/hours', methods=['GET'])
def employee_hours(employee_id):
    form = validated_query(PayPeriodForm)
    snapshot = current_snapshot()
    employee = snapshot.find_employee(employee_id)
    period = PayPeriod.of(form.year.data, form.month.data, form.first_half)

    summary = aggregate(snapshot, employee.employee_id, period)
    days = daily_hours(snapshot, employee.employee_id, period)
    return jsonify({
        'employee_id': employee.employee_id,
        'employee_name': employee.display_name,
        'period': period.to_dict(),
        'hours': summary.to_dict(),
        'days': [
            {'date': day.isoformat(), 'hours': str(hours.quantize(CENTS))}
            for day, hours in days.items()
        ],
    })
