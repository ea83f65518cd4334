# phpayroll/payroll/routes.py

from flask import current_app, jsonify
from phpayroll.attendance.forms import validated_query
from phpayroll.payroll import bp
from phpayroll.payroll.calculator import GrossWage, NetWage, calculate_payroll_for_employee
from phpayroll.payroll.forms import PayslipQueryForm, WageQueryForm
from phpayroll.snapshot import current_snapshot


def _gross_wage(employee_id):
    form = validated_query(WageQueryForm)
    return GrossWage(
        current_snapshot(),
        employee_id,
        form.year.data,
        form.month.data,
        first_half=form.first_half,
        shift_start=current_app.config.get('SHIFT_START_TIME'),
        night_shift=form.night_shift.data,
    )


@bp.route('/employees/<employee_id>/gross', methods=['GET'])
def gross_wage(employee_id):
    wage = _gross_wage(employee_id)
    employee = wage.employee
    payload = wage.calculate().to_dict()
    payload['employee_name'] = employee.display_name
    return jsonify(payload)


@bp.route('/employees/<employee_id>/net', methods=['GET'])
def net_wage(employee_id):
    wage = _gross_wage(employee_id)
    employee = wage.employee
    result = NetWage(wage, late_grace_minutes=current_app.config.get('LATE_GRACE_MINUTES')).calculate()
    payload = result.to_dict()
    payload['employee_id'] = employee.employee_id
    payload['employee_name'] = employee.display_name
    return jsonify(payload)


@bp.route('/employees/<employee_id>/payslip', methods=['GET'])
def payslip(employee_id):
    form = validated_query(PayslipQueryForm)
    payload = calculate_payroll_for_employee(
        current_snapshot(),
        employee_id,
        form.year.data,
        form.month.data,
        shift_start=current_app.config.get('SHIFT_START_TIME'),
        night_shift=form.night_shift.data,
        late_grace_minutes=current_app.config.get('LATE_GRACE_MINUTES'),
    )
    return jsonify(payload)


@bp.route('/snapshot/reload', methods=['POST'])
def reload_snapshot():
    snapshot = current_app.extensions['payroll_snapshot'].reload()
    current_app.logger.info('Payroll snapshot reloaded for %d', snapshot.payroll_year)
    return jsonify({
        'payroll_year': snapshot.payroll_year,
        'punches': len(snapshot.punches),
        'employees': len(snapshot.roster),
        'holidays': len(snapshot.holidays),
        'contribution_brackets': len(snapshot.contribution_table),
        'loaded_at': snapshot.loaded_at.isoformat(),
    })
