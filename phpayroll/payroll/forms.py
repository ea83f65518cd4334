# phpayroll/payroll/forms.py

from flask_wtf import FlaskForm
from wtforms import BooleanField, IntegerField
from wtforms.validators import InputRequired, NumberRange

from phpayroll.attendance.forms import PayPeriodForm


class WageQueryForm(PayPeriodForm):
    night_shift = BooleanField('Night Shift', false_values=('false', '0', 'no', 'off', ''))


class PayslipQueryForm(FlaskForm):
    """Both halves of a month are computed, so no half is asked for."""

    class Meta:
        csrf = False

    year = IntegerField('Year', validators=[InputRequired()])
    month = IntegerField('Month', validators=[InputRequired(), NumberRange(min=1, max=12)])
    night_shift = BooleanField('Night Shift', false_values=('false', '0', 'no', 'off', ''))
