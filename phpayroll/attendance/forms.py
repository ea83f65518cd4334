# phpayroll/attendance/forms.py

from flask import request
from flask_wtf import FlaskForm
from wtforms import IntegerField, SelectField
from wtforms.validators import InputRequired, NumberRange

from phpayroll.errors import InvalidArgument


class PayPeriodForm(FlaskForm):
    """Query-string pay period: ?year=2022&month=6&half=first"""

    class Meta:
        # Read-only JSON API driven by query strings
        csrf = False

    year = IntegerField('Year', validators=[InputRequired()])
    month = IntegerField('Month', validators=[InputRequired(), NumberRange(min=1, max=12)])
    half = SelectField('Half', choices=[('first', 'Days 1-15'), ('second', 'Day 16 to month end')],
                       default='first')

    @property
    def first_half(self):
        return self.half.data == 'first'


def validated_query(form_class):
    """Binds a form to the query string and raises InvalidArgument when it does not validate."""
    form = form_class(formdata=request.args)
    if not form.validate():
        raise InvalidArgument('Invalid query parameters.', errors=form.errors)
    return form
