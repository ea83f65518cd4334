# phpayroll/errors.py


class PayrollError(Exception):
    """Base class for every failure raised by the payroll engine."""
    status_code = 500

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def kind(self):
        return type(self).__name__

    def to_dict(self):
        payload = {'error': self.kind, 'message': self.message}
        if self.details:
            payload['details'] = self.details
        return payload


class InvalidArgument(PayrollError):
    """Malformed calculation inputs (empty id, bad month, unsupported year, no shift start)."""
    status_code = 400


class RecordFormatError(PayrollError):
    """A source record could not be parsed at load time."""
    status_code = 400


class EmployeeNotFound(PayrollError):
    status_code = 404


class InvalidRate(PayrollError):
    status_code = 422


class LookupMiss(PayrollError):
    """The contribution table has no bracket covering the given gross wage."""
    status_code = 500


class CalculationFault(PayrollError):
    """A post-calculation sanity check tripped; the rule composition is wrong."""
    status_code = 500
