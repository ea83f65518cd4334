# phpayroll/payroll/tax.py

import logging
from decimal import Decimal

from phpayroll.errors import InvalidArgument
from phpayroll.models.records import CENTS, ZERO, TaxBracket, to_decimal

logger = logging.getLogger(__name__)

# --- WITHHOLDING TAX (Monthly BIR TRAIN table) ---
# (ceiling, excess_over, base_tax, tax_rate_percent); ceiling None is the open top bracket
DEFAULT_TAX_TABLE = [
    ('20833.00', '0.00', '0.00', 0),
    ('33332.00', '20833.00', '0.00', 15),
    ('66666.00', '33333.00', '1875.00', 20),
    ('166666.00', '66667.00', '8541.80', 25),
    ('666666.00', '166667.00', '33541.80', 30),
    (None, '666667.00', '183541.80', 35),
]


def build_tax_table(rows=None):
    """Turns configuration rows into TaxBracket records and validates their order."""
    if rows is None:
        rows = DEFAULT_TAX_TABLE
    table = []
    for row in rows:
        if isinstance(row, TaxBracket):
            table.append(row)
            continue
        ceiling, excess_over, base_tax, rate_percent = row
        table.append(TaxBracket(
            ceiling=None if ceiling is None else to_decimal(ceiling),
            excess_over=to_decimal(excess_over),
            base_tax=to_decimal(base_tax),
            rate_percent=to_decimal(rate_percent),
        ))
    validate_tax_table(table)
    return tuple(table)


def validate_tax_table(table):
    if not table:
        raise InvalidArgument("Withholding tax table is empty")
    previous = None
    for position, bracket in enumerate(table):
        if bracket.ceiling is None:
            if position != len(table) - 1:
                raise InvalidArgument("Only the last tax bracket may be open-ended")
            continue
        if previous is not None and bracket.ceiling <= previous:
            raise InvalidArgument("Tax bracket ceilings must be strictly increasing",
                                  ceiling=str(bracket.ceiling))
        previous = bracket.ceiling
        if bracket.rate_percent < 0 or bracket.base_tax < 0:
            raise InvalidArgument("Tax rates and base amounts must not be negative")


def compute_withholding_tax(taxable_income, table=None):
    """Calculates the withholding tax due on taxable income.

    Income at or below the first bracket's ceiling is tax free. Above it the
    tax is the bracket's base amount plus its rate applied to the excess over
    the bracket floor. Incomes past the last closed bracket fall into the open
    top bracket, or the last bracket when the table has none.
    """
    if table is None:
        table = build_tax_table()
    taxable_income = to_decimal(taxable_income)

    first = table[0]
    if taxable_income <= 0 or (first.ceiling is not None and taxable_income <= first.ceiling):
        return ZERO

    for bracket in table:
        if bracket.ceiling is None or taxable_income <= bracket.ceiling:
            return _bracket_tax(bracket, taxable_income)

    logger.debug("Taxable income %s above every closed bracket; using the last one", taxable_income)
    return _bracket_tax(table[-1], taxable_income)


def _bracket_tax(bracket, taxable_income):
    excess = max(ZERO, taxable_income - bracket.excess_over)
    tax = bracket.base_tax + (excess * (bracket.rate_percent / Decimal('100')))
    return tax.quantize(CENTS)
