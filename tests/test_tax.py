"""
Tests for the withholding tax brackets.
"""

from decimal import Decimal

import pytest

from phpayroll.errors import InvalidArgument
from phpayroll.payroll.tax import build_tax_table, compute_withholding_tax


@pytest.mark.parametrize('taxable, expected', [
    ('-500', '0.00'),
    ('0', '0.00'),
    ('20833', '0.00'),
    ('25000', '625.05'),
    ('40000', '3208.40'),
    ('100000', '16875.05'),
    ('1000000', '300208.35'),
])
def test_monthly_train_table(taxable, expected):
    assert compute_withholding_tax(Decimal(taxable)) == Decimal(expected)


def test_tax_never_decreases_as_income_rises():
    incomes = [Decimal(v) for v in range(0, 800001, 2500)] + [
        Decimal('33332.50'), Decimal('66666.50'), Decimal('166666.50'), Decimal('666666.50'),
    ]
    taxes = [compute_withholding_tax(income) for income in sorted(incomes)]
    assert taxes == sorted(taxes)


def test_custom_table_from_configuration_rows():
    table = build_tax_table([
        ('10000', '0', '0', 0),
        (None, '10000', '0', 10),
    ])
    assert compute_withholding_tax(Decimal('9000'), table) == Decimal('0.00')
    assert compute_withholding_tax(Decimal('12000'), table) == Decimal('200.00')


def test_table_without_open_top_uses_last_bracket():
    table = build_tax_table([
        ('10000', '0', '0', 0),
        ('20000', '10000', '0', 10),
    ])
    assert compute_withholding_tax(Decimal('30000'), table) == Decimal('2000.00')


@pytest.mark.parametrize('rows', [
    [],
    [('20000', '0', '0', 0), ('10000', '0', '0', 10)],
    [(None, '0', '0', 0), ('10000', '0', '0', 10)],
])
def test_malformed_tables_are_rejected(rows):
    with pytest.raises(InvalidArgument):
        build_tax_table(rows)
