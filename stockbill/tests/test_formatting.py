"""Tests for money parsing and display helpers."""

from decimal import Decimal

import pytest

from stockbill.utils import format_indian_rupees, to_decimal
from stockbill.utils.csv_normalization import normalize_cell, normalize_column_name, parse_int

@pytest.mark.parametrize('amount, expected', [
    (Decimal('123456.789'), '₹1,23,456.79'),
    (Decimal('1000'), '₹1,000.00'),
    (Decimal('12345678'), '₹1,23,45,678.00'),
    (Decimal('999'), '₹999.00'),
    (0, '₹0.00'),
    (-5, '-₹5.00'),
    ('₹2,500.5', '₹2,500.50'),
])
def test_format_indian_rupees(amount, expected):
    assert format_indian_rupees(amount) == expected

@pytest.mark.parametrize('raw, expected', [
    ('45,999.99', Decimal('45999.99')),
    ('₹ 100', Decimal('100')),
    ('Rs. 20', Decimal('20')),
    (0.1, Decimal('0.1')),
    (7, Decimal('7')),
    ('abc', None),
    ('', None),
    (float('nan'), None),
    (True, None),
])
def test_to_decimal(raw, expected):
    assert to_decimal(raw) == expected

def test_to_decimal_default():
    assert to_decimal('n/a', Decimal('0')) == Decimal('0')

def test_csv_cell_helpers():
    assert normalize_column_name('  Selling   Price ') == 'Selling Price'
    assert normalize_cell('  ') is None
    assert normalize_cell(float('nan')) is None
    assert normalize_cell(' LPT-001 ') == 'LPT-001'
    assert parse_int('12') == 12
    assert parse_int('12.0') == 12
    assert parse_int('1,200') == 1200
    assert parse_int('12.5') is None
    assert parse_int('twelve') is None
