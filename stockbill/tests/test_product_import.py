"""Tests for the product CSV import processor."""

from decimal import Decimal

import pandas as pd

from stockbill.models import Unit
from stockbill.processors.product_import import ProductImportProcessor
from .conftest import create_test_csv

def row(**overrides):
    data = {
        'Name': 'Mechanical Keyboard',
        'SKU': 'KBD-100',
        'HSN': '8471',
        'Selling Price': '3,499.00',
        'Quantity': '12',
        'Category': 'Accessories',
        'GST Rate': '18',
    }
    data.update(overrides)
    return data

def test_validate_data(catalog):
    processor = ProductImportProcessor(catalog, batch_size=100, error_limit=10)

    # Missing required columns
    critical, warnings = processor.validate_data(pd.DataFrame([{'Description': 'Test'}]))
    assert critical == ["Missing required columns: Name, SKU"]

    # Empty SKU and unknown category
    data = pd.DataFrame([row(SKU=''), row(Category='Toys')])
    critical, warnings = processor.validate_data(data)
    assert critical == []
    assert len(warnings) == 2

def test_creates_products(catalog):
    processor = ProductImportProcessor(catalog, batch_size=100)

    result = processor.process(pd.DataFrame([row(), row(SKU='KBD-200', Unit='box')]))
    stats = processor.get_stats()

    assert stats['created'] == 2
    assert stats['total_errors'] == 0
    assert list(result['action']) == ['created', 'created']

    product = catalog.get_by_sku('KBD-100')
    assert product.selling_price == Decimal('3499.00')
    assert product.quantity == 12
    assert catalog.get_by_sku('KBD-200').unit is Unit.BOX

def test_updates_existing_sku(catalog):
    processor = ProductImportProcessor(catalog)

    result = processor.process(pd.DataFrame([{'Name': 'Product p1', 'SKU': 'sku-p1', 'Quantity': '40'}]))

    assert list(result['action']) == ['updated']
    assert catalog.get('p1').quantity == 40
    assert processor.get_stats()['updated'] == 1

def test_unchanged_rows_are_skipped(catalog):
    processor = ProductImportProcessor(catalog)

    result = processor.process(pd.DataFrame([{'Name': 'Product p1', 'SKU': 'SKU-p1', 'Quantity': '5'}]))

    assert list(result['action']) == ['skipped']

def test_invalid_rows_are_reported(catalog):
    processor = ProductImportProcessor(catalog)

    result = processor.process(pd.DataFrame([row(), row(SKU='BAD-1', **{'Selling Price': 'free'})]))
    stats = processor.get_stats()

    assert list(result['action']) == ['created', 'error']
    assert stats['validation_errors'] == 1
    assert catalog.get_by_sku('BAD-1') is None
    assert processor.error_tracker.has_errors('validation')

def test_repeated_sku_imports_first_row(catalog):
    processor = ProductImportProcessor(catalog, batch_size=1)

    result = processor.process(pd.DataFrame([row(Quantity='3'), row(Quantity='9')]))

    assert list(result['action']) == ['created', 'skipped']
    assert catalog.get_by_sku('KBD-100').quantity == 3
    assert processor.get_stats()['successful_batches'] == 2

def test_process_file(catalog):
    path = create_test_csv([row(), row(SKU='KBD-300', Quantity='')])
    processor = ProductImportProcessor(catalog)

    results = processor.process_file(str(path))

    assert results['success']
    assert results['summary']['stats']['created'] == 2
    assert catalog.get_by_sku('KBD-300').quantity == 0
