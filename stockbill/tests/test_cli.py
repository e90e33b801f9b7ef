"""End-to-end tests for the click CLI against a SQLite file."""

import json

import pytest
from click.testing import CliRunner

from stockbill.cli.main import cli
from .conftest import create_test_csv

@pytest.fixture
def runner():
    return CliRunner()

@pytest.fixture
def env(tmp_path):
    return {
        'DATABASE_URL': f"sqlite:///{tmp_path / 'cli.db'}",
        'SEED_DEMO_DATA': 'true',
        'LOG_LEVEL': 'ERROR',
        'OUTPUT_FORMAT': 'text',
    }

@pytest.fixture
def invoke(runner, env):
    def run(*args):
        return runner.invoke(cli, list(args), env=env, catch_exceptions=False)
    return run

def test_products_list_seeds_demo_data(invoke):
    result = invoke('products', 'list')

    assert result.exit_code == 0
    assert 'LPT-001' in result.output
    assert 'USB-005' in result.output

def test_seed_does_not_overwrite(invoke):
    invoke('products', 'list')

    result = invoke('seed')

    assert result.exit_code == 0
    assert 'already has data' in result.output

def test_create_invoice_deducts_stock(invoke):
    result = invoke(
        'invoices', 'create',
        '--customer', 'Vikram Rao',
        '--email', 'vikram@example.com',
        '--item', 'LPT-001:2',
        '--item', 'USB-005',
        '--discount', '5',
        '--status', 'paid',
        '--user', 'cashier@example.com',
        '--password', 'cashier123',
    )

    assert result.exit_code == 0, result.output
    assert 'Created invoice INV-004' in result.output
    assert 'Issued by: Cashier User' in result.output

    shown = json.loads(invoke('--json', 'products', 'show', 'LPT-001').output)
    assert shown['quantity'] == 13

    invoice = json.loads(invoke('--json', 'invoices', 'show', 'INV-004').output)
    assert invoice['status'] == 'paid'
    assert len(invoice['items']) == 2
    assert invoice['created_by']['name'] == 'Cashier User'

def test_create_invoice_over_stock_fails(invoke):
    result = invoke(
        'invoices', 'create',
        '--customer', 'Vikram Rao',
        '--email', 'vikram@example.com',
        '--item', 'HPH-004:3',
    )

    assert result.exit_code == 1
    assert 'Only 2 items available in stock' in result.output

    shown = json.loads(invoke('--json', 'products', 'show', 'HPH-004').output)
    assert shown['quantity'] == 2

def test_create_invoice_requires_customer_email(invoke):
    result = invoke('invoices', 'create', '--customer', 'Vikram Rao', '--item', 'USB-005')

    assert result.exit_code == 1
    assert 'Customer email is required' in result.output

def test_add_and_update_product(invoke):
    result = invoke(
        'products', 'add',
        '--name', 'Gaming Mouse',
        '--sku', 'GMS-010',
        '--price', '2499',
        '--category', 'Gaming',
        '--quantity', '7',
    )
    assert result.exit_code == 0, result.output

    result = invoke('products', 'update', 'GMS-010', '--quantity', '2', '--threshold', '3')
    assert result.exit_code == 0, result.output

    low = invoke('products', 'low-stock')
    assert 'GMS-010' in low.output
    assert 'HPH-004' in low.output

def test_add_invalid_product(invoke):
    result = invoke(
        'products', 'add',
        '--name', 'Freebie',
        '--sku', 'LPT-001',
        '--price', '0',
        '--category', 'Electronics',
    )

    assert result.exit_code == 1
    assert 'sellingPrice' in result.output
    assert 'sku' in result.output

def test_unknown_product(invoke):
    result = invoke('products', 'show', 'NOPE-1')

    assert result.exit_code == 1
    assert 'Product NOPE-1 not found' in result.output

def test_update_and_delete_invoice(invoke):
    result = invoke('invoices', 'update', 'INV-002', '--status', 'paid')
    assert result.exit_code == 0
    assert 'Updated invoice INV-002 (paid)' in result.output

    result = invoke('invoices', 'delete', 'INV-003')
    assert result.exit_code == 0

    listed = invoke('invoices', 'list')
    assert 'INV-003' not in listed.output
    assert 'INV-002' in listed.output

def test_deleted_invoice_number_is_not_reissued(invoke):
    create = ('invoices', 'create', '--customer', 'Vikram Rao', '--email', 'vikram@example.com', '--item', 'USB-005')
    assert 'Created invoice INV-004' in invoke(*create).output

    assert invoke('invoices', 'delete', 'INV-004').exit_code == 0

    result = invoke(*create)
    assert result.exit_code == 0, result.output
    assert 'Created invoice INV-005' in result.output

def test_recent_invoices(invoke):
    result = invoke('--json', 'invoices', 'recent', '--limit', '2')

    numbers = [invoice['invoice_number'] for invoice in json.loads(result.output)]
    assert numbers == ['INV-003', 'INV-002']

def test_report(invoke):
    result = invoke('--json', 'report')

    report = json.loads(result.output)
    assert report['dashboard']['total_products'] == 5
    assert report['dashboard']['pending_invoices'] == 1
    assert report['summary']['paid_invoices'] == 2
    assert len(report['monthly_sales']) == 12

def test_import_products(invoke):
    path = create_test_csv([
        {'Name': 'Wifi Router', 'SKU': 'RTR-001', 'Selling Price': '2999', 'Quantity': '6', 'Category': 'Networking'},
        {'Name': 'Laptop', 'SKU': 'LPT-001', 'Selling Price': '44999.99', 'Quantity': '15', 'Category': 'Electronics'},
    ])

    result = invoke('products', 'import', str(path))

    assert result.exit_code == 0, result.output
    assert 'Created: 1' in result.output
    assert 'Updated: 1' in result.output

    shown = json.loads(invoke('--json', 'products', 'show', 'LPT-001').output)
    assert shown['selling_price'] == '44999.99'

def test_bad_configuration(runner, env):
    env['OUTPUT_FORMAT'] = 'xml'

    result = runner.invoke(cli, ['products', 'list'], env=env)

    assert result.exit_code == 1
    assert 'Error initializing configuration' in result.output
