"""Tests for the invoice creation transaction."""

from decimal import Decimal

import pytest

from stockbill.models import ProductUpdate
from stockbill.processors.error_tracker import ErrorTracker
from stockbill.processors.invoice_flow import (
    INVOICE_PERSIST_FAILED,
    STOCK_INCONSISTENCY,
    create_invoice_and_deduct_stock
)
from stockbill.processors.line_item_editor import LineItemEditor
from stockbill.storage import MemoryStorage
from stockbill.stores import CatalogStore, InvoiceStore

class DiskFullStorage(MemoryStorage):
    def save_invoices(self, invoices, sequence=None):
        raise OSError("disk full")

def test_creates_invoice_and_deducts_stock(filled_editor, catalog, invoice_store, acting_user):
    filled_editor.set_discount('10')

    result = create_invoice_and_deduct_stock(filled_editor, catalog, invoice_store, acting_user)

    assert result.ok
    invoice = result.invoice
    assert invoice.invoice_number == 'INV-001'
    assert invoice.total == Decimal('216')
    assert invoice.created_by == acting_user
    assert catalog.get('p1').quantity == 3
    assert invoice_store.invoices == (invoice,)

def test_editor_is_reset_after_success(filled_editor, catalog, invoice_store):
    create_invoice_and_deduct_stock(filled_editor, catalog, invoice_store)

    assert filled_editor.rows == []
    assert filled_editor.draft.customer_name == ''

def test_validation_errors_change_nothing(editor, catalog, invoice_store, storage):
    index = editor.add_row()
    editor.select_product(index, 'p1')

    result = create_invoice_and_deduct_stock(editor, catalog, invoice_store)

    assert not result.ok
    assert 'customerName' in result.errors
    assert catalog.get('p1').quantity == 5
    assert storage.product_saves == 0
    assert storage.invoice_saves == 0

def test_stock_moved_since_editing(filled_editor, catalog, invoice_store):
    """Stock is checked again at submit time."""
    catalog.update('p1', ProductUpdate(quantity=1))

    result = create_invoice_and_deduct_stock(filled_editor, catalog, invoice_store)

    assert result.errors == {'quantity-0': "Only 1 items available in stock"}
    assert catalog.get('p1').quantity == 1
    assert invoice_store.invoices == ()

def test_failed_invoice_save_restores_stock(filled_editor, catalog, invoice_store, storage, notifier):
    storage.fail_invoices_after = 0
    tracker = ErrorTracker()

    result = create_invoice_and_deduct_stock(
        filled_editor, catalog, invoice_store, notifier=notifier, error_tracker=tracker
    )

    assert not result.ok
    assert 'invoice' in result.errors
    assert catalog.get('p1').quantity == 5
    assert storage.load_products()[0].quantity == 5
    assert invoice_store.invoices == ()
    assert tracker.has_errors(INVOICE_PERSIST_FAILED)
    assert not tracker.has_errors(STOCK_INCONSISTENCY)
    assert notifier.titles[-1] == "Invoice not created"
    # The draft is kept so the user can retry
    assert filled_editor.rows

def test_failed_rollback_is_recorded(filled_editor, catalog, invoice_store, storage, caplog):
    """Deduction succeeds, the invoice save fails, then restoring stock fails too."""
    storage.fail_invoices_after = 0
    storage.fail_products_after = 1
    tracker = ErrorTracker()

    with caplog.at_level('CRITICAL'):
        result = create_invoice_and_deduct_stock(filled_editor, catalog, invoice_store, error_tracker=tracker)

    assert not result.ok
    assert tracker.has_errors(STOCK_INCONSISTENCY)
    assert tracker.samples(STOCK_INCONSISTENCY)[0]['context']['deducted'] == {'p1': 2}
    assert any(record.levelname == 'CRITICAL' for record in caplog.records)
    # In-memory catalog still reflects the deduction that storage holds
    assert catalog.get('p1').quantity == 3
    assert storage.load_products()[0].quantity == 3

def test_unexpected_save_error_restores_stock(products):
    storage = DiskFullStorage(products=products)
    catalog = CatalogStore(storage)
    invoices = InvoiceStore(storage)
    editor = LineItemEditor(catalog.get)
    editor.set_customer(name='Raj Sharma', email='raj@example.com')
    editor.select_product(editor.add_row(), 'p1')
    tracker = ErrorTracker()

    with pytest.raises(OSError):
        create_invoice_and_deduct_stock(editor, catalog, invoices, error_tracker=tracker)

    assert catalog.get('p1').quantity == 5
    assert storage.load_products()[0].quantity == 5
    assert invoices.invoices == ()
    assert tracker.has_errors(INVOICE_PERSIST_FAILED)
    assert not tracker.has_errors(STOCK_INCONSISTENCY)

def test_failed_deduction_changes_nothing(filled_editor, catalog, invoice_store, storage):
    storage.fail_products_after = 0

    result = create_invoice_and_deduct_stock(filled_editor, catalog, invoice_store)

    assert 'products' in result.errors
    assert catalog.get('p1').quantity == 5
    assert storage.invoice_saves == 0

def test_app_submit_uses_acting_user(app, acting_user):
    editor = app.new_editor()
    editor.set_customer(name='Priya Patel', email='priya@example.com')
    index = editor.add_row()
    editor.select_product(index, 'p2')
    editor.set_quantity(index, 4)

    result = app.submit(editor)

    assert result.ok
    assert result.invoice.created_by == acting_user
    assert result.invoice.subtotal == Decimal('200')
    assert result.invoice.cgst == Decimal('12')
    assert app.catalog.get('p2').quantity == 16
