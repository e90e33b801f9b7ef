"""Tests for the invoice line-item editor."""

from decimal import Decimal

from stockbill.models import InvoiceStatus, PaymentMode
from stockbill.processors.line_item_editor import EditorState, RowState

def test_new_editor_is_empty(editor):
    assert editor.state is EditorState.EMPTY
    assert editor.items == []

def test_add_row_starts_unselected(editor):
    index = editor.add_row()

    assert index == 0
    assert editor.state is EditorState.EDITING
    assert editor.rows[0].state is RowState.UNSELECTED
    assert editor.rows[0].quantity == 1

def test_select_product_prices_row(editor):
    index = editor.add_row()

    assert editor.select_product(index, 'p1')
    row = editor.rows[index]
    assert row.state is RowState.SELECTED_VALID
    assert row.item.total == Decimal('100')
    assert row.item.gst_amount == Decimal('18')

def test_select_unknown_product_is_ignored(editor):
    index = editor.add_row()

    assert not editor.select_product(index, 'missing')
    assert editor.rows[index].state is RowState.UNSELECTED

def test_quantity_above_stock_keeps_previous_quantity(editor):
    """p1 has 5 in stock: 6 is refused and marks the row, 5 is accepted."""
    index = editor.add_row()
    editor.select_product(index, 'p1')

    assert not editor.set_quantity(index, 6)
    row = editor.rows[index]
    assert row.quantity == 1
    assert row.state is RowState.SELECTED_INVALID
    assert row.error == "Only 5 items available in stock"

    assert editor.set_quantity(index, 5)
    assert row.quantity == 5
    assert row.state is RowState.SELECTED_VALID
    assert row.item.total == Decimal('500')

def test_quantity_on_unselected_row_is_ignored(editor):
    index = editor.add_row()

    assert not editor.set_quantity(index, 3)
    assert editor.rows[index].quantity == 1

def test_duplicate_product_removes_later_row(editor):
    first = editor.add_row()
    editor.select_product(first, 'p1')
    second = editor.add_row()

    assert not editor.select_product(second, 'p1')
    assert len(editor.rows) == 1
    assert editor.rows[0].product_id == 'p1'

def test_invalid_row_does_not_block_other_rows(editor):
    first = editor.add_row()
    editor.select_product(first, 'p1')
    editor.set_quantity(first, 50)

    second = editor.add_row()
    assert editor.select_product(second, 'p2')
    assert editor.set_quantity(second, 3)
    editor.remove_row(first)

    assert len(editor.rows) == 1
    assert editor.rows[0].state is RowState.SELECTED_VALID

def test_discount_is_clamped(editor):
    assert editor.set_discount('150') == Decimal('100')
    assert editor.set_discount('-3') == Decimal('0')
    assert editor.set_discount('12.5') == Decimal('12.5')
    assert editor.draft.discount_percent == Decimal('12.5')

def test_running_totals(filled_editor):
    filled_editor.set_discount('10')
    totals = filled_editor.totals()

    assert totals.subtotal == Decimal('200')
    assert totals.total == Decimal('216')

def test_valid_editor_is_ready(filled_editor):
    assert filled_editor.validate() == {}
    assert filled_editor.is_ready()

def test_validation_messages(editor):
    errors = editor.validate()

    assert errors['customerName'] == "Customer name is required"
    assert errors['customerEmail'] == "Customer email is required"
    assert errors['products'] == "At least one product must be selected"
    assert 'customerMobile' not in errors

def test_invalid_email_and_mobile(editor):
    editor.set_customer(name='Raj', email='raj@example', mobile='12345')
    errors = editor.validate()

    assert errors['customerEmail'] == "Please enter a valid email address"
    assert errors['customerMobile'] == "Mobile number must be exactly 10 digits"

def test_unselected_row_blocks_submission(filled_editor):
    filled_editor.add_row()

    assert filled_editor.validate() == {'products': "Please select a product for all rows"}

def test_zero_quantity_blocks_submission(filled_editor):
    filled_editor.set_quantity(0, 0)

    assert filled_editor.validate()['products'] == "Quantity must be greater than zero for all products"

def test_stock_error_blocks_submission(filled_editor):
    filled_editor.set_quantity(0, 9)

    assert filled_editor.validate() == {'quantity-0': "Only 5 items available in stock"}

def test_reset_clears_draft(filled_editor):
    filled_editor.set_status(InvoiceStatus.PAID)
    filled_editor.set_payment_mode(PaymentMode.CARD)
    filled_editor.set_notes('Deliver Monday')
    filled_editor.reset()

    assert filled_editor.state is EditorState.EMPTY
    assert filled_editor.draft.customer_name == ''
    assert filled_editor.draft.status is InvoiceStatus.PENDING
    assert filled_editor.draft.payment_mode is PaymentMode.CASH
    assert filled_editor.draft.notes is None
