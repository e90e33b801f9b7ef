"""Invoice creation transaction.

Creating an invoice touches two stores: stock is deducted from the catalog
and the invoice is added to the invoice store, in that order. Both succeed or
neither does. If the invoice cannot be persisted, whatever the error, the
deducted stock is put back; errors outside StockbillError propagate
afterwards. If putting it back also fails the catalog and invoices disagree;
that case is logged at CRITICAL and recorded as STOCK_INCONSISTENCY.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..errors import StockbillError, StockExceededError
from ..models import ActingUser, Invoice
from ..notifications import Notifier, send
from ..stores.catalog import CatalogStore
from ..stores.invoices import InvoiceStore
from .error_tracker import ErrorTracker
from .line_item_editor import LineItemEditor, stock_message
from .pricing import calculate_totals

STOCK_INCONSISTENCY = 'STOCK_INCONSISTENCY'
INVOICE_PERSIST_FAILED = 'INVOICE_PERSIST_FAILED'

@dataclass
class SubmissionResult:
    """Outcome of submitting an editor."""
    invoice: Optional[Invoice] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.invoice is not None and not self.errors

def create_invoice_and_deduct_stock(
    editor: LineItemEditor,
    catalog: CatalogStore,
    invoices: InvoiceStore,
    acting_user: Optional[ActingUser] = None,
    notifier: Optional[Notifier] = None,
    error_tracker: Optional[ErrorTracker] = None,
    logger: Optional[logging.Logger] = None
) -> SubmissionResult:
    """Validate the editor, deduct stock and persist the invoice atomically.

    Args:
        editor: Editor holding the draft and rows
        catalog: Catalog to deduct stock from
        invoices: Store the invoice is added to
        acting_user: User stamped into created_by
        notifier: Receives failure notifications
        error_tracker: Collects persistence and inconsistency errors
        logger: Logger to use, defaults to this module's

    Returns:
        SubmissionResult with the invoice, or field errors and no state change
    """
    logger = logger or logging.getLogger(__name__)
    error_tracker = error_tracker if error_tracker is not None else ErrorTracker()

    errors = editor.validate()
    if errors:
        logger.info(f"Invoice submission rejected: {', '.join(sorted(errors))}")
        return SubmissionResult(errors=errors)

    items = editor.items
    quantities = {item.product_id: item.quantity for item in items}

    # Stock may have moved since the rows were edited
    try:
        catalog.check_stock(quantities)
    except StockExceededError as e:
        index = next(i for i, row in enumerate(editor.rows) if row.product_id == e.product_id)
        editor.rows[index].error = stock_message(e.available)
        logger.info(f"Invoice submission rejected: {str(e)}")
        return SubmissionResult(errors=editor.row_errors())

    totals = calculate_totals(items, editor.draft.discount_percent)

    try:
        deducted = catalog.deduct_stock(quantities)
    except StockbillError as e:
        logger.error(f"Stock deduction failed, nothing was changed: {str(e)}")
        send(notifier, "Invoice not created", str(e), 'destructive')
        return SubmissionResult(errors={'products': f"Could not update stock: {str(e)}"})

    try:
        invoice = invoices.add(editor.draft, items, totals, acting_user)
    except Exception as e:
        error_tracker.add_error(INVOICE_PERSIST_FAILED, str(e), {'customer': editor.draft.customer_name})
        logger.error(f"Invoice could not be saved, restoring stock: {str(e)}")
        _rollback_stock(catalog, deducted, error_tracker, logger)
        send(notifier, "Invoice not created", "The invoice could not be saved", 'destructive')
        if not isinstance(e, StockbillError):
            raise
        return SubmissionResult(errors={'invoice': f"Could not save invoice: {str(e)}"})

    editor.reset()
    return SubmissionResult(invoice=invoice)

def _rollback_stock(catalog: CatalogStore, deducted: Dict[str, int], error_tracker: ErrorTracker, logger: logging.Logger) -> None:
    try:
        catalog.restore_stock(deducted)
    except Exception as e:
        error_tracker.add_error(
            STOCK_INCONSISTENCY,
            "Stock was deducted for an invoice that was not saved",
            {'deducted': dict(deducted), 'error': str(e)}
        )
        logger.critical(f"Stock for {sorted(deducted)} deducted without an invoice and could not be restored: {str(e)}")
