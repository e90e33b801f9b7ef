"""In-progress invoice editor.

The editor holds the rows of an invoice being composed. Each row moves
between three states:

    UNSELECTED        no product chosen yet
    SELECTED_VALID    product chosen, quantity within stock
    SELECTED_INVALID  last quantity request exceeded stock

Invalid rows block submission but never block adding or removing other rows.
"""

import enum
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from ..models import InvoiceDraft, InvoiceItem, InvoiceStatus, InvoiceTotals, PaymentMode, Product
from .pricing import build_line_item, calculate_totals, clamp_discount, with_quantity
from .validator import validate_customer

class EditorState(enum.Enum):
    """Editor-level state."""
    EMPTY = 'empty'
    EDITING = 'editing'

class RowState(enum.Enum):
    """Per-row state."""
    UNSELECTED = 'unselected'
    SELECTED_VALID = 'selected_valid'
    SELECTED_INVALID = 'selected_invalid'

@dataclass
class LineRow:
    """One editable invoice row."""
    product_id: Optional[str] = None
    quantity: int = 1
    item: Optional[InvoiceItem] = None
    error: Optional[str] = None

    @property
    def state(self) -> RowState:
        if self.product_id is None:
            return RowState.UNSELECTED
        if self.error:
            return RowState.SELECTED_INVALID
        return RowState.SELECTED_VALID

def stock_message(available: int) -> str:
    return f"Only {available} items available in stock"

class LineItemEditor:
    """State machine over the rows of an invoice being composed.

    Args:
        lookup: Resolves a product id against the catalog, None when unknown
        debug: Enable debug logging
    """

    def __init__(self, lookup: Callable[[str], Optional[Product]], debug: bool = False):
        self.lookup = lookup
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)
        self.rows: List[LineRow] = []
        self.draft = InvoiceDraft()

    @property
    def state(self) -> EditorState:
        return EditorState.EDITING if self.rows else EditorState.EMPTY

    def add_row(self) -> int:
        """Append an unselected row with quantity 1.

        Returns:
            Index of the new row
        """
        self.rows.append(LineRow())
        return len(self.rows) - 1

    def select_product(self, index: int, product_id: str) -> bool:
        """Choose the product for a row.

        Selecting a product already chosen in another row removes this row.

        Returns:
            True if the row now holds the product
        """
        row = self.rows[index]
        product = self.lookup(product_id)
        if product is None:
            self.logger.warning(f"Unknown product {product_id} selected on row {index}")
            return False

        for other_index, other in enumerate(self.rows):
            if other_index != index and other.product_id == product_id:
                if self.debug:
                    self.logger.debug(f"Product {product_id} already on row {other_index}, dropping row {index}")
                del self.rows[index]
                return False

        row.product_id = product_id
        row.item = build_line_item(product, row.quantity)
        row.error = stock_message(product.quantity) if row.quantity > product.quantity else None
        return True

    def set_quantity(self, index: int, quantity: int) -> bool:
        """Change the quantity of a selected row.

        A request above the product's current stock marks the row invalid and
        keeps the previous quantity.

        Returns:
            True if the quantity was applied
        """
        row = self.rows[index]
        if row.product_id is None:
            return False
        product = self.lookup(row.product_id)
        if product is None:
            return False

        if quantity > product.quantity:
            row.error = stock_message(product.quantity)
            if self.debug:
                self.logger.debug(f"Row {index}: {quantity} requested, {product.quantity} in stock")
            return False

        row.error = None
        row.quantity = quantity
        row.item = with_quantity(row.item, quantity) if row.item else build_line_item(product, quantity)
        return True

    def remove_row(self, index: int) -> None:
        del self.rows[index]

    def set_customer(self, name: Optional[str] = None, email: Optional[str] = None, mobile: Optional[str] = None) -> None:
        if name is not None:
            self.draft.customer_name = name
        if email is not None:
            self.draft.customer_email = email
        if mobile is not None:
            self.draft.customer_mobile = mobile

    def set_discount(self, value: Any) -> Decimal:
        """Set the discount percentage, clamped to 0..100."""
        self.draft.discount_percent = clamp_discount(value)
        return self.draft.discount_percent

    def set_status(self, status: InvoiceStatus) -> None:
        self.draft.status = status

    def set_payment_mode(self, payment_mode: PaymentMode) -> None:
        self.draft.payment_mode = payment_mode

    def set_notes(self, notes: Optional[str]) -> None:
        self.draft.notes = notes

    @property
    def items(self) -> List[InvoiceItem]:
        """Line items of the selected rows, in row order."""
        return [row.item for row in self.rows if row.item is not None]

    def row_errors(self) -> Dict[str, str]:
        """Stock markers keyed ``quantity-<row>``."""
        return {
            f"quantity-{index}": row.error
            for index, row in enumerate(self.rows)
            if row.error
        }

    def totals(self) -> InvoiceTotals:
        """Running totals for display while editing."""
        return calculate_totals(self.items, self.draft.discount_percent)

    def validate(self) -> Dict[str, str]:
        """Submit-time validation.

        Returns:
            Field errors; any entry blocks submission
        """
        errors = validate_customer(self.draft)

        product_ids = [row.product_id for row in self.rows]
        if not self.rows:
            errors['products'] = "At least one product must be selected"
        elif any(product_id is None for product_id in product_ids):
            errors['products'] = "Please select a product for all rows"
        elif len(set(product_ids)) != len(product_ids):
            errors['products'] = "Duplicate products found. Please remove duplicates."
        elif any(row.quantity <= 0 for row in self.rows):
            errors['products'] = "Quantity must be greater than zero for all products"

        errors.update(self.row_errors())
        return errors

    def is_ready(self) -> bool:
        return not self.validate()

    def reset(self) -> None:
        self.rows = []
        self.draft = InvoiceDraft()
