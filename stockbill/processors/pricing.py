"""Invoice pricing and GST calculation.

All arithmetic is done on Decimals so the totals reconcile exactly:

    total == (subtotal - discount_amount) + cgst + sgst
    cgst == sgst == sum(item.gst_amount) / 2

CGST and SGST are always an equal split of the line GST. Inter-state (IGST)
invoices are not modelled.
"""

from decimal import Decimal
from typing import Any, Iterable

from ..models import InvoiceItem, InvoiceTotals, Product
from ..utils.formatting import to_decimal

HUNDRED = Decimal('100')
ZERO = Decimal('0')

def line_gst_amount(total: Decimal, gst_rate: int) -> Decimal:
    """GST payable on a line total."""
    return total * Decimal(gst_rate) / HUNDRED

def build_line_item(product: Product, quantity: int) -> InvoiceItem:
    """Snapshot a product into an invoice line.

    Args:
        product: Catalog product being sold
        quantity: Units sold

    Returns:
        InvoiceItem with unit price and GST rate copied from the product
    """
    unit_price = product.selling_price
    total = unit_price * quantity
    return InvoiceItem(
        product_id=product.id,
        product_name=product.name,
        hsn=product.hsn,
        quantity=quantity,
        unit_price=unit_price,
        gst_rate=product.gst_rate,
        gst_amount=line_gst_amount(total, product.gst_rate),
        total=total
    )

def with_quantity(item: InvoiceItem, quantity: int) -> InvoiceItem:
    """Return a copy of ``item`` recomputed for a new quantity."""
    total = item.unit_price * quantity
    return InvoiceItem(
        product_id=item.product_id,
        product_name=item.product_name,
        hsn=item.hsn,
        quantity=quantity,
        unit_price=item.unit_price,
        gst_rate=item.gst_rate,
        gst_amount=line_gst_amount(total, item.gst_rate),
        total=total
    )

def clamp_discount(value: Any) -> Decimal:
    """Coerce user input into a discount percentage between 0 and 100.

    Unparsable or negative input becomes 0, anything above 100 becomes 100.
    """
    discount = to_decimal(value)
    if discount is None or discount < ZERO:
        return ZERO
    if discount > HUNDRED:
        return HUNDRED
    return discount

def calculate_totals(items: Iterable[InvoiceItem], discount_percent: Decimal) -> InvoiceTotals:
    """Compute invoice totals from line items.

    Line ``gst_amount`` values are trusted as given; they are computed when the
    line is edited. ``discount_percent`` must already be clamped to 0..100.

    Args:
        items: Invoice lines
        discount_percent: Discount applied to the subtotal

    Returns:
        InvoiceTotals
    """
    items = list(items)
    subtotal = sum((item.total for item in items), ZERO)
    discount_amount = subtotal * Decimal(discount_percent) / HUNDRED
    total_gst = sum((item.gst_amount for item in items), ZERO)
    cgst = total_gst / 2
    sgst = total_gst / 2

    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        cgst=cgst,
        sgst=sgst,
        total=(subtotal - discount_amount) + cgst + sgst
    )
