"""Form-level validation for products and invoice customers.

Validators return a mapping of field name to message; an empty mapping
means the input is valid. Field names follow the form fields the UI binds to.
"""

import re
from decimal import Decimal
from typing import Dict, Iterable, Optional

from ..models import GST_RATES, PRODUCT_CATEGORIES, InvoiceDraft, NewProduct, Product, ProductUpdate, Unit

EMAIL_PATTERN = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
MOBILE_PATTERN = re.compile(r'\d{10}')

def validate_customer(draft: InvoiceDraft) -> Dict[str, str]:
    """Check the customer section of an invoice draft."""
    errors = {}

    if not (draft.customer_name or '').strip():
        errors['customerName'] = "Customer name is required"

    email = (draft.customer_email or '').strip()
    if not email:
        errors['customerEmail'] = "Customer email is required"
    elif not EMAIL_PATTERN.fullmatch(email):
        errors['customerEmail'] = "Please enter a valid email address"

    mobile = (draft.customer_mobile or '').strip()
    if mobile and not MOBILE_PATTERN.fullmatch(mobile):
        errors['customerMobile'] = "Mobile number must be exactly 10 digits"

    return errors

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

def _check_fields(fields: dict, errors: Dict[str, str]) -> None:
    """Shared per-field rules for new products and updates."""
    if 'name' in fields and not str(fields['name'] or '').strip():
        errors['name'] = "Product name is required"

    if 'sku' in fields and not str(fields['sku'] or '').strip():
        errors['sku'] = "SKU is required"

    if 'selling_price' in fields and not (isinstance(fields['selling_price'], Decimal) and fields['selling_price'] > 0):
        errors['sellingPrice'] = "Price must be greater than zero"

    for key, label in (('mrp', 'mrp'), ('purchase_price', 'purchasePrice')):
        if key in fields and not (isinstance(fields[key], Decimal) and fields[key] >= 0):
            errors[label] = "Price cannot be negative"

    if 'quantity' in fields:
        if not _is_int(fields['quantity']):
            errors['quantity'] = "Quantity must be a whole number"
        elif fields['quantity'] < 0:
            errors['quantity'] = "Quantity cannot be negative"

    if 'category' in fields:
        if not fields['category']:
            errors['category'] = "Category is required"
        elif fields['category'] not in PRODUCT_CATEGORIES:
            errors['category'] = f"Category must be one of: {', '.join(PRODUCT_CATEGORIES)}"

    if 'low_stock_threshold' in fields:
        if not _is_int(fields['low_stock_threshold']) or fields['low_stock_threshold'] < 0:
            errors['lowStockThreshold'] = "Threshold cannot be negative"

    if 'gst_rate' in fields and fields['gst_rate'] not in GST_RATES:
        errors['gstRate'] = f"GST rate must be one of: {', '.join(str(rate) for rate in GST_RATES)}"

    if 'unit' in fields and not isinstance(fields['unit'], Unit):
        errors['unit'] = "Unknown unit"

def _check_sku_unique(sku: Optional[str], products: Iterable[Product], errors: Dict[str, str], exclude_id: Optional[str] = None) -> None:
    if not sku or 'sku' in errors:
        return
    wanted = sku.strip().lower()
    for product in products:
        if product.id != exclude_id and product.sku.strip().lower() == wanted:
            errors['sku'] = f"SKU {sku} is already used by {product.name}"
            return

def validate_new_product(new_product: NewProduct, products: Iterable[Product] = ()) -> Dict[str, str]:
    """Validate a product before it is added to the catalog.

    Args:
        new_product: Submitted fields
        products: Current catalog, used for SKU uniqueness

    Returns:
        Field errors, empty when valid
    """
    errors: Dict[str, str] = {}
    _check_fields(dict(new_product.__dict__), errors)
    _check_sku_unique(new_product.sku, products, errors)
    return errors

def validate_product_update(product_id: str, update: ProductUpdate, products: Iterable[Product] = ()) -> Dict[str, str]:
    """Validate the fields set on a product update."""
    errors: Dict[str, str] = {}
    changes = update.changes()
    _check_fields(changes, errors)
    _check_sku_unique(changes.get('sku'), products, errors, exclude_id=product_id)
    return errors
