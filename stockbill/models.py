"""Domain records for the product catalog and invoices."""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple, Union

class Unit(enum.Enum):
    """Stock keeping unit of measure."""
    PCS = 'Pcs'
    BOX = 'Box'
    KG = 'Kg'
    LTR = 'Ltr'
    MTR = 'Mtr'
    PACK = 'Pack'
    SET = 'Set'

class InvoiceStatus(enum.Enum):
    """Invoice payment status."""
    PENDING = 'pending'
    PAID = 'paid'
    CANCELLED = 'cancelled'

class PaymentMode(enum.Enum):
    """How the customer paid."""
    CASH = 'cash'
    UPI = 'upi'
    CARD = 'card'
    NETBANKING = 'netbanking'

class MutationResult(enum.Enum):
    """Outcome of an update or delete on a store.

    Unknown ids are not an error: callers get NOT_FOUND and may ignore it.
    """
    UPDATED = 'updated'
    DELETED = 'deleted'
    NOT_FOUND = 'not_found'

class _Clear:
    """Update value that resets an optional field to None."""

    def __repr__(self):
        return "CLEAR"

CLEAR = _Clear()

def _set_fields(update) -> dict:
    return {
        name: None if value is CLEAR else value
        for name, value in update.__dict__.items()
        if value is not None
    }

GST_RATES: Tuple[int, ...] = (0, 5, 12, 18, 28)

PRODUCT_CATEGORIES: Tuple[str, ...] = (
    'Electronics',
    'Accessories',
    'Audio',
    'Cables',
    'Computer Components',
    'Gaming',
    'Networking',
    'Office Equipment',
    'Software',
    'Storage',
)

@dataclass
class NewProduct:
    """Fields supplied when adding a product; id and timestamps are assigned by the catalog."""
    name: str
    sku: str
    hsn: str
    selling_price: Decimal
    quantity: int
    category: str
    mrp: Decimal = Decimal('0')
    purchase_price: Decimal = Decimal('0')
    unit: Unit = Unit.PCS
    low_stock_threshold: int = 5
    gst_rate: int = 18
    description: Optional[str] = None
    image: Optional[str] = None

@dataclass(frozen=True)
class Product:
    """Catalog product record."""
    id: str
    name: str
    sku: str
    hsn: str
    mrp: Decimal
    selling_price: Decimal
    purchase_price: Decimal
    quantity: int
    unit: Unit
    category: str
    low_stock_threshold: int
    gst_rate: int
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    image: Optional[str] = None

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.low_stock_threshold

    def __repr__(self):
        """Return string representation."""
        return f'<Product(id="{self.id}", sku="{self.sku}", name="{self.name}", quantity={self.quantity})>'

@dataclass
class ProductUpdate:
    """Mutable product fields.

    None leaves the current value in place; CLEAR resets description or image.
    """
    name: Optional[str] = None
    sku: Optional[str] = None
    hsn: Optional[str] = None
    mrp: Optional[Decimal] = None
    selling_price: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = None
    quantity: Optional[int] = None
    unit: Optional[Unit] = None
    category: Optional[str] = None
    low_stock_threshold: Optional[int] = None
    gst_rate: Optional[int] = None
    description: Optional[Union[str, _Clear]] = None
    image: Optional[Union[str, _Clear]] = None

    def changes(self) -> dict:
        """Return only the fields that were set."""
        return _set_fields(self)

@dataclass(frozen=True)
class InvoiceItem:
    """Line of an invoice, denormalized from the product at time of sale."""
    product_id: str
    product_name: str
    hsn: str
    quantity: int
    unit_price: Decimal
    gst_rate: int
    gst_amount: Decimal
    total: Decimal

@dataclass(frozen=True)
class InvoiceTotals:
    """Calculator output."""
    subtotal: Decimal
    discount_amount: Decimal
    cgst: Decimal
    sgst: Decimal
    total: Decimal

@dataclass(frozen=True)
class ActingUser:
    """User stamped into ``Invoice.created_by``."""
    id: str = ''
    name: str = ''

@dataclass
class InvoiceDraft:
    """Customer-facing fields collected before an invoice is submitted."""
    customer_name: str = ''
    customer_email: str = ''
    customer_mobile: str = ''
    discount_percent: Decimal = Decimal('0')
    status: InvoiceStatus = InvoiceStatus.PENDING
    payment_mode: PaymentMode = PaymentMode.CASH
    notes: Optional[str] = None

@dataclass(frozen=True)
class Invoice:
    """Persisted invoice record."""
    id: str
    invoice_number: str
    customer_name: str
    customer_email: str
    customer_mobile: str
    items: Tuple[InvoiceItem, ...]
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    cgst: Decimal
    sgst: Decimal
    total: Decimal
    status: InvoiceStatus
    payment_mode: PaymentMode
    created_at: datetime
    created_by: ActingUser = field(default_factory=ActingUser)
    notes: Optional[str] = None

    @property
    def total_gst(self) -> Decimal:
        return self.cgst + self.sgst

    def __repr__(self):
        """Return string representation."""
        return f'<Invoice(id="{self.id}", number="{self.invoice_number}", customer="{self.customer_name}")>'

@dataclass
class InvoiceUpdate:
    """Fields of an invoice that may change after creation.

    None leaves the current value in place; CLEAR removes the notes.
    """
    status: Optional[InvoiceStatus] = None
    payment_mode: Optional[PaymentMode] = None
    notes: Optional[Union[str, _Clear]] = None

    def changes(self) -> dict:
        """Return only the fields that were set."""
        return _set_fields(self)
