"""SQLAlchemy models for database tables."""

from .base import Base
from .product import ProductRecord
from .invoice import InvoiceRecord
from .invoice_item import InvoiceItemRecord
from .invoice_sequence import InvoiceSequenceRecord

__all__ = [
    'Base',
    'ProductRecord',
    'InvoiceRecord',
    'InvoiceItemRecord',
    'InvoiceSequenceRecord'
]
