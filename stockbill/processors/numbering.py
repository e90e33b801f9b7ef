"""Invoice numbering and record assembly."""

import logging
import re
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..models import ActingUser, Invoice, InvoiceDraft, InvoiceItem, InvoiceTotals
from ..utils import generate_uuid, utcnow

INVOICE_PREFIX = 'INV-'
NUMBER_WIDTH = 3
LEADING_DIGITS = re.compile(r'\s*(\d+)')

def parse_invoice_sequence(invoice_number: Optional[str]) -> int:
    """Numeric suffix of an ``INV-`` number, 0 if it has none.

    Examples:
        >>> parse_invoice_sequence('INV-042')
        42
        >>> parse_invoice_sequence('INV-abc')
        0
    """
    if not invoice_number or not invoice_number.startswith(INVOICE_PREFIX):
        return 0
    match = LEADING_DIGITS.match(invoice_number[len(INVOICE_PREFIX):])
    if not match:
        return 0
    return int(match.group(1))

def format_invoice_number(sequence: int) -> str:
    """Format a sequence as ``INV-`` plus a zero-padded number."""
    return f"{INVOICE_PREFIX}{sequence:0{NUMBER_WIDTH}d}"

def next_invoice_number(existing_numbers: Iterable[Optional[str]], floor: int = 0) -> str:
    """Next invoice number after the highest existing one.

    Args:
        existing_numbers: Invoice numbers already issued
        floor: Highest sequence ever issued, so numbers of deleted invoices
            are not handed out again

    Returns:
        Invoice number such as ``INV-004``
    """
    highest = max((parse_invoice_sequence(number) for number in existing_numbers), default=0)
    return format_invoice_number(max(highest, floor) + 1)

class InvoiceRecordBuilder:
    """Assemble persisted Invoice records from a validated draft."""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)

    def build(
        self,
        draft: InvoiceDraft,
        items: Sequence[InvoiceItem],
        totals: InvoiceTotals,
        existing: Sequence[Invoice],
        acting_user: Optional[ActingUser] = None,
        floor: int = 0,
        now: Optional[datetime] = None
    ) -> Invoice:
        """Stamp id, number and metadata onto a draft.

        Args:
            draft: Validated customer fields
            items: Priced invoice lines
            totals: Calculator output for ``items``
            existing: Invoices already in the store, used for numbering
            acting_user: User creating the invoice; empty id/name when absent
            floor: Highest sequence ever issued by the store
            now: Creation time, defaults to the current UTC time

        Returns:
            New Invoice
        """
        invoice_number = next_invoice_number((invoice.invoice_number for invoice in existing), floor)
        created_by = acting_user or ActingUser()
        if acting_user is None:
            self.logger.debug(f"No acting user for {invoice_number}, created_by left empty")

        invoice = Invoice(
            id=generate_uuid(),
            invoice_number=invoice_number,
            customer_name=draft.customer_name.strip(),
            customer_email=draft.customer_email.strip(),
            customer_mobile=(draft.customer_mobile or '').strip(),
            items=tuple(items),
            subtotal=totals.subtotal,
            discount_percent=draft.discount_percent,
            discount_amount=totals.discount_amount,
            cgst=totals.cgst,
            sgst=totals.sgst,
            total=totals.total,
            status=draft.status,
            payment_mode=draft.payment_mode,
            notes=draft.notes or None,
            created_at=now or utcnow(),
            created_by=ActingUser(id=created_by.id or '', name=created_by.name or '')
        )

        if self.debug:
            self.logger.debug(f"Built invoice {invoice.invoice_number} with {len(invoice.items)} items")
        return invoice
