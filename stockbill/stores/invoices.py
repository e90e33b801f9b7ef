"""Invoice store."""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from ..models import ActingUser, Invoice, InvoiceDraft, InvoiceItem, InvoiceTotals, InvoiceUpdate, MutationResult
from ..notifications import Notifier, send
from ..processors.numbering import InvoiceRecordBuilder, parse_invoice_sequence
from ..storage.base import Storage

class InvoiceStore:
    """Owns the invoice records.

    Invoice numbers never go backwards: the highest sequence ever issued is
    saved with the invoices, so deleting the newest invoice does not free
    its number for reuse, not even after a restart.

    Args:
        storage: Persistence backend
        notifier: Receives outcome notifications
        builder: Record builder, a default one is created when omitted
        debug: Enable debug logging
    """

    def __init__(
        self,
        storage: Storage,
        notifier: Optional[Notifier] = None,
        builder: Optional[InvoiceRecordBuilder] = None,
        debug: bool = False
    ):
        self.storage = storage
        self.notifier = notifier
        self.debug = debug
        self.builder = builder or InvoiceRecordBuilder(debug=debug)
        self.logger = logging.getLogger(self.__class__.__name__)
        self._invoices: List[Invoice] = list(storage.load_invoices())
        self.highest_sequence = max(
            [storage.load_invoice_sequence()]
            + [parse_invoice_sequence(invoice.invoice_number) for invoice in self._invoices]
        )

        if self.debug:
            self.logger.debug(f"Loaded {len(self._invoices)} invoices, highest sequence {self.highest_sequence}")

    @property
    def invoices(self) -> Tuple[Invoice, ...]:
        """Invoices in creation order."""
        return tuple(self._invoices)

    def _commit(self, invoices: List[Invoice], sequence: Optional[int] = None) -> None:
        sequence = self.highest_sequence if sequence is None else sequence
        self.storage.save_invoices(invoices, sequence)
        self._invoices = invoices
        self.highest_sequence = sequence

    def _index_of(self, invoice_id: str) -> Optional[int]:
        for index, invoice in enumerate(self._invoices):
            if invoice.id == invoice_id:
                return index
        return None

    def get(self, invoice_id: str) -> Optional[Invoice]:
        """Return the invoice, or None when the id is unknown."""
        index = self._index_of(invoice_id)
        return self._invoices[index] if index is not None else None

    def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        for invoice in self._invoices:
            if invoice.invoice_number == invoice_number:
                return invoice
        return None

    def add(
        self,
        draft: InvoiceDraft,
        items: Sequence[InvoiceItem],
        totals: InvoiceTotals,
        acting_user: Optional[ActingUser] = None
    ) -> Invoice:
        """Number, build and persist a new invoice.

        Only the invoice-creation flow should call this; it is responsible
        for validation and stock.

        Raises:
            PersistenceError: if storage rejects the write; nothing is kept
        """
        invoice = self.builder.build(
            draft,
            items,
            totals,
            self._invoices,
            acting_user=acting_user,
            floor=self.highest_sequence
        )
        self._commit(
            self._invoices + [invoice],
            max(self.highest_sequence, parse_invoice_sequence(invoice.invoice_number))
        )

        self.logger.info(f"Created invoice {invoice.invoice_number} for {invoice.customer_name}")
        send(self.notifier, "Invoice created", f"Invoice #{invoice.invoice_number} has been created")
        return invoice

    def update(self, invoice_id: str, update: InvoiceUpdate) -> MutationResult:
        """Change status, payment mode or notes.

        No modification timestamp is kept for invoices. Unknown ids are a
        no-op returning NOT_FOUND.
        """
        index = self._index_of(invoice_id)
        if index is None:
            self.logger.debug(f"Update for unknown invoice {invoice_id} ignored")
            return MutationResult.NOT_FOUND

        invoices = list(self._invoices)
        invoices[index] = replace(invoices[index], **update.changes())
        self._commit(invoices)

        number = invoices[index].invoice_number
        if self.debug:
            self.logger.debug(f"Updated invoice {number}: {sorted(update.changes())}")
        send(self.notifier, "Invoice updated", f"Invoice #{number} has been updated")
        return MutationResult.UPDATED

    def delete(self, invoice_id: str) -> MutationResult:
        """Remove an invoice.

        Stock deducted when the invoice was created is not given back.
        """
        index = self._index_of(invoice_id)
        if index is None:
            self.logger.debug(f"Delete for unknown invoice {invoice_id} ignored")
            return MutationResult.NOT_FOUND

        removed = self._invoices[index]
        self._commit(self._invoices[:index] + self._invoices[index + 1:])

        self.logger.info(f"Deleted invoice {removed.invoice_number}")
        send(self.notifier, "Invoice deleted", f"Invoice #{removed.invoice_number} has been deleted", 'destructive')
        return MutationResult.DELETED

    def recent(self, n: int = 5) -> List[Invoice]:
        """The ``n`` newest invoices, newest first."""
        return sorted(self._invoices, key=lambda invoice: invoice.created_at, reverse=True)[:n]
