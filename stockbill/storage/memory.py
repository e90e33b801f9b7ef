"""In-process storage backend."""

import copy
import logging
from typing import List, Optional, Sequence

from ..errors import PersistenceError
from ..models import Invoice, Product
from .base import Storage

class MemoryStorage(Storage):
    """Keeps deep copies of the saved collections.

    ``fail_products_after`` / ``fail_invoices_after`` make the N+1th save of
    that collection raise ``PersistenceError``; tests use them to exercise the
    invoice-creation rollback.
    """

    def __init__(
        self,
        products: Optional[Sequence[Product]] = None,
        invoices: Optional[Sequence[Invoice]] = None
    ):
        self._products: List[Product] = copy.deepcopy(list(products or []))
        self._invoices: List[Invoice] = copy.deepcopy(list(invoices or []))
        self._invoice_sequence = 0
        self.fail_products_after: Optional[int] = None
        self.fail_invoices_after: Optional[int] = None
        self.product_saves = 0
        self.invoice_saves = 0
        self.logger = logging.getLogger(__name__)

    def load_products(self) -> List[Product]:
        return copy.deepcopy(self._products)

    def save_products(self, products: Sequence[Product]) -> None:
        if self.fail_products_after is not None and self.product_saves >= self.fail_products_after:
            raise PersistenceError("Product storage unavailable")
        self._products = copy.deepcopy(list(products))
        self.product_saves += 1
        self.logger.debug(f"Saved {len(self._products)} products")

    def load_invoices(self) -> List[Invoice]:
        return copy.deepcopy(self._invoices)

    def save_invoices(self, invoices: Sequence[Invoice], sequence: Optional[int] = None) -> None:
        if self.fail_invoices_after is not None and self.invoice_saves >= self.fail_invoices_after:
            raise PersistenceError("Invoice storage unavailable")
        self._invoices = copy.deepcopy(list(invoices))
        if sequence is not None:
            self._invoice_sequence = sequence
        self.invoice_saves += 1
        self.logger.debug(f"Saved {len(self._invoices)} invoices")

    def load_invoice_sequence(self) -> int:
        return self._invoice_sequence
