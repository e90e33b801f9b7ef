"""Persistence interface used by the stores."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import Invoice, Product

class Storage(ABC):
    """Loads and saves whole collections.

    Stores call ``save_*`` with the full collection after every mutation
    (write-through, no batching). Implementations raise
    ``PersistenceError`` when the backend fails.

    The highest invoice sequence ever issued is stored alongside the
    invoices so numbers freed by deletion stay retired across restarts.
    """

    @abstractmethod
    def load_products(self) -> List[Product]:
        """Return all products in catalog order, empty when none are stored."""
        pass

    @abstractmethod
    def save_products(self, products: Sequence[Product]) -> None:
        """Replace the stored catalog."""
        pass

    @abstractmethod
    def load_invoices(self) -> List[Invoice]:
        """Return all invoices in creation order, empty when none are stored."""
        pass

    @abstractmethod
    def save_invoices(self, invoices: Sequence[Invoice], sequence: Optional[int] = None) -> None:
        """Replace the stored invoices.

        A given ``sequence`` is written in the same unit of work; None keeps
        the stored one.
        """
        pass

    @abstractmethod
    def load_invoice_sequence(self) -> int:
        """Return the highest invoice sequence ever saved, 0 when none."""
        pass
