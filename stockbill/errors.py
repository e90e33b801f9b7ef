"""Exception types raised by the catalog and invoice engine."""

from typing import Dict, Optional

class StockbillError(Exception):
    """Base class for all stockbill errors."""

class ValidationError(StockbillError):
    """Field-scoped validation failure.

    Args:
        errors: Mapping of field name to human readable message
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__('; '.join(f"{key}: {message}" for key, message in self.errors.items()))

class StockExceededError(StockbillError):
    """Requested quantity is larger than the stock on hand."""

    def __init__(self, product_id: str, requested: int, available: int, product_name: Optional[str] = None):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        self.product_name = product_name
        label = product_name or product_id
        super().__init__(f"Only {available} items of {label} available in stock (requested {requested})")

class PersistenceError(StockbillError):
    """Storage backend failed to load or save records."""
