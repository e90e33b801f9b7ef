"""Stores owning the catalog and invoice collections."""

from .catalog import CatalogStore
from .invoices import InvoiceStore

__all__ = ['CatalogStore', 'InvoiceStore']
