"""Inventory catalog and GST invoicing package."""

from .app import Application
from .processors.invoice_flow import create_invoice_and_deduct_stock
from .processors.pricing import calculate_totals
from .stores import CatalogStore, InvoiceStore

__all__ = ['Application', 'create_invoice_and_deduct_stock', 'calculate_totals', 'CatalogStore', 'InvoiceStore']
