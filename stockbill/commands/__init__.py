"""Command implementations for the stockbill CLI."""

from .products import (
    ListProductsCommand,
    ShowProductCommand,
    AddProductCommand,
    UpdateProductCommand,
    DeleteProductCommand,
    LowStockCommand,
    ImportProductsCommand
)
from .invoices import (
    ListInvoicesCommand,
    ShowInvoiceCommand,
    CreateInvoiceCommand,
    UpdateInvoiceCommand,
    DeleteInvoiceCommand,
    RecentInvoicesCommand
)
from .reports import ReportCommand, SeedCommand

__all__ = [
    'ListProductsCommand',
    'ShowProductCommand',
    'AddProductCommand',
    'UpdateProductCommand',
    'DeleteProductCommand',
    'LowStockCommand',
    'ImportProductsCommand',
    'ListInvoicesCommand',
    'ShowInvoiceCommand',
    'CreateInvoiceCommand',
    'UpdateInvoiceCommand',
    'DeleteInvoiceCommand',
    'RecentInvoicesCommand',
    'ReportCommand',
    'SeedCommand'
]
