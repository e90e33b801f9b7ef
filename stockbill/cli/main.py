"""
Core CLI implementation for the stockbill package.
"""

import click
from pathlib import Path
from typing import List, Optional, Tuple

from .config import Config
from .logging import setup_logging, get_logger
from ..commands import (
    ListProductsCommand,
    ShowProductCommand,
    AddProductCommand,
    UpdateProductCommand,
    DeleteProductCommand,
    LowStockCommand,
    ImportProductsCommand,
    ListInvoicesCommand,
    ShowInvoiceCommand,
    CreateInvoiceCommand,
    UpdateInvoiceCommand,
    DeleteInvoiceCommand,
    RecentInvoicesCommand,
    ReportCommand,
    SeedCommand
)
from ..models import PRODUCT_CATEGORIES, InvoiceStatus, PaymentMode, Unit
from ..utils import to_decimal

STATUS_CHOICES = click.Choice([status.value for status in InvoiceStatus])
PAYMENT_CHOICES = click.Choice([mode.value for mode in PaymentMode])
UNIT_CHOICES = click.Choice([unit.value for unit in Unit], case_sensitive=False)

def _run(ctx: click.Context, command_cls, *args, **kwargs) -> None:
    """Build and execute a command with the configuration from the context."""
    command = command_cls(ctx.obj['config'], *args, **kwargs)
    exit_code = command.execute()
    if exit_code:
        ctx.exit(exit_code)

def _money(value: Optional[str]):
    """Parse a money option; unparsable text is passed on for validation to reject."""
    if value is None:
        return None
    parsed = to_decimal(value)
    return parsed if parsed is not None else value

def _unit(value: Optional[str]) -> Optional[Unit]:
    if value is None:
        return None
    return next(unit for unit in Unit if unit.value.lower() == value.lower())

def _parse_items(values: Tuple[str, ...]) -> List[Tuple[str, int]]:
    items = []
    for value in values:
        ref, _, quantity = value.rpartition(':')
        if not ref:
            ref, quantity = quantity, '1'
        try:
            items.append((ref, int(quantity)))
        except ValueError:
            raise click.BadParameter(f"'{value}' is not PRODUCT or PRODUCT:QUANTITY", param_hint='--item')
    return items

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.option('--json', 'json_output', is_flag=True, help='Print JSON instead of text')
@click.pass_context
def cli(ctx, debug: bool, json_output: bool):
    """Inventory and GST invoicing tool"""
    # Store debug flag in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    try:
        config = Config.from_env()
        if json_output:
            config.output_format = 'json'
        config.validate()
    except ValueError as e:
        click.echo(f"Error initializing configuration: {str(e)}", err=True)
        ctx.exit(1)

    setup_logging(debug=debug, level=config.log_level, log_dir=config.log_dir)

    logger = get_logger('cli')
    if debug:
        logger.debug("Debug mode enabled")
        logger.debug(f"Using database: {config.database_url}")

    ctx.obj['config'] = config

@cli.command()
@click.option('--replace', is_flag=True, help='Overwrite existing products and invoices')
@click.pass_context
def seed(ctx, replace: bool):
    """Load the demo catalog and invoices."""
    _run(ctx, SeedCommand, replace)

@cli.command()
@click.pass_context
def report(ctx):
    """Show dashboard metrics and sales breakdowns."""
    _run(ctx, ReportCommand)

# Product Commands Group
@cli.group()
def products():
    """Product catalog commands"""
    pass

@products.command('list')
@click.option('--category', type=click.Choice(PRODUCT_CATEGORIES), help='Only show this category')
@click.pass_context
def list_products(ctx, category: Optional[str]):
    """List catalog products."""
    _run(ctx, ListProductsCommand, category)

@products.command('show')
@click.argument('product')
@click.pass_context
def show_product(ctx, product: str):
    """Show a product by id or SKU."""
    _run(ctx, ShowProductCommand, product)

@products.command('add')
@click.option('--name', required=True, help='Product name')
@click.option('--sku', required=True, help='Unique stock keeping code')
@click.option('--price', required=True, help='Selling price')
@click.option('--category', required=True, help='Product category')
@click.option('--quantity', type=int, default=0, show_default=True, help='Units in stock')
@click.option('--hsn', default='', help='HSN code')
@click.option('--mrp', default='0', help='Maximum retail price')
@click.option('--purchase-price', default='0', help='Purchase price')
@click.option('--unit', type=UNIT_CHOICES, default=Unit.PCS.value, show_default=True)
@click.option('--threshold', type=int, default=5, show_default=True, help='Low stock threshold')
@click.option('--gst-rate', type=int, default=18, show_default=True, help='GST rate in percent')
@click.option('--description', help='Description')
@click.pass_context
def add_product(ctx, name, sku, price, category, quantity, hsn, mrp, purchase_price, unit, threshold, gst_rate, description):
    """Add a product to the catalog."""
    fields = {
        'name': name,
        'sku': sku,
        'hsn': hsn,
        'selling_price': _money(price),
        'quantity': quantity,
        'category': category,
        'mrp': _money(mrp),
        'purchase_price': _money(purchase_price),
        'unit': _unit(unit),
        'low_stock_threshold': threshold,
        'gst_rate': gst_rate,
        'description': description,
    }
    _run(ctx, AddProductCommand, fields)

@products.command('update')
@click.argument('product')
@click.option('--name', help='Product name')
@click.option('--sku', help='Stock keeping code')
@click.option('--price', help='Selling price')
@click.option('--category', help='Product category')
@click.option('--quantity', type=int, help='Units in stock')
@click.option('--hsn', help='HSN code')
@click.option('--mrp', help='Maximum retail price')
@click.option('--purchase-price', help='Purchase price')
@click.option('--unit', type=UNIT_CHOICES)
@click.option('--threshold', type=int, help='Low stock threshold')
@click.option('--gst-rate', type=int, help='GST rate in percent')
@click.option('--description', help='Description')
@click.pass_context
def update_product(ctx, product, name, sku, price, category, quantity, hsn, mrp, purchase_price, unit, threshold, gst_rate, description):
    """Change fields of a product given by id or SKU."""
    fields = {
        'name': name,
        'sku': sku,
        'hsn': hsn,
        'selling_price': _money(price),
        'quantity': quantity,
        'category': category,
        'mrp': _money(mrp),
        'purchase_price': _money(purchase_price),
        'unit': _unit(unit),
        'low_stock_threshold': threshold,
        'gst_rate': gst_rate,
        'description': description,
    }
    _run(ctx, UpdateProductCommand, product, fields)

@products.command('delete')
@click.argument('product')
@click.pass_context
def delete_product(ctx, product: str):
    """Delete a product given by id or SKU."""
    _run(ctx, DeleteProductCommand, product)

@products.command('low-stock')
@click.pass_context
def low_stock(ctx):
    """List products at or below their low stock threshold."""
    _run(ctx, LowStockCommand)

@products.command('import')
@click.argument('file', type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path))
@click.option('--batch-size', type=int, help='Rows per batch (default: BATCH_SIZE)')
@click.pass_context
def import_products(ctx, file: Path, batch_size: Optional[int]):
    """Create or update products from a CSV file."""
    _run(ctx, ImportProductsCommand, file, batch_size)

# Invoice Commands Group
@cli.group()
def invoices():
    """Invoice commands"""
    pass

@invoices.command('list')
@click.option('--status', type=STATUS_CHOICES, help='Only show this status')
@click.pass_context
def list_invoices(ctx, status: Optional[str]):
    """List invoices in creation order."""
    _run(ctx, ListInvoicesCommand, InvoiceStatus(status) if status else None)

@invoices.command('show')
@click.argument('invoice')
@click.pass_context
def show_invoice(ctx, invoice: str):
    """Show an invoice by id or number."""
    _run(ctx, ShowInvoiceCommand, invoice)

@invoices.command('recent')
@click.option('--limit', type=int, help='Number of invoices (default: RECENT_INVOICE_LIMIT)')
@click.pass_context
def recent_invoices(ctx, limit: Optional[int]):
    """Show the newest invoices first."""
    _run(ctx, RecentInvoicesCommand, limit)

@invoices.command('create')
@click.option('--customer', required=True, help='Customer name')
@click.option('--email', default='', help='Customer email')
@click.option('--mobile', default='', help='Customer mobile, 10 digits')
@click.option('--item', 'items', multiple=True, help='PRODUCT or PRODUCT:QUANTITY, by id or SKU; repeatable')
@click.option('--discount', default='0', help='Discount percentage, clamped to 0-100')
@click.option('--status', type=STATUS_CHOICES, default=InvoiceStatus.PENDING.value, show_default=True)
@click.option('--payment-mode', type=PAYMENT_CHOICES, default=PaymentMode.CASH.value, show_default=True)
@click.option('--notes', help='Notes printed on the invoice')
@click.option('--user', help='Demo account email to issue the invoice as')
@click.option('--password', help='Password for --user')
@click.pass_context
def create_invoice(ctx, customer, email, mobile, items, discount, status, payment_mode, notes, user, password):
    """Create an invoice and deduct its stock."""
    _run(
        ctx,
        CreateInvoiceCommand,
        (customer, email, mobile),
        _parse_items(items),
        discount=discount,
        status=InvoiceStatus(status),
        payment_mode=PaymentMode(payment_mode),
        notes=notes,
        login=(user, password or '') if user else None
    )

@invoices.command('update')
@click.argument('invoice')
@click.option('--status', type=STATUS_CHOICES)
@click.option('--payment-mode', type=PAYMENT_CHOICES)
@click.option('--notes')
@click.pass_context
def update_invoice(ctx, invoice: str, status: Optional[str], payment_mode: Optional[str], notes: Optional[str]):
    """Change status, payment mode or notes of an invoice."""
    _run(
        ctx,
        UpdateInvoiceCommand,
        invoice,
        status=InvoiceStatus(status) if status else None,
        payment_mode=PaymentMode(payment_mode) if payment_mode else None,
        notes=notes
    )

@invoices.command('delete')
@click.argument('invoice')
@click.pass_context
def delete_invoice(ctx, invoice: str):
    """Delete an invoice. Stock is not restored."""
    _run(ctx, DeleteInvoiceCommand, invoice)

if __name__ == '__main__':
    cli()
