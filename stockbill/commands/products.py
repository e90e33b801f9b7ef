"""Product catalog commands."""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import click

from ..cli.base import BaseCommand, FileInputCommand, command_error_handler
from ..cli.config import Config
from ..models import MutationResult, NewProduct, Product, ProductUpdate
from ..processors.product_import import ProductImportProcessor
from ..utils import format_indian_rupees

def product_line(product: Product) -> str:
    marker = '  LOW' if product.is_low_stock else ''
    return (
        f"{product.sku:<10} {product.name[:28]:<28} {product.category:<14} "
        f"{product.quantity:>6} {product.unit.value:<4} "
        f"{format_indian_rupees(product.selling_price):>14}  GST {product.gst_rate}%{marker}"
    )

def product_details(product: Product) -> List[str]:
    return [
        f"{product.name} ({product.sku})",
        f"  ID:              {product.id}",
        f"  HSN:             {product.hsn or '-'}",
        f"  Category:        {product.category}",
        f"  MRP:             {format_indian_rupees(product.mrp)}",
        f"  Selling price:   {format_indian_rupees(product.selling_price)}",
        f"  Purchase price:  {format_indian_rupees(product.purchase_price)}",
        f"  GST rate:        {product.gst_rate}%",
        f"  Stock:           {product.quantity} {product.unit.value} (low at {product.low_stock_threshold})",
        f"  Description:     {product.description or '-'}",
        f"  Updated:         {product.updated_at:%Y-%m-%d %H:%M}",
    ]

class ProductCommand(BaseCommand):
    """Shared product lookup."""

    def find(self, ref: str) -> Product:
        """Resolve a product by id or SKU.

        Raises:
            click.ClickException: if nothing matches
        """
        product = self.app.catalog.get(ref) or self.app.catalog.get_by_sku(ref)
        if product is None:
            raise click.ClickException(f"Product {ref} not found")
        return product

class ListProductsCommand(ProductCommand):
    """List catalog products."""

    def __init__(self, config: Config, category: Optional[str] = None):
        super().__init__(config)
        self.category = category

    @command_error_handler
    def execute(self) -> None:
        products = [
            product for product in self.app.catalog.products
            if self.category is None or product.category == self.category
        ]
        self.emit(products, lambda: [product_line(p) for p in products] or ["No products found"])

class ShowProductCommand(ProductCommand):
    """Show one product."""

    def __init__(self, config: Config, ref: str):
        super().__init__(config)
        self.ref = ref

    @command_error_handler
    def execute(self) -> None:
        product = self.find(self.ref)
        self.emit(product, lambda: product_details(product))

class AddProductCommand(ProductCommand):
    """Add a product to the catalog."""

    def __init__(self, config: Config, fields: Dict[str, Any]):
        super().__init__(config)
        self.fields = fields

    @command_error_handler
    def execute(self) -> None:
        product = self.app.catalog.add(NewProduct(**self.fields))
        self.emit(product, lambda: [f"Added {product.name} ({product.sku}) with id {product.id}"])

class UpdateProductCommand(ProductCommand):
    """Change fields of a product."""

    def __init__(self, config: Config, ref: str, fields: Dict[str, Any]):
        super().__init__(config)
        self.ref = ref
        self.fields = {name: value for name, value in fields.items() if value is not None}

    @command_error_handler
    def execute(self) -> None:
        if not self.fields:
            raise click.UsageError("Nothing to update")
        product = self.find(self.ref)
        result = self.app.catalog.update(product.id, ProductUpdate(**self.fields))
        if result is MutationResult.NOT_FOUND:
            raise click.ClickException(f"Product {self.ref} not found")
        updated = self.app.catalog.get(product.id)
        self.emit(updated, lambda: [f"Updated {updated.name} ({updated.sku})"])

class DeleteProductCommand(ProductCommand):
    """Remove a product from the catalog."""

    def __init__(self, config: Config, ref: str):
        super().__init__(config)
        self.ref = ref

    @command_error_handler
    def execute(self) -> None:
        product = self.find(self.ref)
        result = self.app.catalog.delete(product.id)
        self.emit(
            {'id': product.id, 'result': result},
            lambda: [f"Deleted {product.name} ({product.sku})"]
        )

class LowStockCommand(ProductCommand):
    """List products at or below their low stock threshold."""

    @command_error_handler
    def execute(self) -> None:
        products = self.app.catalog.low_stock()

        def lines() -> Iterable[str]:
            if not products:
                return ["All products are above their low stock threshold"]
            return [
                f"{product.sku:<10} {product.name[:28]:<28} {product.quantity:>6} left (threshold {product.low_stock_threshold})"
                for product in products
            ]

        self.emit(products, lines)

class ImportProductsCommand(FileInputCommand):
    """Create or update products from a CSV file."""

    name = 'import'
    help = 'Import products from a CSV file'

    def __init__(self, config: Config, input_file: Path, batch_size: Optional[int] = None):
        """Initialize command.

        Args:
            config: Application configuration
            input_file: Path to input CSV file
            batch_size: Rows per batch, defaults to the configured batch size
        """
        super().__init__(config, input_file)
        self.batch_size = batch_size or config.batch_size

    @command_error_handler
    def execute(self) -> int:
        """Execute the command.

        Returns:
            Exit code, 1 when any row or batch failed
        """
        if not self.validate():
            raise click.ClickException(f"Cannot read {self.input_file}")

        processor = ProductImportProcessor(self.app.catalog, self.batch_size, debug=self.debug)
        self.logger.info(f"Batch size: {self.batch_size}")

        results = processor.process_file(str(self.input_file))
        stats = results['summary']['stats']
        processor.error_tracker.log_summary(self.logger)

        self.emit(
            results['summary'],
            lambda: [
                "Import complete:",
                f"  Rows processed: {stats['total_processed']}",
                f"  Created: {stats['created']}",
                f"  Updated: {stats['updated']}",
                f"  Skipped: {stats['skipped']}",
                f"  Rejected: {stats['validation_errors']}",
                f"  Failed batches: {stats['failed_batches']}",
            ]
        )
        return 0 if results['success'] else 1
