"""Product catalog store."""

import logging
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Tuple

from ..errors import StockExceededError, ValidationError
from ..models import MutationResult, NewProduct, Product, ProductUpdate
from ..notifications import Notifier, send
from ..processors.validator import validate_new_product, validate_product_update
from ..storage.base import Storage
from ..utils import generate_uuid, utcnow

class CatalogStore:
    """Owns the product records.

    Every mutation is written through to storage. If the save fails the
    in-memory catalog is restored and the storage error propagates.

    Args:
        storage: Persistence backend
        notifier: Receives outcome notifications
        debug: Enable debug logging
    """

    def __init__(self, storage: Storage, notifier: Optional[Notifier] = None, debug: bool = False):
        self.storage = storage
        self.notifier = notifier
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)
        self._products: List[Product] = list(storage.load_products())

        if self.debug:
            self.logger.debug(f"Loaded catalog with {len(self._products)} products")

    @property
    def products(self) -> Tuple[Product, ...]:
        """Products in catalog (insertion) order."""
        return tuple(self._products)

    def _commit(self, products: List[Product]) -> None:
        self.storage.save_products(products)
        self._products = products

    def _index_of(self, product_id: str) -> Optional[int]:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        return None

    def get(self, product_id: str) -> Optional[Product]:
        """Return the product, or None when the id is unknown."""
        index = self._index_of(product_id)
        return self._products[index] if index is not None else None

    def get_by_sku(self, sku: str) -> Optional[Product]:
        wanted = (sku or '').strip().lower()
        for product in self._products:
            if product.sku.strip().lower() == wanted:
                return product
        return None

    def add(self, new_product: NewProduct) -> Product:
        """Add a product with a fresh id and timestamps.

        Raises:
            ValidationError: if any field is invalid or the SKU is taken
        """
        errors = validate_new_product(new_product, self._products)
        if errors:
            raise ValidationError(errors)

        now = utcnow()
        product = Product(
            id=generate_uuid(),
            name=new_product.name.strip(),
            sku=new_product.sku.strip(),
            hsn=(new_product.hsn or '').strip(),
            mrp=new_product.mrp,
            selling_price=new_product.selling_price,
            purchase_price=new_product.purchase_price,
            quantity=new_product.quantity,
            unit=new_product.unit,
            category=new_product.category,
            low_stock_threshold=new_product.low_stock_threshold,
            gst_rate=new_product.gst_rate,
            description=new_product.description,
            image=new_product.image,
            created_at=now,
            updated_at=now
        )
        self._commit(self._products + [product])

        self.logger.info(f"Added product {product.sku} ({product.name})")
        send(self.notifier, "Product added", f"{product.name} has been added to the inventory")
        return product

    def update(self, product_id: str, update: ProductUpdate) -> MutationResult:
        """Apply an update and refresh ``updated_at``.

        Unknown ids are a no-op returning NOT_FOUND.

        Raises:
            ValidationError: if a changed field is invalid
        """
        index = self._index_of(product_id)
        if index is None:
            self.logger.debug(f"Update for unknown product {product_id} ignored")
            return MutationResult.NOT_FOUND

        errors = validate_product_update(product_id, update, self._products)
        if errors:
            raise ValidationError(errors)

        products = list(self._products)
        products[index] = replace(products[index], **update.changes(), updated_at=utcnow())
        self._commit(products)

        if self.debug:
            self.logger.debug(f"Updated product {product_id}: {sorted(update.changes())}")
        send(self.notifier, "Product updated", "The product has been successfully updated")
        return MutationResult.UPDATED

    def delete(self, product_id: str) -> MutationResult:
        """Remove a product. Invoices keep their copies of its fields."""
        index = self._index_of(product_id)
        if index is None:
            self.logger.debug(f"Delete for unknown product {product_id} ignored")
            return MutationResult.NOT_FOUND

        removed = self._products[index]
        self._commit(self._products[:index] + self._products[index + 1:])

        self.logger.info(f"Deleted product {removed.sku}")
        send(self.notifier, "Product deleted", f"{removed.name} has been removed", 'destructive')
        return MutationResult.DELETED

    def low_stock(self) -> List[Product]:
        """Products at or below their threshold, in catalog order."""
        return [product for product in self._products if product.is_low_stock]

    def check_stock(self, quantities: Mapping[str, int]) -> None:
        """Verify every requested quantity is available.

        Raises:
            StockExceededError: for the first product that is short
        """
        for product_id, quantity in quantities.items():
            product = self.get(product_id)
            available = product.quantity if product else 0
            if product is None or quantity > available:
                raise StockExceededError(product_id, quantity, available, product.name if product else None)

    def deduct_stock(self, quantities: Mapping[str, int]) -> Dict[str, int]:
        """Decrease stock for sold products in one write.

        All quantities are checked before anything changes.

        Returns:
            The deltas applied, for ``restore_stock``
        """
        self.check_stock(quantities)
        self._apply_deltas({product_id: -quantity for product_id, quantity in quantities.items()})
        return dict(quantities)

    def restore_stock(self, quantities: Mapping[str, int]) -> None:
        """Give back stock taken by ``deduct_stock``.

        Products deleted in the meantime are skipped.
        """
        self._apply_deltas(dict(quantities))

    def _apply_deltas(self, deltas: Mapping[str, int]) -> None:
        now = utcnow()
        products = [
            replace(product, quantity=product.quantity + deltas[product.id], updated_at=now)
            if product.id in deltas else product
            for product in self._products
        ]
        self._commit(products)

        if self.debug:
            self.logger.debug(f"Applied stock deltas {dict(deltas)}")
