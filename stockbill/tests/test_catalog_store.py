"""Tests for the product catalog store."""

from decimal import Decimal

import pytest

from stockbill.errors import PersistenceError, StockExceededError, ValidationError
from stockbill.models import CLEAR, MutationResult, NewProduct, ProductUpdate, Unit
from stockbill.stores import CatalogStore
from .conftest import NOW, make_product

def new_product(**overrides):
    fields = dict(
        name='Keyboard',
        sku='KBD-010',
        hsn='8471',
        selling_price=Decimal('1499'),
        quantity=12,
        category='Accessories',
    )
    fields.update(overrides)
    return NewProduct(**fields)

def test_add_assigns_id_and_timestamps(catalog, notifier):
    product = catalog.add(new_product())

    assert product.id
    assert product.created_at == product.updated_at
    assert product.unit is Unit.PCS
    assert product.gst_rate == 18
    assert catalog.products[-1] == product
    assert notifier.titles == ["Product added"]

def test_add_persists(catalog, storage):
    product = catalog.add(new_product())

    assert [p.id for p in storage.load_products()][-1] == product.id

def test_add_rejects_invalid_fields(catalog, notifier):
    with pytest.raises(ValidationError) as exc_info:
        catalog.add(new_product(name=' ', selling_price=Decimal('0'), quantity=-1, category='Toys', gst_rate=7))

    errors = exc_info.value.errors
    assert set(errors) == {'name', 'sellingPrice', 'quantity', 'category', 'gstRate'}
    assert len(catalog.products) == 2
    assert notifier.titles == []

def test_add_rejects_duplicate_sku(catalog):
    with pytest.raises(ValidationError) as exc_info:
        catalog.add(new_product(sku='sku-p1'))

    assert 'sku' in exc_info.value.errors

def test_update_changes_fields_and_timestamp(catalog, notifier):
    result = catalog.update('p1', ProductUpdate(selling_price=Decimal('120'), quantity=8))

    assert result is MutationResult.UPDATED
    product = catalog.get('p1')
    assert product.selling_price == Decimal('120')
    assert product.quantity == 8
    assert product.name == 'Product p1'
    assert product.updated_at > NOW
    assert product.created_at == NOW
    assert notifier.titles == ["Product updated"]

def test_update_can_clear_description(catalog):
    catalog.update('p1', ProductUpdate(description='Refurbished'))
    assert catalog.get('p1').description == 'Refurbished'

    catalog.update('p1', ProductUpdate(description=CLEAR))

    product = catalog.get('p1')
    assert product.description is None
    assert product.name == 'Product p1'

def test_update_cannot_clear_name(catalog):
    with pytest.raises(ValidationError) as exc_info:
        catalog.update('p1', ProductUpdate(name=CLEAR))

    assert exc_info.value.errors == {'name': "Product name is required"}
    assert catalog.get('p1').name == 'Product p1'

def test_update_unknown_id_is_noop(catalog, storage, notifier):
    result = catalog.update('missing', ProductUpdate(quantity=1))

    assert result is MutationResult.NOT_FOUND
    assert storage.product_saves == 0
    assert notifier.titles == []

def test_update_may_keep_own_sku(catalog):
    assert catalog.update('p1', ProductUpdate(sku='SKU-P1')) is MutationResult.UPDATED

def test_update_rejects_sku_of_other_product(catalog):
    with pytest.raises(ValidationError):
        catalog.update('p1', ProductUpdate(sku='SKU-p2'))

def test_delete(catalog, notifier):
    assert catalog.delete('p1') is MutationResult.DELETED
    assert catalog.get('p1') is None
    assert notifier.notifications[-1].variant == 'destructive'
    assert catalog.delete('p1') is MutationResult.NOT_FOUND

def test_low_stock():
    """quantity 3 with threshold 5 is low; quantity 6 is not."""
    from stockbill.storage import MemoryStorage

    catalog = CatalogStore(MemoryStorage(products=[
        make_product('low', quantity=3, low_stock_threshold=5),
        make_product('ok', quantity=6, low_stock_threshold=5),
        make_product('edge', quantity=5, low_stock_threshold=5),
    ]))

    assert [product.id for product in catalog.low_stock()] == ['low', 'edge']

def test_deduct_and_restore_stock(catalog):
    deducted = catalog.deduct_stock({'p1': 2, 'p2': 5})

    assert catalog.get('p1').quantity == 3
    assert catalog.get('p2').quantity == 15

    catalog.restore_stock(deducted)
    assert catalog.get('p1').quantity == 5
    assert catalog.get('p2').quantity == 20

def test_deduct_checks_everything_first(catalog, storage):
    with pytest.raises(StockExceededError) as exc_info:
        catalog.deduct_stock({'p2': 1, 'p1': 6})

    assert exc_info.value.available == 5
    assert catalog.get('p2').quantity == 20
    assert storage.product_saves == 0

def test_failed_save_keeps_previous_state(catalog, storage):
    storage.fail_products_after = 0

    with pytest.raises(PersistenceError):
        catalog.update('p1', ProductUpdate(quantity=1))

    assert catalog.get('p1').quantity == 5

def test_catalog_loads_from_storage(storage):
    reloaded = CatalogStore(storage)
    assert [product.id for product in reloaded.products] == ['p1', 'p2']

def test_get_by_sku_is_case_insensitive(catalog):
    assert catalog.get_by_sku('sku-p2').id == 'p2'
    assert catalog.get_by_sku('nope') is None
