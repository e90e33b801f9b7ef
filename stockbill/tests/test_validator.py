"""Tests for product and customer validation."""

from decimal import Decimal

from stockbill.models import InvoiceDraft, NewProduct, ProductUpdate
from stockbill.processors.validator import validate_customer, validate_new_product, validate_product_update
from .conftest import make_product

def test_valid_customer():
    draft = InvoiceDraft(customer_name='Ananya Joshi', customer_email='ananya@example.com', customer_mobile='7654321098')
    assert validate_customer(draft) == {}

def test_mobile_is_optional():
    draft = InvoiceDraft(customer_name='Ananya Joshi', customer_email='ananya@example.com')
    assert validate_customer(draft) == {}

def test_customer_email_must_have_domain():
    draft = InvoiceDraft(customer_name='A', customer_email='a @example.com')
    assert validate_customer(draft) == {'customerEmail': "Please enter a valid email address"}

def test_new_product_minimal():
    product = NewProduct(name='Mouse', sku='M-1', hsn='', selling_price=Decimal('10'), quantity=0, category='Accessories')
    assert validate_new_product(product) == {}

def test_new_product_missing_values():
    product = NewProduct(name='', sku='', hsn='', selling_price=None, quantity=None, category=None)
    errors = validate_new_product(product)

    assert errors['name'] == "Product name is required"
    assert errors['sku'] == "SKU is required"
    assert errors['sellingPrice'] == "Price must be greater than zero"
    assert errors['quantity'] == "Quantity must be a whole number"
    assert errors['category'] == "Category is required"

def test_negative_purchase_price():
    product = NewProduct(name='X', sku='X-1', hsn='', selling_price=Decimal('5'), quantity=1,
                         category='Software', purchase_price=Decimal('-1'))
    assert validate_new_product(product) == {'purchasePrice': "Price cannot be negative"}

def test_update_checks_only_set_fields():
    products = [make_product('p1'), make_product('p2')]

    assert validate_product_update('p1', ProductUpdate(quantity=3), products) == {}
    assert validate_product_update('p1', ProductUpdate(low_stock_threshold=-2), products) == {
        'lowStockThreshold': "Threshold cannot be negative"
    }
    assert 'sku' in validate_product_update('p1', ProductUpdate(sku='sku-P2'), products)
