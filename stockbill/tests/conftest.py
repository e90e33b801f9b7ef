"""Shared test fixtures and utilities."""

import csv
import logging
import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from stockbill.auth import StaticIdentity
from stockbill.cli.config import Config
from stockbill.app import Application
from stockbill.db.session import SessionManager
from stockbill.models import ActingUser, Product, Unit
from stockbill.notifications import CollectingNotifier
from stockbill.processors.line_item_editor import LineItemEditor
from stockbill.storage import MemoryStorage
from stockbill.stores import CatalogStore, InvoiceStore
from stockbill.utils.demo_data import demo_invoices, demo_products

NOW = datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

def make_product(product_id='p1', sku=None, selling_price='100', quantity=10, gst_rate=18,
                 low_stock_threshold=5, category='Electronics', name=None, **kwargs):
    """Build a Product with sensible defaults."""
    return Product(
        id=product_id,
        name=name or f"Product {product_id}",
        sku=sku or f"SKU-{product_id}",
        hsn=kwargs.pop('hsn', '8471'),
        mrp=Decimal(kwargs.pop('mrp', '0')),
        selling_price=Decimal(selling_price),
        purchase_price=Decimal(kwargs.pop('purchase_price', '0')),
        quantity=quantity,
        unit=kwargs.pop('unit', Unit.PCS),
        category=category,
        low_stock_threshold=low_stock_threshold,
        gst_rate=gst_rate,
        created_at=NOW,
        updated_at=NOW,
        **kwargs
    )

@pytest.fixture
def products():
    """Two plain products: p1 at 100 (18% GST, 5 in stock) and p2 at 50 (12% GST, 20 in stock)."""
    return [
        make_product('p1', selling_price='100', quantity=5, gst_rate=18),
        make_product('p2', selling_price='50', quantity=20, gst_rate=12, category='Cables'),
    ]

@pytest.fixture
def notifier():
    return CollectingNotifier()

@pytest.fixture
def storage(products):
    return MemoryStorage(products=products)

@pytest.fixture
def catalog(storage, notifier):
    return CatalogStore(storage, notifier)

@pytest.fixture
def invoice_store(storage, notifier):
    return InvoiceStore(storage, notifier)

@pytest.fixture
def editor(catalog):
    return LineItemEditor(catalog.get)

@pytest.fixture
def filled_editor(editor):
    """Editor with a valid customer and one row of p1 at quantity 2."""
    editor.set_customer(name='Raj Sharma', email='raj@example.com', mobile='9876543210')
    index = editor.add_row()
    editor.select_product(index, 'p1')
    editor.set_quantity(index, 2)
    return editor

@pytest.fixture
def demo_storage():
    return MemoryStorage(products=demo_products(NOW), invoices=demo_invoices(NOW))

@pytest.fixture
def acting_user():
    return ActingUser(id='1', name='Admin User')

@pytest.fixture
def session_manager():
    """Session manager on a private in-memory SQLite database."""
    manager = SessionManager('sqlite:///:memory:')
    yield manager
    manager.dispose()

@pytest.fixture
def test_config(tmp_path):
    return Config(database_url=f"sqlite:///{tmp_path / 'stockbill.db'}", seed_demo_data=False)

@pytest.fixture
def app(storage, notifier, acting_user, test_config):
    """Application over in-memory storage with a fixed acting user."""
    return Application(
        test_config,
        storage=storage,
        notifier=notifier,
        identity=StaticIdentity(acting_user)
    )

def create_test_csv(rows, fieldnames=None):
    """Create a temporary CSV file with test data."""
    fieldnames = fieldnames or list(rows[0].keys())
    fd, path = tempfile.mkstemp(suffix='.csv')
    with open(fd, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return Path(path)

@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root logger changes made by CLI invocations."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
