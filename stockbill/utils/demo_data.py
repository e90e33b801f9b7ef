"""Demo catalog and invoices used to seed an empty store."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from ..models import ActingUser, Invoice, InvoiceItem, InvoiceStatus, PaymentMode, Product, Unit
from .uuid import utcnow

# (id, name, sku, hsn, mrp, selling, purchase, quantity, category, description, threshold, gst)
DEMO_PRODUCTS: List[Tuple] = [
    ('1', 'Laptop', 'LPT-001', '8471', '49999.99', '45999.99', '40999.99', 15, 'Electronics',
     'High-performance laptop with 16GB RAM and 512GB SSD', 5, 18),
    ('2', 'Wireless Mouse', 'WMS-002', '8471', '1499.99', '1299.99', '899.99', 45, 'Accessories',
     'Ergonomic wireless mouse with long battery life', 10, 18),
    ('3', 'Monitor 24"', 'MNT-003', '8528', '12999.99', '9999.99', '7999.99', 8, 'Electronics',
     '24-inch LED monitor with HDR support', 3, 18),
    ('4', 'Headphones', 'HPH-004', '8518', '5999.99', '4999.99', '3499.99', 2, 'Audio',
     'Noise-cancelling over-ear headphones', 5, 18),
    ('5', 'USB Cable', 'USB-005', '8544', '599.99', '499.99', '249.99', 100, 'Cables',
     '6ft USB-C to USB-A cable', 20, 12),
]

def demo_products(now: Optional[datetime] = None) -> List[Product]:
    """Build the demo catalog."""
    now = now or utcnow()
    return [
        Product(
            id=product_id,
            name=name,
            sku=sku,
            hsn=hsn,
            mrp=Decimal(mrp),
            selling_price=Decimal(selling),
            purchase_price=Decimal(purchase),
            quantity=quantity,
            unit=Unit.PCS,
            category=category,
            low_stock_threshold=threshold,
            gst_rate=gst_rate,
            description=description,
            created_at=now,
            updated_at=now
        )
        for (product_id, name, sku, hsn, mrp, selling, purchase, quantity,
             category, description, threshold, gst_rate) in DEMO_PRODUCTS
    ]

def _item(product_id: str, name: str, hsn: str, quantity: int, unit_price: str, gst_rate: int, gst_amount: str) -> InvoiceItem:
    price = Decimal(unit_price)
    return InvoiceItem(
        product_id=product_id,
        product_name=name,
        hsn=hsn,
        quantity=quantity,
        unit_price=price,
        gst_rate=gst_rate,
        gst_amount=Decimal(gst_amount),
        total=price * quantity
    )

def demo_invoices(now: Optional[datetime] = None) -> List[Invoice]:
    """Build three historical invoices against the demo catalog.

    GST amounts are the rounded figures the invoices were issued with.
    """
    now = now or utcnow()
    admin = ActingUser(id='1', name='Admin User')
    staff = ActingUser(id='2', name='Staff User')

    return [
        Invoice(
            id='1',
            invoice_number='INV-001',
            customer_name='Raj Sharma',
            customer_email='raj@example.com',
            customer_mobile='9876543210',
            items=(
                _item('1', 'Laptop', '8471', 1, '45999.99', 18, '8280.00'),
                _item('2', 'Wireless Mouse', '8471', 1, '1299.99', 18, '234.00'),
            ),
            subtotal=Decimal('47299.98'),
            discount_percent=Decimal('0'),
            discount_amount=Decimal('0'),
            cgst=Decimal('4257.00'),
            sgst=Decimal('4257.00'),
            total=Decimal('55813.98'),
            status=InvoiceStatus.PAID,
            payment_mode=PaymentMode.CARD,
            created_at=now - timedelta(days=1),
            created_by=admin
        ),
        Invoice(
            id='2',
            invoice_number='INV-002',
            customer_name='Priya Patel',
            customer_email='priya@example.com',
            customer_mobile='8765432109',
            items=(
                _item('3', 'Monitor 24"', '8528', 2, '9999.99', 18, '3600.00'),
            ),
            subtotal=Decimal('19999.98'),
            discount_percent=Decimal('10'),
            discount_amount=Decimal('2000.00'),
            cgst=Decimal('1620.00'),
            sgst=Decimal('1620.00'),
            total=Decimal('21239.98'),
            status=InvoiceStatus.PENDING,
            payment_mode=PaymentMode.UPI,
            created_at=now - timedelta(hours=12),
            created_by=staff
        ),
        Invoice(
            id='3',
            invoice_number='INV-003',
            customer_name='Ananya Joshi',
            customer_email='ananya@example.com',
            customer_mobile='7654321098',
            items=(
                _item('4', 'Headphones', '8518', 1, '4999.99', 18, '900.00'),
                _item('5', 'USB Cable', '8544', 2, '499.99', 12, '120.00'),
            ),
            subtotal=Decimal('5999.97'),
            discount_percent=Decimal('0'),
            discount_amount=Decimal('0'),
            cgst=Decimal('510.00'),
            sgst=Decimal('510.00'),
            total=Decimal('7019.97'),
            status=InvoiceStatus.PAID,
            payment_mode=PaymentMode.CASH,
            created_at=now,
            created_by=admin
        ),
    ]
