"""SQLAlchemy storage backend."""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..db.models import InvoiceItemRecord, InvoiceRecord, InvoiceSequenceRecord, ProductRecord
from ..db.session import SessionManager
from ..errors import PersistenceError
from ..models import ActingUser, Invoice, InvoiceItem, Product
from ..utils import generate_uuid
from .base import Storage

INVOICE_SEQUENCE = 'invoice'

def _aware(value: datetime) -> datetime:
    """SQLite drops tzinfo; stored times are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

def _money(value) -> Decimal:
    """Drop the trailing zeros added by fixed-scale columns."""
    normalized = Decimal(value).normalize()
    if normalized.as_tuple().exponent > 0:
        return normalized.quantize(Decimal(1))
    return normalized

class SqlStorage(Storage):
    """Stores products and invoices in a relational database.

    Each save replaces the collection inside a single transaction, so a
    failed save leaves the previous contents in place.

    Args:
        session_manager: Session manager bound to the target database
        debug: Enable debug logging
    """

    def __init__(self, session_manager: SessionManager, debug: bool = False):
        self.session_manager = session_manager
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)
        self.session_manager.create_tables()

    def load_products(self) -> List[Product]:
        try:
            with self.session_manager as session:
                records = session.query(ProductRecord).order_by(ProductRecord.position).all()
                products = [self._to_product(record) for record in records]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load products: {str(e)}") from e

        if self.debug:
            self.logger.debug(f"Loaded {len(products)} products")
        return products

    def save_products(self, products: Sequence[Product]) -> None:
        try:
            with self.session_manager as session:
                session.query(ProductRecord).delete()
                session.add_all([
                    self._from_product(product, position)
                    for position, product in enumerate(products)
                ])
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save products: {str(e)}") from e

        if self.debug:
            self.logger.debug(f"Saved {len(products)} products")

    def load_invoices(self) -> List[Invoice]:
        try:
            with self.session_manager as session:
                records = session.query(InvoiceRecord).order_by(InvoiceRecord.position).all()
                item_records = session.query(InvoiceItemRecord).order_by(
                    InvoiceItemRecord.invoiceId,
                    InvoiceItemRecord.position
                ).all()

                items_by_invoice: Dict[str, List[InvoiceItem]] = defaultdict(list)
                for item_record in item_records:
                    items_by_invoice[item_record.invoiceId].append(self._to_item(item_record))

                invoices = [
                    self._to_invoice(record, items_by_invoice.get(record.id, []))
                    for record in records
                ]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load invoices: {str(e)}") from e

        if self.debug:
            self.logger.debug(f"Loaded {len(invoices)} invoices")
        return invoices

    def save_invoices(self, invoices: Sequence[Invoice], sequence: Optional[int] = None) -> None:
        try:
            with self.session_manager as session:
                session.query(InvoiceItemRecord).delete()
                session.query(InvoiceRecord).delete()
                session.flush()
                for position, invoice in enumerate(invoices):
                    session.add(self._from_invoice(invoice, position))
                session.flush()
                for invoice in invoices:
                    session.add_all([
                        self._from_item(invoice.id, item, item_position)
                        for item_position, item in enumerate(invoice.items)
                    ])
                if sequence is not None:
                    session.merge(InvoiceSequenceRecord(name=INVOICE_SEQUENCE, value=sequence))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save invoices: {str(e)}") from e

        if self.debug:
            self.logger.debug(f"Saved {len(invoices)} invoices")

    def load_invoice_sequence(self) -> int:
        try:
            with self.session_manager as session:
                record = session.get(InvoiceSequenceRecord, INVOICE_SEQUENCE)
                sequence = record.value if record is not None else 0
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load invoice sequence: {str(e)}") from e

        return sequence

    @staticmethod
    def _to_product(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            sku=record.sku,
            hsn=record.hsn or '',
            mrp=_money(record.mrp),
            selling_price=_money(record.sellingPrice),
            purchase_price=_money(record.purchasePrice),
            quantity=record.quantity,
            unit=record.unit,
            category=record.category,
            low_stock_threshold=record.lowStockThreshold,
            gst_rate=record.gstRate,
            description=record.description,
            image=record.image,
            created_at=_aware(record.createdAt),
            updated_at=_aware(record.updatedAt)
        )

    @staticmethod
    def _from_product(product: Product, position: int) -> ProductRecord:
        return ProductRecord(
            id=product.id,
            position=position,
            sku=product.sku,
            name=product.name,
            hsn=product.hsn,
            mrp=product.mrp,
            sellingPrice=product.selling_price,
            purchasePrice=product.purchase_price,
            quantity=product.quantity,
            unit=product.unit,
            category=product.category,
            lowStockThreshold=product.low_stock_threshold,
            gstRate=product.gst_rate,
            description=product.description,
            image=product.image,
            createdAt=product.created_at,
            updatedAt=product.updated_at
        )

    @staticmethod
    def _to_item(record: InvoiceItemRecord) -> InvoiceItem:
        return InvoiceItem(
            product_id=record.productId,
            product_name=record.productName,
            hsn=record.hsn or '',
            quantity=record.quantity,
            unit_price=_money(record.unitPrice),
            gst_rate=record.gstRate,
            gst_amount=_money(record.gstAmount),
            total=_money(record.total)
        )

    @staticmethod
    def _from_item(invoice_id: str, item: InvoiceItem, position: int) -> InvoiceItemRecord:
        return InvoiceItemRecord(
            id=generate_uuid(),
            invoiceId=invoice_id,
            position=position,
            productId=item.product_id,
            productName=item.product_name,
            hsn=item.hsn,
            quantity=item.quantity,
            unitPrice=item.unit_price,
            gstRate=item.gst_rate,
            gstAmount=item.gst_amount,
            total=item.total
        )

    @staticmethod
    def _to_invoice(record: InvoiceRecord, items: List[InvoiceItem]) -> Invoice:
        return Invoice(
            id=record.id,
            invoice_number=record.invoiceNumber,
            customer_name=record.customerName,
            customer_email=record.customerEmail,
            customer_mobile=record.customerMobile or '',
            items=tuple(items),
            subtotal=_money(record.subtotal),
            discount_percent=_money(record.discountPercent),
            discount_amount=_money(record.discountAmount),
            cgst=_money(record.cgst),
            sgst=_money(record.sgst),
            total=_money(record.totalAmount),
            status=record.status,
            payment_mode=record.paymentMode,
            notes=record.notes,
            created_at=_aware(record.createdAt),
            created_by=ActingUser(id=record.createdById or '', name=record.createdByName or '')
        )

    @staticmethod
    def _from_invoice(invoice: Invoice, position: int) -> InvoiceRecord:
        return InvoiceRecord(
            id=invoice.id,
            position=position,
            invoiceNumber=invoice.invoice_number,
            customerName=invoice.customer_name,
            customerEmail=invoice.customer_email,
            customerMobile=invoice.customer_mobile,
            subtotal=invoice.subtotal,
            discountPercent=invoice.discount_percent,
            discountAmount=invoice.discount_amount,
            cgst=invoice.cgst,
            sgst=invoice.sgst,
            totalAmount=invoice.total,
            status=invoice.status,
            paymentMode=invoice.payment_mode,
            notes=invoice.notes,
            createdAt=invoice.created_at,
            createdById=invoice.created_by.id,
            createdByName=invoice.created_by.name
        )
