"""Invoice model definition."""

from sqlalchemy import Column, String, DateTime, Numeric, Integer, Enum

from ...models import InvoiceStatus, PaymentMode
from .base import Base

class InvoiceRecord(Base):
    """Invoice model."""
    
    __tablename__ = 'Invoice'
    
    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    invoiceNumber = Column(String, unique=True, nullable=False)
    customerName = Column(String, nullable=False)
    customerEmail = Column(String, nullable=False)
    customerMobile = Column(String)
    subtotal = Column(Numeric(18, 6), nullable=False)
    discountPercent = Column(Numeric(9, 6), nullable=False)
    discountAmount = Column(Numeric(18, 6), nullable=False)
    cgst = Column(Numeric(18, 6), nullable=False)
    sgst = Column(Numeric(18, 6), nullable=False)
    totalAmount = Column(Numeric(18, 6), nullable=False)
    status = Column(Enum(InvoiceStatus), nullable=False)
    paymentMode = Column(Enum(PaymentMode), nullable=False)
    notes = Column(String)
    createdAt = Column(DateTime(timezone=True), nullable=False)
    createdById = Column(String)
    createdByName = Column(String)
    
    def __repr__(self):
        """Return string representation."""
        return f'<InvoiceRecord(id="{self.id}", number="{self.invoiceNumber}", customer="{self.customerName}")>'
