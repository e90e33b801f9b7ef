"""InvoiceItem model definition."""

from sqlalchemy import Column, String, Numeric, Integer, ForeignKey

from .base import Base

class InvoiceItemRecord(Base):
    """InvoiceItem model.

    productId is not a foreign key; invoice lines outlive the product.
    """
    
    __tablename__ = 'InvoiceItem'
    
    id = Column(String, primary_key=True)
    invoiceId = Column(String, ForeignKey('Invoice.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False)
    productId = Column(String, nullable=False)
    productName = Column(String, nullable=False)
    hsn = Column(String)
    quantity = Column(Integer, nullable=False)
    unitPrice = Column(Numeric(18, 6), nullable=False)
    gstRate = Column(Integer, nullable=False)
    gstAmount = Column(Numeric(18, 6), nullable=False)
    total = Column(Numeric(18, 6), nullable=False)
    
    def __repr__(self):
        """Return string representation."""
        return f'<InvoiceItemRecord(id="{self.id}", invoice="{self.invoiceId}", product="{self.productId}")>'
