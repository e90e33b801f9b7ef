"""Product model definition."""

from sqlalchemy import Column, String, DateTime, Numeric, Integer, Enum

from ...models import Unit
from .base import Base

class ProductRecord(Base):
    """Product model."""
    
    __tablename__ = 'Product'
    
    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    sku = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    hsn = Column(String, nullable=False, default='')
    mrp = Column(Numeric(18, 6), nullable=False)
    sellingPrice = Column(Numeric(18, 6), nullable=False)
    purchasePrice = Column(Numeric(18, 6), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit = Column(Enum(Unit), nullable=False)
    category = Column(String, nullable=False)
    lowStockThreshold = Column(Integer, nullable=False)
    gstRate = Column(Integer, nullable=False)
    description = Column(String)
    image = Column(String)
    createdAt = Column(DateTime(timezone=True), nullable=False)
    updatedAt = Column(DateTime(timezone=True), nullable=False)
    
    def __repr__(self):
        """Return string representation."""
        return f'<ProductRecord(id="{self.id}", sku="{self.sku}", name="{self.name}")>'
