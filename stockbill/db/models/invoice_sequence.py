"""Invoice sequence model definition."""

from sqlalchemy import Column, String, Integer

from .base import Base

class InvoiceSequenceRecord(Base):
    """Highest invoice sequence ever issued, one row per counter name."""
    
    __tablename__ = 'InvoiceSequence'
    
    name = Column(String, primary_key=True)
    value = Column(Integer, nullable=False, default=0)
    
    def __repr__(self):
        """Return string representation."""
        return f'<InvoiceSequenceRecord(name="{self.name}", value={self.value})>'
