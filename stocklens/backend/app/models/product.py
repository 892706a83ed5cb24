"""
Product model
"""
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from app.database import Base


class Product(Base):
    """
    Product identity.

    product_code is the business key from the spreadsheet "ID" column and is
    unique across the whole store. The name is set on first import only.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_code = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    uploaded_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    owner = relationship("User", back_populates="products")
    daily_facts = relationship("DailyFact", back_populates="product")
