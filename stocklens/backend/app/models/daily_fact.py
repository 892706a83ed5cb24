"""
Daily fact model: one (product, date) measurement
"""
from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from app.database import Base


class DailyFact(Base):
    """
    Canonical time-series fact.

    (product_id, fact_date) is the natural key; a re-import touching the same
    pair overwrites every measure and repoints import_batch_id.
    """
    __tablename__ = "daily_facts"
    __table_args__ = (
        UniqueConstraint("product_id", "fact_date", name="uq_daily_facts_product_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    fact_date = Column(Date, nullable=False, index=True)

    opening_inventory = Column(Numeric(14, 2), nullable=False, default=0)
    procurement_qty = Column(Numeric(14, 2), nullable=False, default=0)
    procurement_price = Column(Numeric(14, 2), nullable=True)
    procurement_amount = Column(Numeric(14, 2), nullable=True)  # NULL = absent, not zero
    sales_qty = Column(Numeric(14, 2), nullable=False, default=0)
    sales_price = Column(Numeric(14, 2), nullable=True)
    sales_amount = Column(Numeric(14, 2), nullable=True)

    import_batch_id = Column(Integer, ForeignKey("import_batches.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    product = relationship("Product", back_populates="daily_facts")
    import_batch = relationship("ImportBatch", back_populates="daily_facts")
