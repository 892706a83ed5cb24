"""
Database models for StockLens
"""
from app.database import Base

from .user import User
from .product import Product
from .import_batch import ImportBatch
from .daily_fact import DailyFact

__all__ = [
    "Base",
    "User",
    "Product",
    "ImportBatch",
    "DailyFact",
]
