"""
Dashboard data schemas
"""
from typing import List

from pydantic import BaseModel


class ProductSummary(BaseModel):
    id: int
    name: str
    product_code: str


class DailyFactPoint(BaseModel):
    """One chart point; amounts fall back to qty x price when not stored"""
    product_id: int
    product_name: str
    date: str
    opening_inventory: float
    procurement_qty: float
    procurement_price: float
    procurement_amount: float
    sales_qty: float
    sales_price: float
    sales_amount: float


class ProductSeriesResponse(BaseModel):
    products: List[ProductSummary]
    data: List[DailyFactPoint]
