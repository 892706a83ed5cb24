"""
Pydantic schemas for StockLens API
"""
from .upload import UploadResponse
from .data import DailyFactPoint, ProductSummary, ProductSeriesResponse
from .account import AccountResponse, AccountStats, AccountUser

__all__ = [
    "UploadResponse",
    "DailyFactPoint",
    "ProductSummary",
    "ProductSeriesResponse",
    "AccountResponse",
    "AccountStats",
    "AccountUser",
]
