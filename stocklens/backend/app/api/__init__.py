"""
API routes for StockLens
"""
from .upload import router as upload_router
from .data import router as data_router
from .account import router as account_router

__all__ = [
    "upload_router",
    "data_router",
    "account_router",
]
