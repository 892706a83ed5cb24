"""
Business logic services for StockLens
"""
from .data_service import DataService
from .entity_reconciler import ProductReconciler
from .fact_upsert_service import FactUpsertService
from .import_errors import ImportStoreError, MalformedUploadError
from .import_service import ImportResult, ImportService

__all__ = [
    "DataService",
    "ProductReconciler",
    "FactUpsertService",
    "ImportService",
    "ImportResult",
    "ImportStoreError",
    "MalformedUploadError",
]
