"""
Dashboard data API: daily facts for the caller's products.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_current_user
from app.schemas.data import ProductSeriesResponse
from app.services.data_service import DataService

router = APIRouter()


def _parse_ids(raw: Optional[List[str]]) -> List[int]:
    """Keep only integer ids; anything else is ignored."""
    ids = []
    for value in raw or []:
        try:
            ids.append(int(value))
        except (TypeError, ValueError):
            continue
    return ids


@router.get("/data", response_model=ProductSeriesResponse)
def get_product_data(
    product_id: Optional[List[str]] = Query(None),
    current_user_and_db: tuple = Depends(get_current_user),
):
    """
    Products uploaded by the current user (optionally only ?product_id=...) and all their daily facts.
    """
    user, db = current_user_and_db
    return DataService.product_series(db, user.id, _parse_ids(product_id))
