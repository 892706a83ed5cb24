"""
Read path for the dashboard: the caller's products and their daily facts.
"""
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import DailyFact, ImportBatch, Product


def _as_float(value) -> float:
    if value is None:
        return 0.0
    return float(value)


def _amount_or_derived(amount: Optional[Decimal], qty, price) -> float:
    """Stored amount when present, otherwise qty x price."""
    if amount is not None:
        return float(amount)
    return _as_float(qty) * _as_float(price)


class DataService:

    @staticmethod
    def list_products(db: Session, owner_id: int, product_ids: Optional[Sequence[int]] = None) -> List[Product]:
        query = db.query(Product).filter(Product.uploaded_by == owner_id)
        if product_ids:
            query = query.filter(Product.id.in_(list(product_ids)))
        return query.order_by(Product.name.asc()).all()

    @staticmethod
    def product_series(db: Session, owner_id: int, product_ids: Optional[Sequence[int]] = None) -> Dict:
        """
        Return {"products": [...], "data": [...]} for the chart panel.
        Facts are ordered by date, then product.
        """
        products = DataService.list_products(db, owner_id, product_ids)
        if not products:
            return {"products": [], "data": []}

        name_by_id = {p.id: p.name for p in products}
        facts = (
            db.query(DailyFact)
            .filter(DailyFact.product_id.in_(list(name_by_id.keys())))
            .order_by(DailyFact.fact_date.asc(), DailyFact.product_id.asc())
            .all()
        )

        data = [
            {
                "product_id": f.product_id,
                "product_name": name_by_id.get(f.product_id) or f"Product {f.product_id}",
                "date": f.fact_date.isoformat(),
                "opening_inventory": _as_float(f.opening_inventory),
                "procurement_qty": _as_float(f.procurement_qty),
                "procurement_price": _as_float(f.procurement_price),
                "procurement_amount": _amount_or_derived(f.procurement_amount, f.procurement_qty, f.procurement_price),
                "sales_qty": _as_float(f.sales_qty),
                "sales_price": _as_float(f.sales_price),
                "sales_amount": _amount_or_derived(f.sales_amount, f.sales_qty, f.sales_price),
            }
            for f in facts
        ]
        return {
            "products": [
                {"id": p.id, "name": p.name, "product_code": p.product_code}
                for p in products
            ],
            "data": data,
        }

    @staticmethod
    def import_stats(db: Session, user_id: int) -> Dict:
        product_count = db.query(func.count(Product.id)).filter(Product.uploaded_by == user_id).scalar() or 0
        import_count = db.query(func.count(ImportBatch.id)).filter(ImportBatch.user_id == user_id).scalar() or 0
        last = (
            db.query(ImportBatch.created_at)
            .filter(ImportBatch.user_id == user_id)
            .order_by(ImportBatch.created_at.desc(), ImportBatch.id.desc())
            .first()
        )
        return {
            "product_count": product_count,
            "import_count": import_count,
            "last_import": last[0] if last else None,
        }
