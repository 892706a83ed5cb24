"""
Daily fact upsert keyed by (product_id, fact_date).
Runs inside the caller's transaction; the caller commits.
"""
from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy import Date, bindparam, text
from sqlalchemy.orm import Session

_UPSERT_DAILY_FACT = text("""
    INSERT INTO daily_facts
        (product_id, fact_date, opening_inventory,
         procurement_qty, procurement_price, procurement_amount,
         sales_qty, sales_price, sales_amount,
         import_batch_id, created_at, updated_at)
    VALUES
        (:product_id, :fact_date, :opening_inventory,
         :procurement_qty, :procurement_price, :procurement_amount,
         :sales_qty, :sales_price, :sales_amount,
         :import_batch_id, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
    ON CONFLICT (product_id, fact_date) DO UPDATE SET
        opening_inventory = EXCLUDED.opening_inventory,
        procurement_qty = EXCLUDED.procurement_qty,
        procurement_price = EXCLUDED.procurement_price,
        procurement_amount = EXCLUDED.procurement_amount,
        sales_qty = EXCLUDED.sales_qty,
        sales_price = EXCLUDED.sales_price,
        sales_amount = EXCLUDED.sales_amount,
        import_batch_id = EXCLUDED.import_batch_id,
        updated_at = CURRENT_TIMESTAMP
""").bindparams(bindparam("fact_date", type_=Date))


def _num(value) -> Optional[float]:
    if value is None:
        return None
    return float(value)


class FactUpsertService:
    """Last-write-wins writes for daily facts."""

    @staticmethod
    def upsert_daily_fact(
        db: Session,
        product_id: int,
        fact_date: date,
        measures: Dict[str, Optional[Decimal]],
        import_batch_id: int,
    ) -> None:
        """Insert the fact, or overwrite every measure and repoint import_batch_id if (product, date) exists."""
        db.execute(
            _UPSERT_DAILY_FACT,
            {
                "product_id": product_id,
                "fact_date": fact_date,
                "opening_inventory": _num(measures.get("opening_inventory")) or 0.0,
                "procurement_qty": _num(measures.get("procurement_qty")) or 0.0,
                "procurement_price": _num(measures.get("procurement_price")),
                "procurement_amount": _num(measures.get("procurement_amount")),
                "sales_qty": _num(measures.get("sales_qty")) or 0.0,
                "sales_price": _num(measures.get("sales_price")),
                "sales_amount": _num(measures.get("sales_amount")),
                "import_batch_id": import_batch_id,
            },
        )
