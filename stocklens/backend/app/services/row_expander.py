"""
Row expansion: wide spreadsheet rows -> per-product, per-day fact records.

Pure and in-memory; no database access happens here.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence

from app.services.column_schema import ColumnKind, ColumnSchema
from app.services.value_normalizer import normalize_code, parse_money, parse_quantity, to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductCandidate:
    code: str
    name: str


@dataclass
class FactRecord:
    """One (product code, date) fact waiting to be upserted."""

    code: str
    fact_date: date
    opening_inventory: float
    procurement_qty: float
    procurement_price: Optional[Decimal]
    procurement_amount: Optional[Decimal]
    sales_qty: float
    sales_price: Optional[Decimal]
    sales_amount: Optional[Decimal]

    def measures(self) -> Dict:
        return {
            "opening_inventory": self.opening_inventory,
            "procurement_qty": self.procurement_qty,
            "procurement_price": self.procurement_price,
            "procurement_amount": self.procurement_amount,
            "sales_qty": self.sales_qty,
            "sales_price": self.sales_price,
            "sales_amount": self.sales_amount,
        }


@dataclass
class ExpansionResult:
    candidates: List[ProductCandidate] = field(default_factory=list)
    facts: List[FactRecord] = field(default_factory=list)
    rows_seen: int = 0
    rows_skipped: int = 0


def day_range(max_day: int, today: Optional[date] = None) -> List[date]:
    """
    Calendar dates for day indexes 1..max_day.
    The sheet carries no dates: day max_day is today, day 1 is max_day - 1 days earlier.
    """
    end = today or date.today()
    start = end - timedelta(days=max_day - 1)
    return [start + timedelta(days=d) for d in range(max_day)]


def _amount(row: Mapping, schema: ColumnSchema, kind: ColumnKind, day: int, qty: float, price: float) -> Optional[Decimal]:
    # An explicit amount column beats the derived qty x price
    if schema.has(row, kind, day):
        return to_money(parse_money(schema.value(row, kind, day)))
    return to_money(qty * price)


def expand_row(row: Mapping, today: Optional[date] = None, schema: Optional[ColumnSchema] = None) -> Optional[tuple]:
    """
    Expand one row. Returns (ProductCandidate, [FactRecord, ...]) or None when the
    row has no code/name or no day columns.
    Pass the sheet's schema to skip re-tagging the headers.
    """
    if schema is None:
        schema = ColumnSchema.from_labels(row.keys())

    code = normalize_code(schema.identity_value(row, ColumnKind.PRODUCT_CODE))
    name = normalize_code(schema.identity_value(row, ColumnKind.PRODUCT_NAME))
    if not code or not name:
        return None

    max_day = schema.max_day
    if max_day == 0:
        return None

    candidate = ProductCandidate(code=code, name=name)
    dates = day_range(max_day, today)

    inventory = parse_quantity(schema.identity_value(row, ColumnKind.OPENING_INVENTORY))
    facts: List[FactRecord] = []

    for d in range(1, max_day + 1):
        p_qty = parse_quantity(schema.value(row, ColumnKind.PROCUREMENT_QTY, d))
        p_price = parse_money(schema.value(row, ColumnKind.PROCUREMENT_PRICE, d))
        s_qty = parse_quantity(schema.value(row, ColumnKind.SALES_QTY, d))
        s_price = parse_money(schema.value(row, ColumnKind.SALES_PRICE, d))

        # No activity that day: nothing stored, inventory unchanged
        if p_qty == 0 and p_price == 0 and s_qty == 0 and s_price == 0:
            continue

        facts.append(FactRecord(
            code=code,
            fact_date=dates[d - 1],
            opening_inventory=inventory,
            procurement_qty=p_qty,
            procurement_price=to_money(p_price),
            procurement_amount=_amount(row, schema, ColumnKind.PROCUREMENT_AMOUNT, d, p_qty, p_price),
            sales_qty=s_qty,
            sales_price=to_money(s_price),
            sales_amount=_amount(row, schema, ColumnKind.SALES_AMOUNT, d, s_qty, s_price),
        ))

        # Opening + Purchases - Sales
        inventory = inventory + p_qty - s_qty

    return candidate, facts


def expand_rows(rows: Sequence[Mapping], today: Optional[date] = None) -> ExpansionResult:
    """Expand every row of a sheet; skipped rows are counted, never raised."""
    today = today or date.today()
    result = ExpansionResult()
    schemas: Dict[tuple, ColumnSchema] = {}
    for row in rows:
        result.rows_seen += 1
        headers = tuple(row.keys())
        schema = schemas.get(headers)
        if schema is None:
            schema = schemas[headers] = ColumnSchema.from_labels(headers)
        expanded = expand_row(row, today, schema)
        if expanded is None:
            result.rows_skipped += 1
            continue
        candidate, facts = expanded
        result.candidates.append(candidate)
        result.facts.extend(facts)

    logger.info(
        "Expanded %d rows: %d products, %d daily facts (%d rows skipped)",
        result.rows_seen, len(result.candidates), len(result.facts), result.rows_skipped,
    )
    return result
