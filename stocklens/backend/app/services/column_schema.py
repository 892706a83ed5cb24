"""
Column schema detection for wide-format daily spreadsheets.

Headers such as "Procurement Qty (Day 3)" are parsed into typed tags
(kind + day index) once, so row extraction never builds header strings by hand.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

# "Day" + optional whitespace + digits, anywhere in the label
DAY_PATTERN = re.compile(r"day\s*(\d+)", re.IGNORECASE)

_MEASURE_PATTERN = re.compile(
    r"^\s*(?P<side>procurement|sales)[\s_]*(?P<measure>qty|quantity|price|amount)(?![a-z])",
    re.IGNORECASE,
)

# Identity columns: first alias present in the headers wins
CODE_COLUMNS = ["ID", "Product Code", "Code", "SKU"]
NAME_COLUMNS = ["Product Name", "Name"]
OPENING_INVENTORY_COLUMNS = ["Opening Inventory", "Opening Stock"]


class ColumnKind(str, Enum):
    PROCUREMENT_QTY = "procurement_qty"
    PROCUREMENT_PRICE = "procurement_price"
    PROCUREMENT_AMOUNT = "procurement_amount"
    SALES_QTY = "sales_qty"
    SALES_PRICE = "sales_price"
    SALES_AMOUNT = "sales_amount"
    OTHER = "other"
    # identity columns (not day-indexed)
    PRODUCT_CODE = "product_code"
    PRODUCT_NAME = "product_name"
    OPENING_INVENTORY = "opening_inventory"


_KIND_BY_MEASURE = {
    ("procurement", "qty"): ColumnKind.PROCUREMENT_QTY,
    ("procurement", "quantity"): ColumnKind.PROCUREMENT_QTY,
    ("procurement", "price"): ColumnKind.PROCUREMENT_PRICE,
    ("procurement", "amount"): ColumnKind.PROCUREMENT_AMOUNT,
    ("sales", "qty"): ColumnKind.SALES_QTY,
    ("sales", "quantity"): ColumnKind.SALES_QTY,
    ("sales", "price"): ColumnKind.SALES_PRICE,
    ("sales", "amount"): ColumnKind.SALES_AMOUNT,
}


@dataclass(frozen=True)
class ColumnTag:
    kind: ColumnKind
    day_index: int


@lru_cache(maxsize=4096)
def parse_header(label: str) -> Optional[ColumnTag]:
    """
    Tag a day-indexed column label. Returns None for labels without "Day N".
    Labels with a day index but no recognised measure are tagged OTHER
    (they still count towards the detected day range).
    """
    day = DAY_PATTERN.search(label)
    if not day:
        return None
    day_index = int(day.group(1))
    m = _MEASURE_PATTERN.match(label)
    if not m:
        return ColumnTag(ColumnKind.OTHER, day_index)
    kind = _KIND_BY_MEASURE[(m.group("side").lower(), m.group("measure").lower())]
    return ColumnTag(kind, day_index)


def detect_max_day(row: Iterable) -> int:
    """
    Maximum "Day N" index referenced by the row's column labels (a row mapping or the labels themselves).
    Example: Day 1, Day 2, Day 3 -> 3. No day columns -> 0.
    """
    max_day = 0
    for key in row:
        tag = parse_header(str(key))
        if tag and tag.day_index > max_day:
            max_day = tag.day_index
    return max_day


def _normalized(name: str) -> str:
    return name.replace(" ", "_").replace("-", "_").lower()


def match_alias(labels: List[str], aliases: List[str]) -> Optional[str]:
    """
    Pick the header that answers to one of the aliases.
    Aliases are tried in order; each one tries an exact match, then case-insensitive,
    then spaces/dashes/underscores normalized.
    """
    for alias in aliases:
        if alias in labels:
            return alias
        lowered = alias.lower()
        for label in labels:
            if label.lower() == lowered:
                return label
        wanted = _normalized(alias)
        for label in labels:
            if _normalized(label) == wanted:
                return label
    return None


_IDENTITY_ALIASES = {
    ColumnKind.PRODUCT_CODE: CODE_COLUMNS,
    ColumnKind.PRODUCT_NAME: NAME_COLUMNS,
    ColumnKind.OPENING_INVENTORY: OPENING_INVENTORY_COLUMNS,
}


@dataclass
class ColumnSchema:
    """Column lookup for one set of headers: identity kind -> label, (kind, day) -> label."""

    max_day: int = 0
    identity: Dict[ColumnKind, str] = field(default_factory=dict)
    columns: Dict[Tuple[ColumnKind, int], str] = field(default_factory=dict)

    @classmethod
    def from_labels(cls, labels: Iterable) -> "ColumnSchema":
        schema = cls()
        texts = [str(label) for label in labels]
        schema.max_day = detect_max_day(texts)
        for text in texts:
            tag = parse_header(text)
            if tag is not None and tag.kind is not ColumnKind.OTHER:
                # first label wins if a sheet repeats a header
                schema.columns.setdefault((tag.kind, tag.day_index), text)
        for kind, aliases in _IDENTITY_ALIASES.items():
            label = match_alias(texts, aliases)
            if label is not None:
                schema.identity[kind] = label
        return schema

    def label_for(self, kind: ColumnKind, day_index: int) -> Optional[str]:
        return self.columns.get((kind, day_index))

    def value(self, row: Mapping, kind: ColumnKind, day_index: int):
        label = self.label_for(kind, day_index)
        return row.get(label) if label is not None else None

    def identity_value(self, row: Mapping, kind: ColumnKind):
        label = self.identity.get(kind)
        return row.get(label) if label is not None else None

    def has(self, row: Mapping, kind: ColumnKind, day_index: int) -> bool:
        """True when the column exists and the cell is not blank."""
        v = self.value(row, kind, day_index)
        if v is None:
            return False
        if isinstance(v, float) and v != v:  # NaN
            return False
        return not (isinstance(v, str) and not v.strip())
