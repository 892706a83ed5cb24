"""
Product reconciliation: map spreadsheet product codes to product ids.

Existing products are reused (their name is left alone); missing codes are
created once. Creation runs in a SAVEPOINT so a concurrent import that
creates the same code first is recovered by re-fetching instead of failing.
"""
import logging
from typing import Dict, Iterable, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Product
from app.services.row_expander import ProductCandidate

logger = logging.getLogger(__name__)


class ProductReconciler:
    """Create-or-reuse products by product_code."""

    @staticmethod
    def find_products_by_code(db: Session, codes: Iterable[str]) -> List[Product]:
        codes = list(codes)
        if not codes:
            return []
        return db.query(Product).filter(Product.product_code.in_(codes)).all()

    @staticmethod
    def create_product(db: Session, code: str, name: str, owner_id: int) -> Product:
        """Insert one product inside a savepoint. Raises IntegrityError if the code already exists."""
        with db.begin_nested():
            product = Product(product_code=code, name=name, uploaded_by=owner_id)
            db.add(product)
        return product

    @staticmethod
    def resolve(db: Session, candidates: Iterable[ProductCandidate], owner_id: int) -> Dict[str, int]:
        """
        Return {product_code: product_id} covering every distinct candidate code.
        When a code repeats in the sheet the last name is the one used for insertion.
        """
        names_by_code: Dict[str, str] = {}
        for c in candidates:
            names_by_code[c.code] = c.name
        if not names_by_code:
            return {}

        existing = ProductReconciler.find_products_by_code(db, names_by_code.keys())
        code_to_id: Dict[str, int] = {p.product_code: p.id for p in existing}

        created = 0
        # Sorted so concurrent imports take unique-index locks in the same order
        for code in sorted(names_by_code):
            name = names_by_code[code]
            if code in code_to_id:
                continue
            try:
                product = ProductReconciler.create_product(db, code, name, owner_id)
                code_to_id[code] = product.id
                created += 1
            except IntegrityError:
                # Another import created this code after our lookup
                logger.warning(f"⚠️ Product code {code!r} created concurrently; reusing existing row")
                raced = ProductReconciler.find_products_by_code(db, [code])
                if not raced:
                    raise
                code_to_id[code] = raced[0].id

        logger.info(
            f"Resolved {len(code_to_id)} product codes ({len(existing)} existing, {created} created)"
        )
        return code_to_id
