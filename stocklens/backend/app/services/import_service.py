"""
Spreadsheet Import Service - batch upsert coordinator

Pipeline per upload:
    rows -> RowExpander (pure) -> ProductReconciler -> FactUpsertService

The whole store side runs as ONE transaction: the import batch, new products
and every fact upsert commit together or not at all, so a failure never
leaves a batch with a partial fact set.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from app.models import ImportBatch
from app.services.entity_reconciler import ProductReconciler
from app.services.fact_upsert_service import FactUpsertService
from app.services.import_errors import ImportStoreError, MalformedUploadError
from app.services.row_expander import expand_rows
from app.services.workbook_reader import read_first_sheet

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    batch_id: int
    imported: int


class ImportService:

    @staticmethod
    def import_rows(
        db: Session,
        user_id: int,
        filename: Optional[str],
        rows: Sequence[Mapping],
        today: Optional[date] = None,
    ) -> ImportResult:
        """
        Expand rows and persist them as one import batch.

        Raises MalformedUploadError (nothing written) when no row yields a fact,
        ImportStoreError (rolled back) when the database write fails.
        """
        if not rows:
            raise MalformedUploadError("No rows found in worksheet")

        expansion = expand_rows(rows, today)
        if not expansion.facts:
            raise MalformedUploadError("No valid daily data found")

        try:
            batch = ImportBatch(filename=filename, user_id=user_id)
            db.add(batch)
            db.flush()
            batch_id = batch.id

            code_to_id: Dict[str, int] = ProductReconciler.resolve(db, expansion.candidates, user_id)

            imported = 0
            dropped = 0
            for fact in expansion.facts:
                product_id = code_to_id.get(fact.code)
                if product_id is None:
                    dropped += 1
                    continue
                FactUpsertService.upsert_daily_fact(
                    db, product_id, fact.fact_date, fact.measures(), batch_id
                )
                imported += 1

            if dropped:
                logger.warning(f"⚠️ Batch {batch_id}: dropped {dropped} facts with unresolved product codes")

            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"❌ Import of {filename!r} failed, rolled back: {e}", exc_info=True)
            raise ImportStoreError(str(e)) from e

        logger.info(f"✅ Import batch {batch_id} ({filename!r}): {imported} daily facts upserted")
        return ImportResult(batch_id=batch_id, imported=imported)

    @staticmethod
    def import_file(
        db: Session,
        user_id: int,
        filename: Optional[str],
        contents: bytes,
        today: Optional[date] = None,
    ) -> ImportResult:
        """Read the first sheet of an uploaded workbook and import it."""
        rows: List[Dict] = read_first_sheet(contents, filename)
        return ImportService.import_rows(db, user_id, filename, rows, today)
