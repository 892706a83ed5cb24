"""
Read the first sheet of an uploaded workbook into plain row dicts.
"""
import logging
from io import BytesIO
from typing import Dict, List, Optional

import pandas as pd

from app.services.import_errors import MalformedUploadError

logger = logging.getLogger(__name__)


def read_first_sheet(contents: bytes, filename: Optional[str] = None) -> List[Dict]:
    """
    Parse the first worksheet (header row = column labels).
    NaN cells are coerced to None so downstream code never sees float('nan').
    """
    if not contents:
        raise MalformedUploadError("No file uploaded")

    try:
        # Only the first sheet is parsed; later sheets never affect the import
        df = pd.read_excel(BytesIO(contents), sheet_name=0)
    except Exception as e:
        logger.warning(f"Unreadable workbook {filename!r}: {e}")
        raise MalformedUploadError("Unreadable workbook") from e

    if df.empty:
        raise MalformedUploadError("No rows found in worksheet")

    raw = df.to_dict("records")
    rows = [
        {str(k): (None if pd.isna(v) else v) for k, v in row.items()}
        for row in raw
    ]
    logger.info(f"Read {len(rows)} rows from the first sheet of {filename!r}")
    return rows
