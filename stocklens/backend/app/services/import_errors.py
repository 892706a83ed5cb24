"""
Exceptions raised by the spreadsheet import pipeline.

Routers translate these into HTTP errors; cell-level parse problems never
raise (they degrade to zero, see value_normalizer).
"""


class MalformedUploadError(ValueError):
    """No file, unreadable workbook, empty sheet, or no usable daily rows. Client error."""


class ImportStoreError(RuntimeError):
    """Persisting the batch, products or facts failed. The import was rolled back."""
