"""StockLens backend application package."""
