"""
Utility helpers for StockLens
"""
