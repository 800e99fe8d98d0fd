"""Ledger export package."""

from src.export.csv_export import CSV_HEADERS, export_csv, export_filename, receipt_to_row

__all__ = ["CSV_HEADERS", "export_csv", "export_filename", "receipt_to_row"]
