"""
Receipt Ledger - Source Package

A receipt book for a residential housing society: issue, edit, search
and export maintenance receipts.

DESIGN PRINCIPLES:
1. Totals and amount-in-words are always derived, never typed
2. Nothing is saved without passing the pre-save checks
3. A failed save changes nothing
4. Every change to the ledger is auditable
5. Storage slot is swappable
"""

__version__ = "1.0.0"
__author__ = "Receipt Ledger Team"
