"""Core Layer: records, key scheme, selectors and the ledger contract. No IO.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic
"""
