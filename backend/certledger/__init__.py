"""CertLedger Application Package: verifiable academic certificates on a shared ledger.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
