"""Services Layer: the certificate contract and its operation dispatch.

Invariants:
    - Services talk to the world state only through core.ledger_protocols.LedgerStub
"""
