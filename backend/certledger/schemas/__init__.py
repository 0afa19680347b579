"""Pydantic Schemas: request validation for API endpoints.

Design Decisions:
    - Separate from core.records: request bodies are API contracts, records are ledger state
"""
