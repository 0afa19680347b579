"""Database Infrastructure: declarative base for the world-state table.

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local and test databases
"""
