"""Infrastructure Layer: world-state storage and logging setup.

Invariants:
    - Storage exceptions are mapped to core/errors.py types before leaving this layer
"""
