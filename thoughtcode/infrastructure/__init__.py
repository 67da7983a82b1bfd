"""Infrastructure Layer — database, external service clients and cross-cutting concerns.

Invariants:
    - All external calls wrapped with timeout/error mapping
    - Singletons initialized in the FastAPI lifespan, never at import time

Design Decisions:
    - Resilient wrappers over raw clients (ADR: single responsibility)
"""
