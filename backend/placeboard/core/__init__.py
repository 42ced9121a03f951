"""Core Layer — pure domain rules and the error hierarchy.

Invariants:
    - No I/O, no framework imports (FastAPI, SQLAlchemy, httpx stay out of core/)
"""
