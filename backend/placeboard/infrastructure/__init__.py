"""Infrastructure Layer — store, file store, upstream client, logging.

Invariants:
    - Infrastructure never imports from api/
    - Failures surface as core/errors.py types (DatabaseError, FileStorageError, ...)
"""
