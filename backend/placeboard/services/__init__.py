"""Service Layer — one round trip per operation against the store or upstream.

Invariants:
    - Services receive their collaborators as arguments (no global lookups)
"""
