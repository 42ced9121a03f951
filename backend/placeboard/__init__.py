"""Place Board Application Package — places, likes, uploads, translation proxy.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
