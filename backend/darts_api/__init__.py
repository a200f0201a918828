"""
Darts Player Catalog API package.

Exposes a read-only catalog of competitive darts players over HTTP.
"""

__version__ = "1.0.0"
