"""Pure domain helpers: text normalization and ordering.

Free of FastAPI/HTTP concerns so handlers, middleware and tests can share them.
"""
__all__ = ["text", "ordering"]
