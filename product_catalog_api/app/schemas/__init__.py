"""
Pydantic schema definitions for API payloads.

Schemas double as the record type held by the store, so the core and
the HTTP layer agree on one representation of a product.
"""
