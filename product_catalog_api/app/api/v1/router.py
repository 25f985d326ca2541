"""
Top‑level router for version 1 of the API.

This router aggregates domain routers under a unified prefix.  The
catalog currently has a single domain, products, mounted at
``/products``.
"""

from fastapi import APIRouter

from .endpoints import products

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
