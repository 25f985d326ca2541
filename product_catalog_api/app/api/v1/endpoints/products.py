"""
Product endpoints.

These routes expose the catalog: listing with category filter and
pagination, lookup by id, name search, per‑category statistics and,
for holders of an API token, create, update and delete.  The handlers
are thin: they validate the payload, call one store or query
operation and return the result.  Domain errors propagate to the
exception handlers registered in ``core.errors``.

``/stats`` and ``/search/name`` are declared before ``/{product_id}``
so that they are not captured by the id route.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status

from product_catalog_api.app.core.security import require_token
from product_catalog_api.app.schemas.product import ProductPage, ProductRead
from product_catalog_api.app.services import query_engine
from product_catalog_api.app.services.product_store import ProductStore
from product_catalog_api.app.services.validator import validate_create, validate_update

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> ProductStore:
    """Return the store created for the running application."""
    return request.app.state.store


@router.get("", response_model=ProductPage)
async def list_products(
    category: Optional[str] = Query(None, description="Exact, case sensitive category"),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Page size; defaults to all matching products"),
    store: ProductStore = Depends(get_store),
) -> ProductPage:
    """List products, optionally filtered by category and paginated.

    ``page`` and ``limit`` are parsed leniently; values that are not
    positive integers fall back to page 1 and a page holding every
    matching product.
    """
    records = query_engine.filter_by_category(store.list_all(), category)
    result = query_engine.paginate(records, page, limit)
    return ProductPage(page=result.page, limit=result.limit, total=result.total, products=result.items)


@router.get("/stats", response_model=Dict[str, int])
async def product_stats(store: ProductStore = Depends(get_store)) -> Dict[str, int]:
    """Return the number of products in each category."""
    return query_engine.aggregate_by_category(store.list_all())


@router.get("/search/name", response_model=List[ProductRead])
async def search_products(
    q: Optional[str] = Query(None, description="Text to look for in product names"),
    store: ProductStore = Depends(get_store),
) -> List[ProductRead]:
    """Case insensitive substring search on product names.

    ``q`` is required; an empty value matches every product.
    """
    return query_engine.search_by_name(store.list_all(), q)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)) -> ProductRead:
    """Retrieve a single product by its ID."""
    return store.find_by_id(product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: Any = Body(None),
    current_user: dict = Depends(require_token),
    store: ProductStore = Depends(get_store),
) -> ProductRead:
    """Create a new product (token required)."""
    product = store.insert(validate_create(payload))
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    payload: Any = Body(None),
    current_user: dict = Depends(require_token),
    store: ProductStore = Depends(get_store),
) -> ProductRead:
    """Update an existing product (token required).

    Partial updates are supported; fields that are not sent keep
    their current values and the product id can not be changed.
    """
    changes = validate_update(payload)
    product = store.update(product_id, changes)
    logger.info("Updated product %s fields=%s", product_id, sorted(changes.changes()))
    return product


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    current_user: dict = Depends(require_token),
    store: ProductStore = Depends(get_store),
) -> Dict[str, str]:
    """Delete a product (token required)."""
    store.delete(product_id)
    logger.info("Deleted product %s", product_id)
    return {"message": "Product deleted"}
