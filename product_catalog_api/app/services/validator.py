"""
Payload validation for product writes.

``validate_create`` and ``validate_update`` turn a raw JSON payload
into a ``ProductCreate`` or ``ProductUpdate`` schema.  Validation
never stops at the first problem: every violated field is collected
and reported together in a single ``ValidationError``.
"""

from typing import Any, Dict, List, Type, TypeVar

import pydantic

from product_catalog_api.app.core.errors import ValidationError
from product_catalog_api.app.schemas.product import ProductCreate, ProductUpdate

SchemaT = TypeVar("SchemaT", ProductCreate, ProductUpdate)


def _describe(error: Dict[str, Any]) -> Dict[str, str]:
    loc = [str(part) for part in error.get("loc", ())]
    field = ".".join(loc) if loc else "body"
    if error.get("type") == "missing":
        message = f"{field} is required"
    else:
        message = str(error.get("msg", "invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
    return {"field": field, "message": message}


def _validate(schema: Type[SchemaT], payload: Any) -> SchemaT:
    if not isinstance(payload, dict):
        raise ValidationError([{"field": "body", "message": "payload must be a JSON object"}])
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as exc:
        errors: List[Dict[str, str]] = [_describe(e) for e in exc.errors()]
        raise ValidationError(errors) from exc


def validate_create(payload: Any) -> ProductCreate:
    """Check a create payload; ``name``, ``price`` and ``category`` are required."""
    return _validate(ProductCreate, payload)


def validate_update(payload: Any) -> ProductUpdate:
    """Check an update payload.  Only the fields present are validated."""
    return _validate(ProductUpdate, payload)
