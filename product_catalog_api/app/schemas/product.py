"""
Pydantic schemas for products.

``ProductCreate`` describes the payload accepted when a product is
created: ``name``, ``price`` and ``category`` are required,
``description`` and ``inStock`` are optional.  ``ProductUpdate`` has
the same fields, all optional; only the fields a client actually sends
are checked and later merged.  ``ProductRead`` is a stored product with
its identifier.  ``ProductPage`` wraps one page of a listing.

Field names on the wire are camelCase (``inStock``) while the Python
attribute is ``in_stock``.  Both spellings are accepted on input.
Unknown keys, including ``id``, are ignored.
"""

import math
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

MUTABLE_FIELDS = ("name", "description", "price", "category", "in_stock")


def _required_text(value: Any, label: str) -> str:
    if value is None:
        raise ValueError(f"{label} must not be null")
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    if not value.strip():
        raise ValueError(f"{label} must not be empty")
    return value


class _ProductRules(BaseModel):
    """Field rules shared by the create and update payloads."""

    model_config = {"populate_by_name": True}

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def validate_name(cls, v):
        return _required_text(v, "name")

    @field_validator("category", mode="before", check_fields=False)
    @classmethod
    def validate_category(cls, v):
        return _required_text(v, "category")

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def validate_description(cls, v):
        if v is None:
            raise ValueError("description must not be null")
        if not isinstance(v, str):
            raise ValueError("description must be a string")
        return v

    @field_validator("price", mode="before", check_fields=False)
    @classmethod
    def validate_price(cls, v):
        # bool is a subclass of int and must not pass as a price
        if v is None:
            raise ValueError("price must not be null")
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("price must be a number")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("price must be a finite number")
        if v < 0:
            raise ValueError("price must be non-negative")
        return v

    @field_validator("in_stock", mode="before", check_fields=False)
    @classmethod
    def validate_in_stock(cls, v):
        if not isinstance(v, bool):
            raise ValueError("inStock must be a boolean")
        return v


class ProductCreate(_ProductRules):
    """Schema for creating a new product."""

    name: str = Field(..., description="Product name", examples=["Widget"])
    description: str = Field("", description="Free text description, may be empty")
    price: Union[int, float] = Field(..., description="Non-negative price", examples=[9.99])
    category: str = Field(..., description="Category label used for filtering and stats", examples=["tools"])
    in_stock: bool = Field(True, alias="inStock", description="Availability flag")


class ProductUpdate(_ProductRules):
    """Schema for updating an existing product.

    All fields are optional; only provided values will be updated.
    Sending ``null`` for a field is rejected rather than clearing it.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Union[int, float]] = None
    category: Optional[str] = None
    in_stock: Optional[bool] = Field(None, alias="inStock")

    def changes(self) -> dict:
        """Return only the fields the client supplied, keyed by attribute name."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if k in MUTABLE_FIELDS}


class ProductRead(BaseModel):
    """Schema for reading a stored product.

    Instances are frozen; the store replaces a record on update
    instead of mutating it, so a value handed to a caller never
    changes underneath them.
    """

    id: str
    name: str
    description: str = ""
    price: Union[int, float]
    category: str
    in_stock: bool = Field(True, alias="inStock")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }


class ProductPage(BaseModel):
    """One page of a product listing."""

    page: int
    limit: int
    total: int
    products: List[ProductRead]
