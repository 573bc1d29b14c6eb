import datetime
from typing import Any, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from . import utils

Quantity = Union[int, float]


def _as_str(value: Any) -> Any:
    # Older stores may hold numeric ids.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Product(BaseModel):
    """
    A catalog entry. Only the id is fixed; SKU and name are free text
    and nothing forces SKUs to be unique.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=utils.new_id)
    sku: str = ""
    name: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> Any:
        return _as_str(value)


class Movement(BaseModel):
    """
    One stock-in/stock-out event for a single product.
    Wire names are camelCase; the older "in"/"out" keys are still
    accepted when reading old data.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=utils.new_id)
    date: datetime.date = Field(default_factory=utils.today)
    product_id: str = Field(
        validation_alias=AliasChoices("productId", "product_id"),
        serialization_alias="productId",
    )
    quantity_in: Quantity = Field(
        default=0,
        validation_alias=AliasChoices("quantityIn", "quantity_in", "in"),
        serialization_alias="quantityIn",
    )
    quantity_out: Quantity = Field(
        default=0,
        validation_alias=AliasChoices("quantityOut", "quantity_out", "out"),
        serialization_alias="quantityOut",
    )
    notes: str = ""

    @field_validator("id", "product_id", mode="before")
    @classmethod
    def _normalize_ids(cls, value: Any) -> Any:
        return _as_str(value)

    @field_validator("quantity_in", "quantity_out", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> Quantity:
        return utils.coerce_quantity(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_default(cls, value: Any) -> Any:
        return "" if value is None else value


class StockSummary(BaseModel):
    """Derived per-product totals. Recomputed on every read, never stored."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sku: str
    name: str
    total_in: Quantity = Field(default=0, alias="totalIn")
    total_out: Quantity = Field(default=0, alias="totalOut")
    current_stock: Quantity = Field(default=0, alias="currentStock")
