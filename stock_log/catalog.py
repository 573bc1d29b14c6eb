import logging
from typing import Any, Optional

from . import settings, utils
from .errors import UnknownFieldError
from .schemas import Product

logger = logging.getLogger(__name__)

# Fields a user may edit. The id is fixed at creation.
EDITABLE_FIELDS = ("sku", "name")


def find_product(products: list[Product], product_id: str) -> Optional[Product]:
    return next((p for p in products if p.id == product_id), None)


def product_label(product: Product) -> str:
    """Display text used wherever a product has to be picked, e.g. 'LAP-001 - Laptop'."""
    return f"{product.sku} - {product.name}"


def add_product(products: list[Product]) -> tuple[list[Product], Product]:
    """Appends a placeholder product and returns the new catalog and the product."""
    product = Product(
        id=utils.new_id(),
        sku=utils.placeholder_sku(),
        name=settings.NEW_PRODUCT_NAME,
    )
    logger.info(f"Added product {product.id} ({product.sku}).")
    return [*products, product], product


def update_product(
    products: list[Product], product_id: str, field: str, value: Any
) -> list[Product]:
    """
    Replaces one field of the matching product.
    SKU and name are unconstrained text, so the value is only stringified.
    The input list is returned untouched when no product matches.
    """
    if field not in EDITABLE_FIELDS:
        raise UnknownFieldError(f"Product field '{field}' cannot be edited.")

    if find_product(products, product_id) is None:
        logger.debug(f"Update skipped, no product with id {product_id}.")
        return products

    text = "" if value is None else str(value)
    return [
        p.model_copy(update={field: text}) if p.id == product_id else p
        for p in products
    ]


def remove_product(products: list[Product], product_id: str) -> list[Product]:
    """Drops the product from the catalog. Its movements are handled by the caller."""
    if find_product(products, product_id) is None:
        return products
    return [p for p in products if p.id != product_id]
