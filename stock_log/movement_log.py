import logging
from typing import Any, Optional

from pydantic import ValidationError

from . import settings, utils
from .errors import UnknownFieldError
from .schemas import Movement, Product

logger = logging.getLogger(__name__)

# Editable fields, keyed by every name a caller may use for them.
FIELD_NAMES = {
    "date": "date",
    "product_id": "product_id",
    "productId": "product_id",
    "quantity_in": "quantity_in",
    "quantityIn": "quantity_in",
    "in": "quantity_in",
    "quantity_out": "quantity_out",
    "quantityOut": "quantity_out",
    "out": "quantity_out",
    "notes": "notes",
}


def find_movement(movements: list[Movement], movement_id: str) -> Optional[Movement]:
    return next((m for m in movements if m.id == movement_id), None)


def add_movement(
    movements: list[Movement], products: list[Product]
) -> tuple[list[Movement], Optional[Movement]]:
    """
    Prepends a blank movement for the first catalog product, dated today.
    A movement needs a product, so with an empty catalog nothing is added
    and (movements, None) comes back.
    """
    if not products:
        logger.warning(f"⚠️ {settings.EMPTY_CATALOG_MESSAGE}")
        return movements, None

    movement = Movement(
        id=utils.new_id(),
        date=utils.today(),
        product_id=products[0].id,
        quantity_in=0,
        quantity_out=0,
        notes="",
    )
    logger.info(f"Added movement {movement.id} for product {movement.product_id}.")
    return [movement, *movements], movement


def update_movement(
    movements: list[Movement], movement_id: str, field: str, value: Any
) -> list[Movement]:
    """
    Replaces one field of the matching movement.

    Quantities go through the usual coercion, so "abc" or -4 end up as 0.
    The product reference is not checked against the catalog. A date that
    does not parse leaves the movement as it was.
    """
    name = FIELD_NAMES.get(field)
    if name is None:
        raise UnknownFieldError(f"Movement field '{field}' cannot be edited.")

    current = find_movement(movements, movement_id)
    if current is None:
        logger.debug(f"Update skipped, no movement with id {movement_id}.")
        return movements

    try:
        # Re-validate the whole record so the field validators run.
        replaced = Movement.model_validate({**current.model_dump(), name: value})
    except ValidationError as e:
        logger.warning(f"⚠️ Ignoring invalid value for '{field}' on movement {movement_id}.")
        logger.debug(e)
        return movements

    return [replaced if m.id == movement_id else m for m in movements]


def delete_movement(movements: list[Movement], movement_id: str) -> list[Movement]:
    if find_movement(movements, movement_id) is None:
        return movements
    return [m for m in movements if m.id != movement_id]


def remove_movements_for_product(
    movements: list[Movement], product_id: str
) -> list[Movement]:
    """Every movement that does not reference the given product."""
    return [m for m in movements if m.product_id != product_id]


def recent_movements(
    movements: list[Movement], limit: int = settings.RECENT_MOVEMENTS_LIMIT
) -> list[Movement]:
    # The log is kept newest first.
    return movements[:limit]
