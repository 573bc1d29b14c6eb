import math
import random
import uuid
from datetime import date, datetime
from typing import Any, Union

from . import settings


def new_id() -> str:
    """Returns a fresh opaque identifier for a product or movement."""
    return uuid.uuid4().hex


def placeholder_sku() -> str:
    """Returns a throwaway SKU for a freshly added product, e.g. 'SKU-417'."""
    return f"{settings.NEW_PRODUCT_SKU_PREFIX}{random.randint(0, 999)}"


def today() -> date:
    return date.today()


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def coerce_quantity(value: Any) -> Union[int, float]:
    """
    Turns user input into a stock quantity.
    Anything that is not a finite, non-negative number becomes 0.
    Whole numbers come back as int so they serialize as 10, not 10.0,
    and integer input never goes through float, so large counts stay exact.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value >= 0 else 0
    if isinstance(value, str):
        try:
            number = int(value.strip())
            return number if number >= 0 else 0
        except ValueError:
            pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0

    if not math.isfinite(number) or number < 0:
        return 0
    return int(number) if number.is_integer() else number


def as_number(value: Any) -> Union[int, float]:
    """Converts pandas/numpy scalars to plain int or float. Python ints are returned as they are."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = float(value)
    return int(number) if number.is_integer() else number
