from pydantic import BaseModel, Field

from .schemas import Movement, Product


class InventoryState(BaseModel):
    """
    The two collections the application owns.
    Changes always produce a new state, so products and movements are
    swapped together and never observed half-updated.
    """

    products: list[Product] = Field(default_factory=list)
    movements: list[Movement] = Field(default_factory=list)

    def replace(self, **changes) -> "InventoryState":
        return self.model_copy(update=changes)
