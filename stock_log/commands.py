import logging
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel

from . import catalog, movement_log, settings
from .state import InventoryState

logger = logging.getLogger(__name__)

ConfirmFunc = Callable[[str], bool]


# --- Commands ---
# One model per user action. Anything that can build these (CLI, tests)
# can drive the application without a presentation layer.


class AddProduct(BaseModel):
    pass


class UpdateProduct(BaseModel):
    product_id: str
    field: str
    value: Any = None


class DeleteProduct(BaseModel):
    product_id: str


class AddMovement(BaseModel):
    pass


class UpdateMovement(BaseModel):
    movement_id: str
    field: str
    value: Any = None


class DeleteMovement(BaseModel):
    movement_id: str


Command = Union[
    AddProduct, UpdateProduct, DeleteProduct, AddMovement, UpdateMovement, DeleteMovement
]


class CommandResult(BaseModel):
    state: InventoryState
    changed: bool = False
    message: Optional[str] = None
    created_id: Optional[str] = None


# --- Handlers ---


def _add_product(state: InventoryState, command: AddProduct, confirm) -> CommandResult:
    products, product = catalog.add_product(state.products)
    return CommandResult(
        state=state.replace(products=products), changed=True, created_id=product.id
    )


def _update_product(state: InventoryState, command: UpdateProduct, confirm) -> CommandResult:
    products = catalog.update_product(
        state.products, command.product_id, command.field, command.value
    )
    if products is state.products:
        return CommandResult(state=state)
    return CommandResult(state=state.replace(products=products), changed=True)


def _delete_product(state: InventoryState, command: DeleteProduct, confirm) -> CommandResult:
    """
    Removes the product and every movement that references it.
    Needs an explicit yes from the confirmation callback because of the cascade.
    """
    if catalog.find_product(state.products, command.product_id) is None:
        return CommandResult(state=state)

    if confirm is None or not confirm(settings.DELETE_PRODUCT_PROMPT):
        logger.info(f"Deletion of product {command.product_id} cancelled.")
        return CommandResult(state=state, message="Deletion cancelled.")

    products = catalog.remove_product(state.products, command.product_id)
    movements = movement_log.remove_movements_for_product(
        state.movements, command.product_id
    )
    removed = len(state.movements) - len(movements)
    logger.info(
        f"🗑️ Deleted product {command.product_id} and {removed} related movement(s)."
    )
    return CommandResult(
        state=state.replace(products=products, movements=movements), changed=True
    )


def _add_movement(state: InventoryState, command: AddMovement, confirm) -> CommandResult:
    movements, movement = movement_log.add_movement(state.movements, state.products)
    if movement is None:
        return CommandResult(state=state, message=settings.EMPTY_CATALOG_MESSAGE)
    return CommandResult(
        state=state.replace(movements=movements), changed=True, created_id=movement.id
    )


def _update_movement(state: InventoryState, command: UpdateMovement, confirm) -> CommandResult:
    movements = movement_log.update_movement(
        state.movements, command.movement_id, command.field, command.value
    )
    if movements is state.movements:
        return CommandResult(state=state)
    return CommandResult(state=state.replace(movements=movements), changed=True)


def _delete_movement(state: InventoryState, command: DeleteMovement, confirm) -> CommandResult:
    movements = movement_log.delete_movement(state.movements, command.movement_id)
    if movements is state.movements:
        return CommandResult(state=state)
    return CommandResult(state=state.replace(movements=movements), changed=True)


# --- Handler Registry ---
COMMAND_HANDLERS = {
    AddProduct: _add_product,
    UpdateProduct: _update_product,
    DeleteProduct: _delete_product,
    AddMovement: _add_movement,
    UpdateMovement: _update_movement,
    DeleteMovement: _delete_movement,
}


def apply_command(
    state: InventoryState, command: Command, confirm: Optional[ConfirmFunc] = None
) -> CommandResult:
    """
    Runs one command against the state and returns the resulting state.
    The input state is never modified. Product deletion only goes ahead
    when `confirm` answers True.
    """
    handler = COMMAND_HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unsupported command: {type(command).__name__}")
    return handler(state, command, confirm)
