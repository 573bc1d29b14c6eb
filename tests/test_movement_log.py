import datetime

import pytest

from stock_log import movement_log
from stock_log.errors import UnknownFieldError
from stock_log.schemas import Movement


def test_add_movement_requires_a_product():
    movements = []

    result, movement = movement_log.add_movement(movements, [])

    assert result is movements
    assert movement is None


def test_add_movement_prepends_blank_entry(laptop, mouse, laptop_movements):
    movements, movement = movement_log.add_movement(laptop_movements, [mouse, laptop])

    assert movements[0] is movement
    assert movements[1:] == laptop_movements
    assert movement.product_id == "2"
    assert movement.date == datetime.date.today()
    assert (movement.quantity_in, movement.quantity_out, movement.notes) == (0, 0, "")


def test_update_quantity_coerces_garbage_to_zero(laptop_movements):
    movements = movement_log.update_movement(laptop_movements, "101", "quantityIn", "abc")

    assert movements[0].quantity_in == 0


@pytest.mark.parametrize(
    "field, value, attr, expected",
    [
        ("quantityIn", "12", "quantity_in", 12),
        ("quantity_out", "3.5", "quantity_out", 3.5),
        ("quantityOut", -5, "quantity_out", 0),
        ("notes", "Return #12", "notes", "Return #12"),
        ("date", "2024-02-03", "date", datetime.date(2024, 2, 3)),
    ],
)
def test_update_movement_fields(laptop_movements, field, value, attr, expected):
    movements = movement_log.update_movement(laptop_movements, "102", field, value)

    assert getattr(movements[1], attr) == expected
    assert movements[0] == laptop_movements[0]


def test_update_movement_allows_unknown_product(laptop_movements):
    movements = movement_log.update_movement(laptop_movements, "101", "productId", "999")

    assert movements[0].product_id == "999"


def test_update_movement_ignores_bad_date(laptop_movements):
    assert movement_log.update_movement(laptop_movements, "101", "date", "soon") is laptop_movements


def test_update_movement_missing_id_is_a_noop(laptop_movements):
    assert movement_log.update_movement(laptop_movements, "nope", "notes", "x") is laptop_movements


def test_update_movement_rejects_id(laptop_movements):
    with pytest.raises(UnknownFieldError):
        movement_log.update_movement(laptop_movements, "101", "id", "x")


def test_delete_movement(laptop_movements):
    movements = movement_log.delete_movement(laptop_movements, "101")

    assert [m.id for m in movements] == ["102"]


def test_delete_movement_missing_id_is_a_noop(laptop_movements):
    assert movement_log.delete_movement(laptop_movements, "nope") is laptop_movements


def test_remove_movements_for_product(laptop_movements):
    other = Movement(id="103", product_id="2", quantity_in=1)

    assert movement_log.remove_movements_for_product([*laptop_movements, other], "1") == [other]


def test_recent_movements_takes_the_newest():
    movements = [Movement(id=str(i), product_id="1") for i in range(12)]

    recent = movement_log.recent_movements(movements)

    assert [m.id for m in recent] == [str(i) for i in range(10)]
