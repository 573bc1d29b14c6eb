import datetime

import pytest

from stock_log.data_handler import MemoryStore
from stock_log.schemas import Movement, Product
from stock_log.state import InventoryState


@pytest.fixture
def laptop():
    return Product(id="1", sku="LAP-001", name="Laptop")


@pytest.fixture
def mouse():
    return Product(id="2", sku="MOU-002", name="Wireless Mouse")


@pytest.fixture
def laptop_movements():
    return [
        Movement(id="101", date=datetime.date(2024, 5, 1), product_id="1", quantity_in=10, quantity_out=0, notes=""),
        Movement(id="102", date=datetime.date(2024, 5, 2), product_id="1", quantity_in=0, quantity_out=3, notes=""),
    ]


@pytest.fixture
def laptop_state(laptop, laptop_movements):
    return InventoryState(products=[laptop], movements=laptop_movements)


@pytest.fixture
def store():
    return MemoryStore()
