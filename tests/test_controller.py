import json

from stock_log import settings
from stock_log.advisor import StockAdvisor
from stock_log.commands import AddMovement, AddProduct, DeleteMovement, DeleteProduct, UpdateMovement
from stock_log.controller import InventoryController
from stock_log.data_handler import save_state
from stock_log.schemas import Movement


def _controller(store, **kwargs):
    controller = InventoryController(store, **kwargs)
    controller.load()
    return controller


def test_changes_are_saved_immediately(store):
    controller = _controller(store)

    result = controller.dispatch(AddMovement())

    saved = json.loads(store.data[settings.MOVEMENTS_KEY])
    assert saved[0]["id"] == result.created_id
    assert len(saved) == 3


def test_noops_do_not_write(store):
    controller = _controller(store)

    controller.dispatch(DeleteMovement(movement_id="nope"))

    assert store.data == {}


def test_summaries_follow_the_latest_state(store, laptop_state):
    save_state(store, laptop_state)
    controller = _controller(store)

    controller.dispatch(UpdateMovement(movement_id="102", field="quantityOut", value="8"))

    assert controller.summaries()[0].current_stock == 2


def test_cascade_through_controller(store, laptop_state):
    save_state(store, laptop_state)
    controller = _controller(store, confirm=lambda prompt: True)

    controller.dispatch(DeleteProduct(product_id="1"))

    assert controller.state.products == []
    assert controller.state.movements == []
    assert json.loads(store.data[settings.MOVEMENTS_KEY]) == []


def test_analyze_sends_summary_and_recent_movements(store, laptop):
    prompts = []
    controller = InventoryController(store, advisor=StockAdvisor(lambda p: prompts.append(p) or "ok"))
    controller.state = controller.state.replace(
        products=[laptop],
        movements=[Movement(id=f"m{i}", product_id="1", quantity_in=1) for i in range(12)],
    )

    assert controller.analyze() == "ok"
    assert controller.analysis == "ok"
    assert not controller.is_analyzing
    assert '"id": "m9"' in prompts[0]
    assert '"id": "m10"' not in prompts[0]


def test_analyze_async(store):
    controller = InventoryController(store, advisor=StockAdvisor(lambda p: "later"))
    controller.load()

    assert controller.analyze_async().result(5) == "later"
    controller.close()


def test_bad_record_does_not_wipe_stored_movements(store):
    store.set(settings.PRODUCTS_KEY, '[{"id": "1", "sku": "LAP-001", "name": "Laptop"}]')
    original = json.dumps(
        [
            {"id": "101", "date": "2024-05-01", "productId": "1", "quantityIn": 10, "quantityOut": 0, "notes": ""},
            {"id": "102", "date": "not-a-date", "productId": "1", "quantityIn": 0, "quantityOut": 3, "notes": ""},
        ]
    )
    store.set(settings.MOVEMENTS_KEY, original)
    controller = _controller(store)

    controller.dispatch(AddProduct())

    assert [m["id"] for m in json.loads(store.data[settings.MOVEMENTS_KEY])] == ["101"]
    assert store.data[settings.MOVEMENTS_KEY + settings.BACKUP_SUFFIX] == original


def test_close_stops_the_advisor_worker(store):
    controller = _controller(store, advisor=StockAdvisor(lambda p: "done"))
    future = controller.analyze_async()

    controller.close()

    assert future.done()
    assert future.result() == "done"
    assert controller.advisor._executor is None
