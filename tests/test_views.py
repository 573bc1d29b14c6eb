from stock_log import views
from stock_log.aggregator import compute_summaries
from stock_log.schemas import Movement


def test_empty_views():
    assert "No products" in views.products_table([])
    assert "No movements" in views.movements_table([], [])
    assert "No products" in views.stock_table([])


def test_movements_table_shows_product_label(laptop, laptop_movements):
    table = views.movements_table(laptop_movements, [laptop])

    assert "LAP-001 - Laptop" in table
    assert "2024-05-01" in table


def test_movements_table_flags_dangling_reference(laptop):
    table = views.movements_table([Movement(id="9", product_id="ghost")], [laptop])

    assert "(unknown ghost)" in table


def test_stock_table_shows_level(laptop, laptop_movements):
    table = views.stock_table(compute_summaries([laptop], laptop_movements))

    assert "Level" in table
    assert "ok" in table
