import pytest

from stock_log import catalog, settings
from stock_log.errors import UnknownFieldError


def test_add_product_appends_placeholder(laptop):
    products, product = catalog.add_product([laptop])

    assert products == [laptop, product]
    assert product.sku.startswith(settings.NEW_PRODUCT_SKU_PREFIX)
    assert product.name == settings.NEW_PRODUCT_NAME


def test_add_product_generates_unique_ids():
    products, first = catalog.add_product([])
    products, second = catalog.add_product(products)

    assert first.id != second.id
    assert len(products) == 2


def test_update_product_changes_only_the_target(laptop, mouse):
    products = catalog.update_product([laptop, mouse], "2", "name", "Trackball")

    assert products[0] == laptop
    assert products[1].name == "Trackball"
    assert products[1].id == "2"
    assert mouse.name == "Wireless Mouse"


def test_update_product_does_not_validate_content(laptop):
    products = catalog.update_product([laptop], "1", "sku", 123)

    assert products[0].sku == "123"


def test_update_product_missing_id_is_a_noop(laptop):
    products = [laptop]

    assert catalog.update_product(products, "nope", "name", "X") is products


@pytest.mark.parametrize("field", ["id", "price"])
def test_update_product_rejects_other_fields(laptop, field):
    with pytest.raises(UnknownFieldError):
        catalog.update_product([laptop], "1", field, "X")


def test_remove_product(laptop, mouse):
    assert catalog.remove_product([laptop, mouse], "1") == [mouse]


def test_remove_product_missing_id_is_a_noop(laptop):
    products = [laptop]

    assert catalog.remove_product(products, "nope") is products


def test_product_label(laptop):
    assert catalog.product_label(laptop) == "LAP-001 - Laptop"
