import pandas as pd

from .aggregator import stock_level, summaries_to_frame
from .catalog import find_product, product_label
from .schemas import Movement, Product, StockSummary


def products_table(products: list[Product]) -> str:
    if not products:
        return "No products yet. Add one to get started."
    df = pd.DataFrame([p.model_dump() for p in products], columns=["id", "sku", "name"])
    return df.rename(columns={"id": "ID", "sku": "SKU", "name": "Name"}).to_string(index=False)


def movements_table(movements: list[Movement], products: list[Product]) -> str:
    if not movements:
        return "No movements recorded yet. Start by adding one."

    rows = []
    for m in movements:
        product = find_product(products, m.product_id)
        rows.append(
            {
                "ID": m.id,
                "Date": m.date.isoformat(),
                "Product": product_label(product) if product else f"(unknown {m.product_id})",
                "In (+)": m.quantity_in,
                "Out (-)": m.quantity_out,
                "Notes": m.notes,
            }
        )
    return pd.DataFrame(rows).to_string(index=False)


def stock_table(summaries: list[StockSummary]) -> str:
    if not summaries:
        return "No products in the catalog."
    df = summaries_to_frame(summaries)
    df["level"] = [stock_level(s) for s in summaries]
    return df.rename(
        columns={
            "sku": "SKU",
            "name": "Name",
            "totalIn": "In",
            "totalOut": "Out",
            "currentStock": "Stock",
            "level": "Level",
        }
    ).to_string(index=False)
