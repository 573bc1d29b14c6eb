import pandas as pd

from . import settings, utils
from .schemas import Movement, Product, StockSummary

TOTAL_COLUMNS = ["total_in", "total_out"]


def _exact_sum(values: pd.Series):
    # Plain Python addition: ints are unbounded, int64 would wrap.
    return sum(values.tolist())


def _zero_if_missing(value):
    return 0 if pd.isna(value) else utils.as_number(value)


def compute_summaries(
    products: list[Product], movements: list[Movement]
) -> list[StockSummary]:
    """
    Builds one StockSummary per product, in catalog order.

    Movements are grouped by product and summed, then merged onto a
    template of the catalog so that products without movements still get
    a zero-filled row. Movements pointing at unknown products drop out in
    the merge. Pure: same inputs, same output.
    """
    if not products:
        return []

    # Template: every catalog product, in order.
    catalog_df = pd.DataFrame(
        [{"product_id": p.id, "sku": p.sku, "name": p.name} for p in products]
    )

    # object dtype all the way, so quantities stay Python ints/floats.
    movements_df = pd.DataFrame(
        [
            {
                "product_id": m.product_id,
                "total_in": m.quantity_in,
                "total_out": m.quantity_out,
            }
            for m in movements
        ],
        columns=["product_id", *TOTAL_COLUMNS],
        dtype=object,
    )
    totals = pd.DataFrame(
        [
            {
                "product_id": product_id,
                "total_in": _exact_sum(group["total_in"]),
                "total_out": _exact_sum(group["total_out"]),
            }
            for product_id, group in movements_df.groupby("product_id", sort=False)
        ],
        columns=["product_id", *TOTAL_COLUMNS],
        dtype=object,
    )

    # Left merge keeps the catalog's shape and order.
    merged_df = pd.merge(catalog_df, totals, on="product_id", how="left")

    summaries = []
    for row in merged_df.to_dict("records"):
        total_in = _zero_if_missing(row["total_in"])
        total_out = _zero_if_missing(row["total_out"])
        summaries.append(
            StockSummary(
                sku=row["sku"],
                name=row["name"],
                total_in=total_in,
                total_out=total_out,
                current_stock=total_in - total_out,
            )
        )
    return summaries


def stock_level(
    summary: StockSummary, threshold: int = settings.LOW_STOCK_THRESHOLD
) -> str:
    """'out' at zero or below, 'low' up to the threshold, otherwise 'ok'."""
    if summary.current_stock <= 0:
        return "out"
    if summary.current_stock <= threshold:
        return "low"
    return "ok"


def summaries_to_frame(summaries: list[StockSummary]) -> pd.DataFrame:
    """Flat table of the summaries, columns named as on the wire."""
    columns = [info.alias or name for name, info in StockSummary.model_fields.items()]
    return pd.DataFrame(
        [s.model_dump(by_alias=True) for s in summaries], columns=columns
    )
