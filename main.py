import argparse
import sys
from typing import Optional

from stock_log import settings, views
from stock_log.commands import (
    AddMovement,
    AddProduct,
    DeleteMovement,
    DeleteProduct,
    UpdateMovement,
    UpdateProduct,
)
from stock_log.controller import InventoryController
from stock_log.data_handler import JsonFileStore, KeyValueStore, export_summary
from stock_log.errors import UnknownFieldError
from stock_log.logger import setup_logger


def ask_confirmation(prompt: str) -> bool:
    """Yes/no question on stdin. Anything but y/yes is a no."""
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stock-log", description="Track products, stock movements and current stock."
    )
    views_parser = parser.add_subparsers(dest="view", required=True)

    # --- Products ---
    products = views_parser.add_parser("products", help="Product catalog")
    product_actions = products.add_subparsers(dest="action", required=True)
    product_actions.add_parser("list", help="Show the catalog")
    product_actions.add_parser("add", help="Add a placeholder product")
    p_set = product_actions.add_parser("set", help="Edit a product field")
    p_set.add_argument("id")
    p_set.add_argument("field", choices=["sku", "name"])
    p_set.add_argument("value")
    p_delete = product_actions.add_parser("delete", help="Delete a product and its movements")
    p_delete.add_argument("id")
    p_delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    # --- Movements ---
    movements = views_parser.add_parser("movements", help="Movement log")
    movement_actions = movements.add_subparsers(dest="action", required=True)
    movement_actions.add_parser("list", help="Show the log, newest first")
    movement_actions.add_parser("add", help="Add a blank movement for the first product")
    m_set = movement_actions.add_parser("set", help="Edit a movement field")
    m_set.add_argument("id")
    m_set.add_argument("field", help="date, productId, quantityIn, quantityOut or notes")
    m_set.add_argument("value")
    m_delete = movement_actions.add_parser("delete", help="Delete a movement")
    m_delete.add_argument("id")

    # --- Stock ---
    stock = views_parser.add_parser("stock", help="Current stock per product")
    stock.add_argument("--export", action="store_true", help="Also save the summary as CSV")

    views_parser.add_parser("analyze", help="Ask the AI service for an inventory commentary")
    return parser


def _report(result) -> None:
    if result.message:
        print(result.message)
    elif result.created_id:
        print(f"✅ Created {result.created_id}")
    elif result.changed:
        print("✅ Saved.")
    else:
        print("Nothing changed.")


def _run_products(controller: InventoryController, args) -> None:
    if args.action == "list":
        print(views.products_table(controller.state.products))
        return
    if args.action == "add":
        command = AddProduct()
    elif args.action == "set":
        command = UpdateProduct(product_id=args.id, field=args.field, value=args.value)
    else:
        if args.yes:
            controller.confirm = lambda _prompt: True
        command = DeleteProduct(product_id=args.id)
    _report(controller.dispatch(command))


def _run_movements(controller: InventoryController, args) -> None:
    if args.action == "list":
        print(views.movements_table(controller.state.movements, controller.state.products))
        return
    if args.action == "add":
        command = AddMovement()
    elif args.action == "set":
        command = UpdateMovement(movement_id=args.id, field=args.field, value=args.value)
    else:
        command = DeleteMovement(movement_id=args.id)
    _report(controller.dispatch(command))


def main(argv: Optional[list[str]] = None, store: Optional[KeyValueStore] = None) -> int:
    """Entry point. Returns a process exit code."""
    args = build_parser().parse_args(argv)
    controller = InventoryController(
        store if store is not None else JsonFileStore(settings.DATA_DIR),
        confirm=ask_confirmation,
    )
    controller.load()

    try:
        if args.view == "products":
            _run_products(controller, args)
        elif args.view == "movements":
            _run_movements(controller, args)
        elif args.view == "stock":
            summaries = controller.summaries()
            print(views.stock_table(summaries))
            if args.export:
                print(f"Saved to {export_summary(summaries)}")
        else:
            future = controller.analyze_async()
            print("Analyzing stock...")
            print(future.result())
    except UnknownFieldError as e:
        print(f"❌ {e}")
        return 2
    finally:
        controller.close()
    return 0


def run() -> int:
    setup_logger("stock_log")
    return main()


if __name__ == "__main__":
    sys.exit(run())
