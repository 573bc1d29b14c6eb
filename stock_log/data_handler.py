import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from pydantic import BaseModel, ValidationError

from . import settings, utils
from .aggregator import summaries_to_frame
from .schemas import Movement, Product, StockSummary
from .state import InventoryState

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, text: str) -> None: ...


class MemoryStore:
    """Dict-backed store, mostly for tests."""

    def __init__(self, data: Optional[dict[str, str]] = None):
        self.data = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, text: str) -> None:
        self.data[key] = text


class JsonFileStore:
    """Keeps each key in its own <key>.json file under one directory."""

    def __init__(self, directory: Path = settings.DATA_DIR):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, text: str) -> None:
        """Writes to a temp file first and swaps it in, so a crash never leaves half a file."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise


def _keep_backup(store: KeyValueStore, key: str, text: str) -> None:
    """Copies unreadable stored text aside so the next save cannot destroy it."""
    backup_key = f"{key}{settings.BACKUP_SUFFIX}"
    try:
        store.set(backup_key, text)
        logger.warning(f"⚠️ Original data for '{key}' kept under '{backup_key}'.")
    except OSError as e:
        logger.error(f"❌ Could not back up '{key}': {e}")


def _load_collection(store: KeyValueStore, key: str, model: type[BaseModel], defaults: list[dict]) -> list:
    """
    Validates a stored collection record by record.
    Bad records are skipped and logged, the good ones are kept, and the raw
    text is backed up before anything can overwrite it.
    """
    text = store.get(key)
    if text is None:
        logger.info(f"No saved data under '{key}'. Starting with demo records.")
        return [model.model_validate(record) for record in defaults]

    try:
        raw_records = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"❌ Saved data under '{key}' is not valid JSON. Starting empty.")
        logger.error(e)
        _keep_backup(store, key, text)
        return []

    if not isinstance(raw_records, list):
        logger.error(f"❌ Saved data under '{key}' is not a list. Starting empty.")
        _keep_backup(store, key, text)
        return []

    records = []
    rejected = 0
    for raw in raw_records:
        try:
            records.append(model.model_validate(raw))
        except ValidationError as e:
            rejected += 1
            logger.error(f"❌ Skipping invalid record under '{key}'.")
            logger.error(e)

    if rejected:
        logger.warning(f"⚠️ {rejected} record(s) under '{key}' could not be read.")
        _keep_backup(store, key, text)
    return records


def load_state(store: KeyValueStore) -> InventoryState:
    """Reads both collections from the store, seeding demo data on first use."""
    products = _load_collection(
        store, settings.PRODUCTS_KEY, Product, settings.DEFAULT_PRODUCTS
    )
    movements = _load_collection(
        store, settings.MOVEMENTS_KEY, Movement, settings.DEFAULT_MOVEMENTS
    )
    logger.info(f"Loaded {len(products)} product(s) and {len(movements)} movement(s).")
    return InventoryState(products=products, movements=movements)


def save_state(store: KeyValueStore, state: InventoryState) -> None:
    """
    Writes both collections as JSON arrays of flat records.
    A failed write is logged and otherwise ignored; the in-memory state stays
    authoritative.
    """
    payload = {
        settings.PRODUCTS_KEY: [p.model_dump(mode="json", by_alias=True) for p in state.products],
        settings.MOVEMENTS_KEY: [m.model_dump(mode="json", by_alias=True) for m in state.movements],
    }
    for key, records in payload.items():
        try:
            store.set(key, json.dumps(records, ensure_ascii=False))
        except OSError as e:
            logger.error(f"❌ Could not save '{key}': {e}")


def export_summary(summaries: list[StockSummary], output_dir: Optional[Path] = None) -> Path:
    """Saves the stock summary to a dated CSV and returns its path."""
    output_dir = Path(output_dir or settings.OUTPUT_DIR)
    output_dir.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = output_dir / f"{settings.SUMMARY_FILENAME_BASE}_{date_suffix}.csv"
    summaries_to_frame(summaries).to_csv(csv_path, index=False)
    logger.info(f"✅ Stock summary saved to: {csv_path}")
    return csv_path
