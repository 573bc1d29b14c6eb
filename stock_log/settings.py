import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
DATA_DIR = BASE_DIR / os.getenv("DATA_DIR", "data")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Storage Keys ---
# One key per collection; each holds a JSON array of flat records.
PRODUCTS_KEY = "products_v2"
MOVEMENTS_KEY = "movements_v2"
# Unreadable stored text is copied to "<key><suffix>" before it can be overwritten.
BACKUP_SUFFIX = "_unreadable"

SUMMARY_FILENAME_BASE = os.getenv("SUMMARY_FILENAME", "stock_summary")

# --- AI Advisory ---
# A missing key is not an error: the request simply goes out without credentials.
API_KEY = os.getenv("API_KEY", "")
AI_MODEL = os.getenv("AI_MODEL", "gemini-3-flash-preview")
AI_API_URL = os.getenv(
    "AI_API_URL", "https://generativelanguage.googleapis.com/v1beta"
)
AI_TIMEOUT = float(os.getenv("AI_TIMEOUT", "60"))

AI_FAILURE_TEXT = "Could not connect to the AI service."
AI_EMPTY_TEXT = "Error generating analysis."

# --- Shared Business Logic ---
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", "5"))
RECENT_MOVEMENTS_LIMIT = 10

NEW_PRODUCT_NAME = "New Product"
NEW_PRODUCT_SKU_PREFIX = "SKU-"

EMPTY_CATALOG_MESSAGE = "Create at least one product in the Products view first."
DELETE_PRODUCT_PROMPT = "Delete product? Its movements will be deleted too."

# Demo data used the first time the store is opened.
DEFAULT_PRODUCTS = [
    {"id": "1", "sku": "LAP-001", "name": 'Laptop Pro 14"'},
    {"id": "2", "sku": "MOU-002", "name": "Wireless Mouse"},
]

DEFAULT_MOVEMENTS = [
    {"id": "101", "productId": "1", "quantityIn": 10, "quantityOut": 0, "notes": "Opening stock"},
    {"id": "102", "productId": "2", "quantityIn": 50, "quantityOut": 0, "notes": "Supplier order"},
]
