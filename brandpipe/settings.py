# brandpipe/settings.py
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./brands.sqlite3")
BRANDS_COLLECTION = os.getenv("BRANDS_COLLECTION", "brands")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Input / output files
BRANDS_INPUT_PATH = Path(os.getenv("BRANDS_INPUT_PATH", PROJECT_ROOT / "data" / "brands.json"))
BRANDS_EXPORT_PATH = Path(os.getenv("BRANDS_EXPORT_PATH", PROJECT_ROOT / "data" / "brands-transformed.json"))
SEED_XLSX_PATH = Path(os.getenv("SEED_XLSX_PATH", PROJECT_ROOT / "docs" / "seed-data-cases.xlsx"))
