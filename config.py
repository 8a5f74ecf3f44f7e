# config.py -------------------------------------------------------------
"""App-wide settings. Environment variables are read on every call so tests
   (and `streamlit run`) can point the app at another database."""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_DB_PATH = BASE_DIR / "inventory.db"

PAGE_TITLE = "Inventory Portal"
PAGE_ICON = "📦"

ADMIN_ROLE = "admin"

# Seeded into an empty `users` table on first start
DEFAULT_USERS = [
    {"username": "admin", "password": "adminpass", "role": "admin"},
    {"username": "user",  "password": "userpass",  "role": "user"},
]

# -------------------- UI strings -------------------------------------
MSG_INVALID_CREDENTIALS = "Username atau password salah."
MSG_MISSING_FIELD = "Semua input harus diisi."
MSG_INVALID_NUMBER = "Harga dan quantity harus berupa angka."
MSG_INSERT_FAILED = "Gagal menambah produk."
MSG_UPDATE_FAILED = "Gagal mengupdate produk."
MSG_NOT_ADMIN = "Akses ditolak."
MSG_INSERTED = "Produk berhasil ditambah!"
MSG_UPDATED = "Produk berhasil diupdate!"


def get_db_path() -> Path:
    return Path(os.environ.get("INVENTORY_DB_PATH", DEFAULT_DB_PATH))


def get_log_level() -> str:
    return os.environ.get("INVENTORY_LOG_LEVEL", "INFO").upper()


def get_log_file() -> str | None:
    return os.environ.get("INVENTORY_LOG_FILE") or None
