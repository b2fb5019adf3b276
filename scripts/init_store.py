from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hrms.hrms.core.enums import Collection
from src.hrms.hrms.storage.json_store import JSONFileStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    path = Path(settings.DATA_FILE)
    if not path.is_absolute():
        path = REPO_ROOT / path

    store = JSONFileStore(path, timeout=settings.STORAGE_TIMEOUT_SECONDS)
    try:
        document = store.load()
    finally:
        store.close()

    sizes = ", ".join(f"{c.value}={len(document.records(c))}" for c in Collection)
    print(f"OK: document ready at {path} ({sizes})")


if __name__ == "__main__":
    main()
