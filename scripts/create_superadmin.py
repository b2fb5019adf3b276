"""Create the superadmin account without going through HTTP.

Usage: python scripts/create_superadmin.py USERNAME PASSWORD
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hrms.hrms.container import build_container
from src.hrms.hrms.core.exceptions import DomainError
from src.hrms.hrms.storage.json_store import JSONFileStore


class _NoSubscribers:
    def publish(self, event) -> None:
        pass


def main(argv=None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 2:
        raise SystemExit("Usage: create_superadmin.py USERNAME PASSWORD")

    settings = importlib.import_module(get_settings_module())
    path = Path(settings.DATA_FILE)
    if not path.is_absolute():
        path = REPO_ROOT / path

    store = JSONFileStore(path, timeout=settings.STORAGE_TIMEOUT_SECONDS)
    try:
        container = build_container(store=store, publisher=_NoSubscribers())
        user_id = container.auth_service.create_superadmin(argv[0], argv[1])
    except DomainError as e:
        raise SystemExit(f"Error: {e}")
    finally:
        store.close()
    print(f"OK: superadmin {argv[0]} created (id={user_id})")


if __name__ == "__main__":
    main()
