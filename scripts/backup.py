"""Copy the persisted document into backups/.

Note: the store replaces the file atomically, so copying it at any moment
yields a complete document.
"""

from __future__ import annotations

import importlib
import shutil
from datetime import datetime
from pathlib import Path

from config import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    repo_root = Path(__file__).resolve().parents[1]

    source = Path(settings.DATA_FILE)
    if not source.is_absolute():
        source = repo_root / source
    if not source.exists():
        raise SystemExit(f"No document at {source}. Run scripts/init_store.py first.")

    out_dir = repo_root / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"data_{ts}.json"
    shutil.copy2(source, out_file)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
