from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from office_portal.container import build_container
from office_portal.database.bootstrap import ensure_tables_exist, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    container = build_container(db_config=db_config)
    ensure_tables_exist(container)
    tables = list_tables(container.provider)
    print(f"OK: Schema ready -> {db_config.get('path')} (tables={len(tables)}: {', '.join(tables)})")


if __name__ == "__main__":
    main()
