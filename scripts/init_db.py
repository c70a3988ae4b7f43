from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.music_school.music_school.core.enums import DataMode
from src.music_school.music_school.database.bootstrap import ensure_collections, list_tables
from src.music_school.music_school.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    for mode in DataMode:
        ensure_collections(db_config, mode)
    tables = list_tables(db_config)
    print(f"OK: collections ready -> {DBConfig.from_dict(db_config).describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
