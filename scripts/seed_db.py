from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.music_school.music_school.container import build_container
from src.music_school.music_school.core.enums import DataMode
from src.music_school.music_school.database.bootstrap import seed_defaults
from src.music_school.music_school.database.connection import DBConfig


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the default catalog and admin account.")
    parser.add_argument("--mode", choices=[m.value for m in DataMode], help="only seed this data mode")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    container = build_container(db_config=db_config, backend="mysql")

    modes = [DataMode(args.mode)] if args.mode else list(DataMode)
    for mode in modes:
        seed_defaults(container.services(mode).store)

    print(f"OK: seeded {', '.join(m.value for m in modes)} -> {DBConfig.from_dict(db_config).describe()}")


if __name__ == "__main__":
    main()
