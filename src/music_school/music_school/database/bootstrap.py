from __future__ import annotations

import logging

import mysql.connector

from ..catalog.model import SystemConfig
from ..catalog.repository import SystemConfigRepository
from ..core.constants import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from ..core.enums import DataMode, Role
from ..storage.collections import TABLES, table_name
from ..storage.repository import CollectionStore
from ..users.model import AppUser, full_permissions
from ..users.repository import UserRepository
from .connection import DBConfig

logger = logging.getLogger(__name__)

_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS `{table}` (
    id VARCHAR(64) NOT NULL PRIMARY KEY,
    payload JSON NOT NULL,
    created_at TIMESTAMP(6) NOT NULL DEFAULT CURRENT_TIMESTAMP(6)
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
"""


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def ensure_collections(db_config: dict, mode: DataMode = DataMode.PRODUCTION) -> list[str]:
    """Create the collection tables of one data mode (idempotent)."""
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)
    tables = [table_name(c, mode) for c in TABLES]

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for table in tables:
            cur.execute(_TABLE_DDL.format(table=table))
        conn.commit()
    finally:
        conn.close()
    logger.info("Collections ready for %s mode on %s", DataMode(mode).value, target.describe())
    return tables


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def seed_defaults(store: CollectionStore) -> None:
    """Default catalog and the initial admin account, when absent."""
    configs = SystemConfigRepository(store)
    if configs.get() is None:
        configs.save(SystemConfig.default())
        logger.info("Seeded default system config (%s)", store.mode.value)

    users = UserRepository(store)
    if not any(u.role == Role.ADMIN for u in users.list_all()):
        users.add(
            AppUser(
                id="admin",
                username=DEFAULT_ADMIN_USERNAME,
                password=DEFAULT_ADMIN_PASSWORD,
                name="Administrator",
                role=Role.ADMIN,
                permissions=full_permissions(),
                is_first_login=True,
            )
        )
        logger.info("Seeded default admin account (%s)", store.mode.value)
