"""
Bring an existing todos database up to the current schema.

Creates the todos table when it is missing; otherwise adds any column an
older database lacks. Finishes by inserting and removing a check row.

Usage:
    todo-migrate
    python -m todo_api.migrate
"""
from __future__ import annotations

import logging
import sys
from typing import List, Optional, Tuple

from .db import COLS, CREATE_TABLE_SQL, SQLiteStore, StoreError
from .logs import configure_logging
from .settings import get_settings

logger = logging.getLogger(__name__)

# SQLite rejects non-constant defaults in ALTER TABLE, so created_at is
# added bare, backfilled from the store clock and kept filled by a trigger.
_ADDED_COLUMNS: List[Tuple[str, str]] = [
    (COLS.priority, f"{COLS.priority} VARCHAR(20) DEFAULT 'medium'"),
    (COLS.category, f"{COLS.category} VARCHAR(50) DEFAULT 'general'"),
    (COLS.completed, f"{COLS.completed} BOOLEAN DEFAULT 0"),
    (COLS.created_at, f"{COLS.created_at} TIMESTAMP"),
]

_CREATED_AT_TRIGGER_SQL = f"""
    CREATE TRIGGER IF NOT EXISTS {COLS.table}_{COLS.created_at}_default
    AFTER INSERT ON {COLS.table}
    WHEN NEW.{COLS.created_at} IS NULL
    BEGIN
        UPDATE {COLS.table} SET {COLS.created_at} = CURRENT_TIMESTAMP
        WHERE {COLS.id} = NEW.{COLS.id};
    END
"""

_CHECK_ROW = ("Migration check", "Migration check description", "high", "health")


def _table_exists(store: SQLiteStore) -> bool:
    result = store.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?", (COLS.table,)
    )
    return bool(result.rows)


# PUBLIC_INTERFACE
def migrate(store: SQLiteStore) -> List[str]:
    """
    Migrate the schema behind store. Return the names of the columns added.

    Raises:
        StoreError: if any migration statement or the check row fails.
    """
    added: List[str] = []
    if not _table_exists(store):
        logger.info("Creating %s table", COLS.table)
        store.execute(CREATE_TABLE_SQL)
    else:
        existing = {r["name"]: r for r in store.execute(f"PRAGMA table_info({COLS.table})").rows}
        for name, ddl in _ADDED_COLUMNS:
            if name in existing:
                continue
            logger.info("Adding column %s", name)
            store.execute(f"ALTER TABLE {COLS.table} ADD COLUMN {ddl}")
            added.append(name)
        created_at_info = existing.get(COLS.created_at)
        if created_at_info is None or created_at_info["dflt_value"] is None:
            store.execute(
                f"UPDATE {COLS.table} SET {COLS.created_at} = CURRENT_TIMESTAMP "
                f"WHERE {COLS.created_at} IS NULL"
            )
            logger.info("Adding %s default trigger", COLS.created_at)
            store.execute(_CREATED_AT_TRIGGER_SQL)

    check = store.execute(
        f"""
        INSERT INTO {COLS.table} ({COLS.title}, {COLS.description}, {COLS.priority},
            {COLS.category}, {COLS.created_at})
        VALUES (?, ?, ?, ?, CURRENT_TIMESTAMP)
        RETURNING {COLS.id}
        """,
        _CHECK_ROW,
    )
    check_id = check.rows[0][COLS.id]
    logger.info("Check row %s created", check_id)
    store.execute(f"DELETE FROM {COLS.table} WHERE {COLS.id} = ?", (check_id,))
    return added


# PUBLIC_INTERFACE
def main(argv: Optional[List[str]] = None) -> int:
    """Run the migration against the configured database. Return the exit status."""
    settings = get_settings()
    configure_logging(settings.log_level)
    db_path = argv[0] if argv else settings.db_path
    logger.info("Starting database migration on %s", db_path)
    try:
        migrate(SQLiteStore(db_path))
    except StoreError:
        logger.exception("Migration failed")
        return 1
    logger.info("Migration completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
