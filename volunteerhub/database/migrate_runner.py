"""Database migration runner for deploys.

Goal:
- Prefer Alembic migrations for deterministic schema management.
- If the database already has the expected tables but Alembic history is out of
  sync (tables created by `create_all()` before migrations were tracked), detect
  that safely and `stamp head`.
"""

from __future__ import annotations

import os
import sys
from typing import List, Tuple

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from volunteerhub.database.database import DATABASE_URL, _is_sqlite_url, build_engine


def _alembic_cfg() -> Config:
    cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", DATABASE_URL)
    return cfg


def _required_schema_checks() -> List[Tuple[str, str]]:
    """Return (table, column) checks required to safely stamp head."""
    return [
        ("user_credentials", "email"),
        ("user_credentials", "role"),
        ("user_profiles", "user_credentials_id"),
        ("user_profiles", "availability"),
        ("events", "date_utc"),
        ("events", "required_skills"),
        ("volunteer_history", "duration_minutes"),
        ("volunteer_history", "created_at_utc"),
        ("notifications", "read"),
    ]


def missing_requirements(inspector) -> List[str]:
    """List schema elements the runtime needs but the database lacks."""
    missing: List[str] = []
    tables = set(inspector.get_table_names())
    for table, column in _required_schema_checks():
        if table not in tables:
            message = f"missing table: {table}"
            if message not in missing:
                missing.append(message)
            continue
        columns = {c["name"] for c in inspector.get_columns(table)}
        if column not in columns:
            missing.append(f"missing column: {table}.{column}")
    return missing


def _looks_like_already_applied(error: Exception) -> bool:
    msg = str(error).lower()
    return any(s in msg for s in ["duplicate", "already exists", "duplicate_table", "exists"])


def main() -> int:
    if _is_sqlite_url(DATABASE_URL):
        command.upgrade(_alembic_cfg(), "head")
        return 0

    engine = build_engine(DATABASE_URL)

    try:
        command.upgrade(_alembic_cfg(), "head")
        return 0
    except Exception as e:
        if not _looks_like_already_applied(e):
            raise

        # Only stamp head if we can verify the expected schema is present.
        missing = missing_requirements(inspect(engine))
        if missing:
            raise RuntimeError(
                "Alembic upgrade failed and schema is not at expected baseline; refusing to stamp head. "
                + "; ".join(missing)
            ) from e

        command.stamp(_alembic_cfg(), "head")
        return 0


if __name__ == "__main__":
    sys.exit(main())
