# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Database connection management.

A single long-lived connection is opened per process and wrapped in a
:class:`~threatlens.storage.backend.DatabaseBackend`.  Request handlers
receive the backend through FastAPI dependencies; the CLI calls
:func:`init_backend` directly.
"""

from __future__ import annotations

from pathlib import Path

import aiosqlite

from threatlens.core.exceptions import ConfigurationError, StorageError
from threatlens.storage.backend import DatabaseBackend
from threatlens.storage.schema import ensure_schema

_db: aiosqlite.Connection | None = None
_backend: DatabaseBackend | None = None


async def init_db(
    db_path: Path | str = "threat_intel.db",
    *,
    create_schema: bool = True,
) -> aiosqlite.Connection:
    """Open the SQLite database and return the connection.

    Enables WAL mode so the external ingestion process can write while
    this service reads.  When *create_schema* is True (the default),
    missing tables and indexes are created.
    """
    global _db

    if _db is not None:
        return _db

    try:
        _db = await aiosqlite.connect(str(db_path))
        _db.row_factory = aiosqlite.Row

        await _db.execute("PRAGMA journal_mode=WAL")
        await _db.execute("PRAGMA foreign_keys=ON")

        if create_schema:
            await ensure_schema(_db)

        return _db
    except Exception as exc:
        if _db is not None:
            await _db.close()
        _db = None
        msg = f"Failed to initialize database at {db_path}: {exc}"
        raise StorageError(msg) from exc


async def init_backend(
    *,
    backend: str = "sqlite",
    db_path: Path | str = "threat_intel.db",
    create_schema: bool = True,
) -> DatabaseBackend:
    """Initialise and return the process-wide :class:`DatabaseBackend`."""
    global _backend

    if _backend is not None:
        return _backend

    chosen = backend.lower()
    if chosen != "sqlite":
        msg = f"Unknown database backend: {backend!r}. Expected 'sqlite'."
        raise ConfigurationError(msg)

    conn = await init_db(db_path, create_schema=create_schema)
    from threatlens.storage.sqlite_backend import SQLiteBackend

    _backend = SQLiteBackend(conn)
    return _backend


async def get_db() -> aiosqlite.Connection:
    """Get the active database connection.

    Raises StorageError if the database has not been initialized.
    """
    if _db is None:
        raise StorageError("Database not initialized. Call init_db() first.")
    return _db


async def get_backend() -> DatabaseBackend:
    """Get the active :class:`DatabaseBackend`.

    Raises :class:`StorageError` if no backend has been initialised.
    """
    if _backend is None:
        raise StorageError("Database backend not initialized. Call init_backend() first.")
    return _backend


async def close_db() -> None:
    """Close the database connection."""
    global _db, _backend

    # The backend wraps the same connection, so only close it once.
    _backend = None

    if _db is not None:
        await _db.close()
        _db = None
