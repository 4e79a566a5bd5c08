"""
Storage factory – pick the storage backend from config
======================================================

Centralizes selection of the storage backend (in-memory vs PostgreSQL) so
the rest of the app stays ignorant of where links live.

- Reads the environment **at call time** so tests can switch backends.
- Imports the DB backend only when "postgres" is selected.

Environment variables
---------------------
- LINKHUB_STORAGE_BACKEND: "postgres" (default) or "memory"
- LINKHUB_DB_DSN:          DSN string, required for "postgres"
                           (DATABASE_URL is accepted as a fallback)
"""

import logging
import os
from typing import Optional

from linkhub.config import ConfigurationError
from linkhub.storage.base import BaseStorage
from linkhub.storage.storage import Storage

log = logging.getLogger(__name__)


def get_storage(backend: Optional[str] = None, dsn: Optional[str] = None) -> BaseStorage:
    """
    Return a storage backend based on configuration.

    Parameters
    ----------
    backend : str, optional
        "postgres" or "memory". If omitted, reads LINKHUB_STORAGE_BACKEND.
    dsn : str, optional
        Connection string for postgres. If omitted, reads LINKHUB_DB_DSN.

    Raises
    ------
    ConfigurationError
        Unknown backend, or postgres selected without a connection string.
    """
    be = (backend or os.getenv("LINKHUB_STORAGE_BACKEND", "postgres")).strip().lower()
    log.info("Selected storage backend: %r", be)

    if be == "memory":
        return Storage()

    if be == "postgres":
        dsn = dsn or os.getenv("LINKHUB_DB_DSN", "") or os.getenv("DATABASE_URL", "")
        if not dsn:
            raise ConfigurationError(
                "LINKHUB_DB_DSN is required for the postgres backend (env LINKHUB_DB_DSN or DATABASE_URL)"
            )
        from linkhub.storage.db_storage import DBStorage
        return DBStorage(dsn=dsn)

    raise ConfigurationError(f"Unknown storage backend: {be!r}")
