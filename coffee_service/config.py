"""Runtime settings.

All knobs come from environment variables so the service can be configured the
same way locally, in containers and behind tunnels:

  COFFEE_HOST       bind address (default 0.0.0.0)
  COFFEE_PORT       bind port (default 8080)
  COFFEE_LOG_LEVEL  uvicorn/logging level (default info)
  COFFEE_STORE      "memory" or "sqlite" (default memory)
  COFFEE_DB_PATH    database file for the sqlite store (default coffee.db)
  COFFEE_DEBUG      include exception details in error envelopes
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


STORE_MEMORY = "memory"
STORE_SQLITE = "sqlite"
STORE_KINDS = frozenset({STORE_MEMORY, STORE_SQLITE})


def _truthy(value: str | None) -> bool:
    v = (value or "").strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    store: str = STORE_MEMORY
    db_path: str = "coffee.db"
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        store = (env.get("COFFEE_STORE") or STORE_MEMORY).strip().lower()
        if store not in STORE_KINDS:
            raise ValueError(f"COFFEE_STORE must be one of {sorted(STORE_KINDS)}, got {store!r}")

        return cls(
            host=env.get("COFFEE_HOST", "0.0.0.0"),
            port=int(env.get("COFFEE_PORT", "8080")),
            log_level=env.get("COFFEE_LOG_LEVEL", "info").lower(),
            store=store,
            db_path=env.get("COFFEE_DB_PATH", "coffee.db"),
            debug=_truthy(env.get("COFFEE_DEBUG")),
        )
