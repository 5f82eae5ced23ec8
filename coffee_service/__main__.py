"""Module entrypoint for the coffee service.

    python -m coffee_service

Host, port, log level and the store backend are taken from the COFFEE_*
environment variables (see `coffee_service.config`).
"""

from __future__ import annotations

import uvicorn

from .config import Settings


def main() -> None:
    settings = Settings.from_env()

    uvicorn.run(
        "coffee_service.server:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
