"""Gatehouse entrypoint.

Run with:
  python -m gatehouse
"""

import logging
import sys

import uvicorn

from gatehouse.config import Settings
from gatehouse.errors import ConfigError


def main() -> None:
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        raise SystemExit(f"Configuration error: {exc}")

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger(__name__).info("Starting Gatehouse on %s:%s", settings.host, settings.port)
    uvicorn.run(
        "gatehouse.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )

if __name__ == "__main__":
    main()
