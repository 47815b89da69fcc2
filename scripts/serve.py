"""
Start the contact intake HTTP service.
"""

from __future__ import annotations

import logging

import uvicorn

from app.config import get_server_settings
from app.main import _validate_env, app

logger = logging.getLogger("scripts.serve")


def main() -> int:
    settings = get_server_settings()
    try:
        _validate_env()
    except RuntimeError as exc:
        logger.critical("Could not start server: %s", exc)
        return 1

    # uvicorn exits non-zero itself when the port is taken or startup fails.
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
