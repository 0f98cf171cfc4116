"""Command-line entry point: ``python -m astro_relay``."""

from __future__ import annotations

import logging

import uvicorn

from astro_relay.errors import ConfigurationError
from astro_relay.runtime.logging import configure_logging
from astro_relay.runtime.settings_loader import load_settings

logger = logging.getLogger(__name__)


def main() -> int:
    configure_logging()
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("AstroOne realtime relay listening on port %s", settings.websocket.port)
    uvicorn.run(
        "astro_relay.server:app",
        host=settings.websocket.host,
        port=settings.websocket.port,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
