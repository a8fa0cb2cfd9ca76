from __future__ import annotations

import uvicorn

from .app.main import create_app
from .ingest.config import load_settings
from .utils.logging_config import setup_logging


def main() -> None:
    settings = load_settings()
    logger = setup_logging(settings.log_level)
    logger.info(
        "Launching gbfs-exporter in %s mode on %s:%s",
        settings.mode,
        settings.host,
        settings.port,
    )
    if settings.mode == "poll":
        logger.info(
            "Polling %s (failure policy: %s)",
            settings.station_status_url,
            settings.poll_failure_policy,
        )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
