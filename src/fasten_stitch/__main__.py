from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import uvicorn

from fasten_stitch.app import create_app
from fasten_stitch.config import LoggingConfig, load_stitch_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: LoggingConfig) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        log_file = Path(config.file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file,
                maxBytes=config.max_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    logging.basicConfig(level=config.level, format=LOG_FORMAT, handlers=handlers, force=True)


def main() -> None:
    config = load_stitch_config()
    configure_logging(config.logging)

    # uvicorn handles SIGINT/SIGTERM; nothing here needs draining.
    uvicorn.run(
        create_app(config),
        host=config.bind_host,
        port=config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
