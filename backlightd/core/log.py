import logging
from logging.handlers import RotatingFileHandler
from typing import Optional


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Called from every app lifespan; only the first call installs handlers
    if getattr(logger, "_backlightd_configured", False):
        return

    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s - %(message)s"
    )

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # Rotating file, only when asked for
    if log_file:
        fh = RotatingFileHandler(
            log_file, maxBytes=2_000_000, backupCount=5
        )
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    # sd-bus proxies are chatty at DEBUG
    logging.getLogger("sdbus").setLevel(logging.WARNING)

    logger._backlightd_configured = True  # type: ignore[attr-defined]
