import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(level: int | str = logging.WARNING, log_file: str | None = None) -> None:
    """Console logging on stderr, plus a rotating file log when log_file is set."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    if log_file:
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)
