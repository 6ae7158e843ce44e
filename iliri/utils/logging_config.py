import logging
from logging.handlers import RotatingFileHandler
import os

from iliri.config import settings

CONSOLE_FORMAT = '%(levelname)s - %(name)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging() -> logging.Logger:
    """
    Konfiguriert den "iliri"-Logger einmalig: Konsole und rotierende Logdatei
    unter settings.log_dir. Weitere Aufrufe liefern den fertigen Logger zurück.
    """
    logger = logging.getLogger("iliri")
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    os.makedirs(settings.log_dir, exist_ok=True)
    log_path = os.path.join(settings.log_dir, settings.log_file)

    logger.addHandler(_handler(
        logging.StreamHandler(),
        logging.DEBUG if settings.debug else logging.INFO,
        CONSOLE_FORMAT,
    ))
    logger.addHandler(_handler(
        RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3, encoding="utf-8"),
        logging.INFO,
        FILE_FORMAT,
    ))
    return logger
