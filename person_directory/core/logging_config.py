"""
Logging configuration for the API process.

Application records go to the console and to a rotating file under
``settings.log_dir``. Third-party libraries stay at WARNING unless listed in
``PACKAGE_LEVELS``.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict

from ..config import Settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Names of the handlers installed here, so a second call replaces them
HANDLER_NAMES = ("person_directory.file", "person_directory.console")

def package_levels(settings: Settings) -> Dict[str, str]:
    """Per-logger levels derived from settings."""
    return {
        "person_directory": settings.log_level.upper(),
        "uvicorn": "INFO",
        "uvicorn.access": "INFO",
        # SQL statements are logged by SQLAlchemy's engine logger at INFO
        "sqlalchemy.engine": "INFO" if settings.database_echo else "WARNING",
    }

def setup_logging(settings: Settings, log_file: str = "api.log") -> logging.Logger:
    """
    Install console and rotating-file handlers on the root logger.

    Args:
        settings: Application settings (log directory, level, rotation, SQL echo)
        log_file: Log file name inside ``settings.log_dir``

    Returns:
        The ``person_directory`` package logger
    """
    log_path = Path(settings.log_dir) / log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() in HANDLER_NAMES]:
        root.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8"
    )
    console_handler = logging.StreamHandler()
    formatter = logging.Formatter(LOG_FORMAT)
    for name, handler in zip(HANDLER_NAMES, (file_handler, console_handler)):
        handler.set_name(name)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(logging.WARNING)
    for name, level in package_levels(settings).items():
        logging.getLogger(name).setLevel(level)

    return logging.getLogger("person_directory")
