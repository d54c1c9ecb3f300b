"""
Logging setup for Mentor-Link.

``setup_logging`` installs one console handler on the root logger and, when
file logging is on, a ``mentor_link.log`` file that always records DEBUG.
Defaults come from the server settings (``MENTOR_LINK_LOG_LEVEL``,
``LOG_FORMAT``, ``LOG_FILE_DIR`` and ``ENABLE_FILE_LOGGING``); every argument
overrides its setting.

Package levels are fixed in ``PACKAGE_LOG_LEVELS``: the lifecycle engine and
the meeting client log at DEBUG, SQLAlchemy and httpx only warn.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

LOG_FILE_NAME = "mentor_link.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LINE_FORMAT = "detailed"

LINE_FORMATS: Dict[str, str] = {
    "simple": "%(levelname)s %(name)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s",
    "json": (
        '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
        '"source": "%(filename)s:%(lineno)d", "message": "%(message)s"}'
    ),
}

PACKAGE_LOG_LEVELS: Dict[str, str] = {
    "mentor_link.lifecycle": "DEBUG",
    "mentor_link.meeting": "DEBUG",
    "mentor_link.core.database": "INFO",
    "mentor_link.notifications": "INFO",
    "mentor_link.server": "INFO",
    # Third-party
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "WARNING",
    "uvicorn.access": "INFO",
}


def line_format(name: str) -> str:
    """Resolve a format name, falling back to the detailed format."""
    return LINE_FORMATS.get(name.lower(), LINE_FORMATS[DEFAULT_LINE_FORMAT])


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: Optional[bool] = None,
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure the root logger. Safe to call repeatedly.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: ``simple``, ``detailed`` or ``json``
        enable_file: Also write ``mentor_link.log``
        log_dir: Directory of the log file
    """
    # Imported here: the settings module pulls in the server package.
    from mentor_link.server.core.config import settings

    level = (log_level or settings.log_level).upper()
    fmt = log_format or settings.log_format
    to_file = settings.enable_file_logging if enable_file is None else enable_file
    formatter = logging.Formatter(line_format(fmt), datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if to_file:
        directory = Path(log_dir or settings.log_file_dir)
        directory.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(directory / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for package, package_level in PACKAGE_LOG_LEVELS.items():
        logging.getLogger(package).setLevel(package_level)

    root.info(f"Logging ready: level={level} format={fmt} file={to_file}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
