import logging
import os
from logging.handlers import RotatingFileHandler

from neropage.platform.config import settings

ROOT_LOGGER_NAME = "neropage"
LOG_FILE_NAME = "neropage.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root(root: logging.Logger) -> None:
    log_dir = os.path.join(os.getcwd(), settings.LOG_DIR)
    os.makedirs(log_dir, exist_ok=True)

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE_NAME), maxBytes=10_000_000, backupCount=5, encoding="utf-8"
    )
    console_handler = logging.StreamHandler()

    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root.addHandler(handler)

    root.setLevel(level)
    # uvicorn installs its own root handlers; don't print everything twice
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a neropage module, writing to console AND a rotating file.

    Handlers are attached once, to the shared "neropage" logger; module
    loggers (neropage.features.links..., etc.) reach them by propagation.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        _configure_root(root)
    return logging.getLogger(name)
