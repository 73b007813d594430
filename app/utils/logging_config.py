import logging
from logging.handlers import RotatingFileHandler
import os

from app.config import settings


def setup_logging(log_to_file: bool = True) -> logging.Logger:
    """
    Richtet den "app"-Logger einmalig ein.
    Alle Modul-Logger (app.routers.*, app.services.*) hängen darunter.
    """
    logger = logging.getLogger("app")
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if settings.debug else settings.log_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
    logger.addHandler(console_handler)

    if log_to_file:
        os.makedirs(settings.log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(settings.log_dir, "reservations.log"),
            maxBytes=10_000_000,
            backupCount=5
        )
        file_handler.setLevel(settings.log_level)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)

    return logger
