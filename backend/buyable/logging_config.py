"""
Konfiguracja logowania pakietu buyable.

Zapytania SQL loguje sam SQLAlchemy (`SQL_ECHO`); tutaj konfigurowane sa
tylko loggery repozytorium i hookow cyklu zycia.
"""

import logging
import sys
from typing import Optional, TextIO

__all__ = ["setup_logging", "get_logger"]


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Konfiguruje logowanie na konsole dla loggera `buyable`.

    Args:
        level: Poziom logowania (domyslnie INFO).
        stream: Strumien wyjsciowy (domyslnie stdout).

    Returns:
        logging.Logger: Skonfigurowany logger `buyable`.
    """
    logger = logging.getLogger("buyable")
    logger.setLevel(level)

    # Usuniecie poprzednich handlerow
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(handler)
    return logger


def get_logger(name: str = "buyable") -> logging.Logger:
    """
    Zwraca logger z drzewa `buyable`.

    Args:
        name: Nazwa loggera (poprzedzana prefiksem 'buyable.').

    Returns:
        logging.Logger: Instancja loggera.
    """
    if name == "buyable":
        return logging.getLogger("buyable")
    return logging.getLogger(f"buyable.{name}")
