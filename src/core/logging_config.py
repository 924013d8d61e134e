"""
Configuration centralisée du logging du bot de mentoring.

Objectifs :
- Un seul setup idempotent (évite la duplication des handlers)
- Déduplication des messages identiques (une même erreur d'adapter peut remonter en boucle)
- Format et niveau configurables via variables d'environnement (LOG_LEVEL, LOG_FORMAT)
- Bruit de discord.py limité (LOG_LEVEL_DISCORD, WARNING par défaut)
"""
from __future__ import annotations

import logging
import threading
import os

_INITIALIZED = False
_SEEN_LOCK = threading.Lock()
_SEEN_RECORDS: set[tuple[str, int, str]] = set()
_SEEN_MAX = 5000

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DISCORD_LEVEL = os.getenv("LOG_LEVEL_DISCORD", "WARNING").upper()
DEFAULT_FORMAT = os.getenv("LOG_FORMAT", '[%(asctime)s] %(levelname)s %(name)s: %(message)s')


class _DeduplicateFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        # Les traces d'exception ne sont jamais filtrées
        if record.exc_info:
            return True
        try:
            rendered = record.getMessage()
        except Exception:  # noqa: BLE001
            rendered = str(record.msg)
        key = (record.name, record.levelno, rendered)
        with _SEEN_LOCK:
            if key in _SEEN_RECORDS:
                return False
            if len(_SEEN_RECORDS) >= _SEEN_MAX:
                _SEEN_RECORDS.clear()
            _SEEN_RECORDS.add(key)
        return True


def setup_logging(force: bool = False) -> None:
    global _INITIALIZED
    if _INITIALIZED and not force:
        return

    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    formatter = logging.Formatter(DEFAULT_FORMAT)
    for h in root.handlers:
        if not any(isinstance(f, _DeduplicateFilter) for f in h.filters):
            h.addFilter(_DeduplicateFilter())
        h.setFormatter(formatter)
    root.setLevel(getattr(logging, DEFAULT_LEVEL, logging.INFO))
    logging.getLogger("discord").setLevel(getattr(logging, DISCORD_LEVEL, logging.WARNING))
    _INITIALIZED = True


__all__ = ["setup_logging"]
