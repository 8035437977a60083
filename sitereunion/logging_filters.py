# sitereunion/logging_filters.py
from __future__ import annotations
import logging
from django.core.exceptions import DisallowedHost


class IgnoreDisallowedHost(logging.Filter):
    """Filtre qui écarte les traces DisallowedHost (sondes et scanners sur un Host inconnu)."""

    def filter(self, record: logging.LogRecord) -> bool:
        exc = record.exc_info
        return not (exc and isinstance(exc[1], DisallowedHost))
