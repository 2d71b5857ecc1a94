import logging
from logging import Logger
from typing import Optional

from .config import get_settings


def configure_logging(name: Optional[str] = None) -> Logger:
    """تهيئة مسجل موحد للتطبيق، مع إمكانية طلب مسجل فرعي باسم الوحدة."""
    settings = get_settings()

    root = logging.getLogger(settings.app_name)
    if not root.handlers:
        root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s | %(name)s | %(message)s")
        handler.setFormatter(formatter)

        root.addHandler(handler)
        root.propagate = False

    if name:
        return root.getChild(name)
    return root
