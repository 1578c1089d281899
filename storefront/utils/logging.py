# storefront/utils/logging.py
import logging
import sys

from storefront.utils.settings import LOG_LEVEL

_ROOT = "storefront"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure() -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL)
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger pod wspólnym handlerem aplikacji."""
    _configure()
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
