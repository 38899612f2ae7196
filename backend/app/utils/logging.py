import logging
import sys

from app.config import settings


def get_logger(name: str, prefix: str = None) -> logging.Logger:
    """
    Return a stdout logger with a bracketed prefix, e.g. "[CART] added ...".
    Handlers are attached once per logger name.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        tag = (prefix or name.rsplit(".", 1)[-1]).upper()
        h.setFormatter(logging.Formatter(f"[{tag}] %(levelname)s %(message)s"))
        log.addHandler(h)
        log.propagate = False
    return log
