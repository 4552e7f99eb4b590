"""Logging helpers for chiflow.

Use `enable(True)` (or set env CHIFLOW_DEBUG=1) to attach a stream handler to
the root "chiflow" logger. Modules get child loggers through `dbg(name)`.
"""

# Generic imports
import logging
import os
import threading

_ENABLED = bool(int(os.getenv("CHIFLOW_DEBUG", "0") or "0"))
_LOCK    = threading.Lock()
_ROOT    = "chiflow"

def enable(flag=True, level=logging.DEBUG):
    """Enable or disable chiflow logging output."""
    global _ENABLED
    with _LOCK:
        _ENABLED = bool(flag)
        lg = logging.getLogger(_ROOT)
        if _ENABLED:
            if not any(isinstance(h, logging.StreamHandler) for h in lg.handlers):
                h = logging.StreamHandler()
                fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
                h.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))
                lg.addHandler(h)
            lg.setLevel(level)
        else:
            lg.setLevel(logging.WARNING)

def is_enabled():
    return _ENABLED

def dbg(name):
    """Return a child logger under the chiflow namespace."""
    root = logging.getLogger(_ROOT)
    if _ENABLED and not root.handlers:
        enable(True)

    return logging.getLogger(f"{_ROOT}.{name}")
