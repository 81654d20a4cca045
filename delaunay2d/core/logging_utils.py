"""Logging utilities for delaunay2d.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. Package code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_NAME = 'delaunay2d'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_package_root() -> logging.Logger:
    """Ensure the 'delaunay2d' logger has a single stream handler and is
    isolated from the process root logger. Returns the package logger.
    """
    pkg_root = logging.getLogger(_ROOT_NAME)
    has_stdout = any(isinstance(h, logging.StreamHandler) and getattr(h, 'stream', None) is sys.stdout
                     for h in pkg_root.handlers)
    if not has_stdout:
        # NullHandlers added by the package __init__ would swallow output
        for h in list(pkg_root.handlers):
            if isinstance(h, logging.NullHandler):
                pkg_root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        pkg_root.addHandler(handler)
    pkg_root.propagate = False
    return pkg_root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO') -> None:
    """Configure the 'delaunay2d' logger family level.

    This does NOT modify the process root logger.
    """
    pkg_root = _ensure_package_root()
    pkg_root.setLevel(_to_level(level))


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'delaunay2d' namespace.

    Without an explicit level the logger is left at NOTSET so it inherits
    whatever configure_logging() set on the package root. Handlers are only
    attached by configure_logging(), so importing the package stays silent.
    """
    if not name.startswith(_ROOT_NAME):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
