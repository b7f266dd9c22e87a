"""Logging setup shared by the CLI and the serving app."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

# The OCI SDK logs every request at INFO through these loggers.
_NOISY_LOGGERS = ("oci", "urllib3")


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger once with a single stream handler."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level!r}")

    logging.basicConfig(level=level, format=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
