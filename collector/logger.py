"""Central logger configuration.

Every module does `logger = setup_logger(__name__)`; handlers live on the
package root logger so the level can be tuned in one place.
"""

import logging
import sys

ROOT_LOGGER = "collector"


def setup_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)

    # uvicorn --reload imports modules twice
    if not root.handlers:
        root.setLevel(logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root.addHandler(handler)
        root.propagate = False

    return logging.getLogger(name)


def set_level(level: str):
    logging.getLogger(ROOT_LOGGER).setLevel(level)
