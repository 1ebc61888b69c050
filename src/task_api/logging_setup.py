from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "task_api.console"


def setup_logging(level: str = "INFO") -> None:
    """
    Attach a stderr handler to the 'task_api' logger and set its level.

    Safe to call once per app instance: an existing handler is reused instead
    of being added twice, so tests that build many apps do not duplicate output.
    """
    logger = logging.getLogger("task_api")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(sys.stderr)
    ch.set_name(_HANDLER_NAME)
    ch.setFormatter(fmt)
    logger.addHandler(ch)
