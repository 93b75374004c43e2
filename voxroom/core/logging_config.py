from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """
    Configure the root logger. If handlers are already installed (uvicorn,
    pytest, a second call) only the level is changed.
    """
    level = log_level.upper()
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
