"""
Root logger configuration.

``setup_logging`` is called from the application lifespan.  It attaches
a console handler and, when ``logfile`` is given, a file handler.  A
logger that already has handlers is left untouched so repeated startups
(tests, reloads) do not duplicate output.
"""
import logging
from pathlib import Path


def setup_logging(level: str = "INFO", logfile: str | None = None) -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
