from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from task_manager.core.paths import log_file


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the console quiet while the live timer owns stdout.

    Our own records pass at the handler level; third-party ones (requests,
    urllib3) only when they are errors.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("task_manager"):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    console_level: int = logging.WARNING,
    log_dir: Optional[Path] = None,
    file_level: int = logging.DEBUG,
) -> None:
    """Configure root logging: filtered stderr console, optional file.

    Call once, before the first command runs.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_dir is not None:
        fh = logging.FileHandler(str(log_file(log_dir)), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
