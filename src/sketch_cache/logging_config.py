"""Process-wide logging setup.

Log records go to stdout and to a daily file ``{log_dir}/YYYY-MM-DD.log``.
DEBUG records (cache hits/misses, prompts) are only emitted in development.
"""

import logging
import sys
from datetime import date
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(filename)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
_HANDLER_MARKER = "_sketch_cache_handler"


def configure_logging(log_dir: str | Path, debug: bool = False) -> Path:
    """Install console and file handlers on the root logger.

    Args:
        log_dir: Directory for the daily log file. Created if missing.
        debug: Emit DEBUG records when True, INFO and above otherwise.

    Returns:
        Path of the log file being written
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f"{date.today().isoformat()}.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(formatter)

    root = logging.getLogger()
    # Replace handlers from a previous call so records are not duplicated.
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()
    for handler in (console_handler, file_handler):
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    return log_file
