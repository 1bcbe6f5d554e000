import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_level: str = "INFO", log_dir: Optional[Path] = None, console: bool = True
) -> Optional[Path]:
    """Configure root logging for the draft app.

    Everything at DEBUG and above goes to a rotating ``draft.log``; the
    console gets ``log_level`` and above. Does nothing if the root logger
    already has handlers.

    Returns:
        Path of the log file, or None if logging was already configured.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return None

    level = getattr(logging, log_level.upper(), logging.INFO)
    log_dir = log_dir or Path(__file__).parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "draft.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Snapshots are rewritten on every pick, keep the file small
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=2 * 1024 * 1024, backupCount=3
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    root_logger.setLevel(min(level, logging.DEBUG))
    logging.getLogger(__name__).info("Logging initialized (level=%s)", log_level)
    return log_file
