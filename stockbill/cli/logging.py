"""
Logging configuration for the stockbill CLI.
Provides consistent logging setup across all commands.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

class DebugFormatter(logging.Formatter):
    """Custom formatter for debug output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with timestamp and source."""
        if sys.stderr.isatty():
            cyan = '\033[0;36m'
            red = '\033[0;31m'
            reset = '\033[0m'
            color = red if record.levelno >= logging.ERROR else cyan
            return f"{color}[{record.created:.3f}] {record.name}: {record.getMessage()}{reset}"
        return f"[{record.created:.3f}] {record.name}: {record.getMessage()}"

def setup_logging(debug: bool = False, level: str = 'INFO', log_dir: Optional[Path] = None) -> None:
    """Setup logging configuration.

    Args:
        debug: Enable debug logging, overrides ``level``
        level: Root log level name
        log_dir: Also write a plain log file here when set
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO))

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(DebugFormatter())
    root_logger.addHandler(console_handler)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / 'stockbill.log')
        file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
        root_logger.addHandler(file_handler)

    # Always keep SQLAlchemy logging at WARNING level
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setFormatter(DebugFormatter())

    return logger
