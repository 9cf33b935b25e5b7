"""Logging configuration for the application."""
import logging
from pathlib import Path
from datetime import datetime

from backend.app.config import get_settings

# Create logs directory
LOGS_DIR = Path(get_settings().log_dir)
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Create log file with timestamp
LOG_FILE = LOGS_DIR / f"app_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"


def setup_logger(name: str = "campaign_copilot", level: str = None) -> logging.Logger:
    """Set up a logger with file and console handlers."""
    if level is None:
        level = get_settings().log_level
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # File handler - detailed logs
    file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    # Console handler - simpler format
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level, logging.INFO))
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    return logger


# Create default logger instance
logger = setup_logger()
