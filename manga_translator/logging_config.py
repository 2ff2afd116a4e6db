"""
Logging setup shared by the CLI and the HTTP service.

Console output always; when a log directory is given, size-rotated
app.log (everything) and error.log (errors only) are written there too.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(path: Path, level: int, max_bytes: int, backup_count: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure the root logger.
    
    Args:
        log_level: root level (DEBUG/INFO/WARNING/ERROR)
        log_dir: directory for rotating log files, or None for console only
        max_bytes: size at which a log file is rotated
        backup_count: rotated files kept per log
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    level = getattr(logging, log_level.upper(), logging.INFO)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    
    # avoid duplicate handlers when called twice
    root_logger.handlers.clear()
    
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)
    
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        
        app_handler = _file_handler(log_path / "app.log", logging.DEBUG, max_bytes, backup_count)
        app_handler.setFormatter(formatter)
        root_logger.addHandler(app_handler)
        
        error_handler = _file_handler(log_path / "error.log", logging.ERROR, max_bytes, backup_count)
        error_handler.setFormatter(formatter)
        root_logger.addHandler(error_handler)
    
    # Quiet third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.INFO)
    
    if log_dir:
        logging.info(f"Logging initialised, directory: {Path(log_dir).absolute()}")
