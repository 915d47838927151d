import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FILE_MAX_BYTES_DEFAULT = 5 * 1024 * 1024  # 5 MB
LOG_FILE_BACKUP_COUNT_DEFAULT = 3
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(module)s.%(funcName)s:%(lineno)d] - %(message)s"


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, str):
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")
        return level
    return log_level


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def _has_console_handler(logger: logging.Logger) -> bool:
    # RotatingFileHandler subclasses StreamHandler, so match the exact type
    return any(type(h) is logging.StreamHandler for h in logger.handlers)


def setup_logging(
    logger_name: str,
    log_level: Union[int, str] = logging.INFO,
    log_dir: Optional[Path] = None,
    log_file_max_bytes: int = LOG_FILE_MAX_BYTES_DEFAULT,
    log_file_backup_count: int = LOG_FILE_BACKUP_COUNT_DEFAULT,
    console_output: bool = True,
    file_output: bool = True,
) -> logging.Logger:
    """
    Configures and returns a logger instance.

    Args:
        logger_name: The name for the logger (e.g., "lightbnb").
        log_level: Minimum level to capture, as an int or a name such as "DEBUG".
        log_dir: Directory for the rotating log file. Defaults to Settings.get_logs_dir().
        log_file_max_bytes: Maximum size of a log file before rotation.
        log_file_backup_count: Number of backup log files to keep.
        console_output: Whether to output logs to stderr. Honoured on later calls
            for an already configured logger that has no console handler yet.
        file_output: Whether to write a rotating log file.

    Returns:
        A configured logger instance.
    """
    level = _resolve_level(log_level)
    logger = logging.getLogger(logger_name)

    formatter = logging.Formatter(LOG_FORMAT)

    # Configure once per process; later calls adjust the level and may only add console output
    if logger.handlers:
        logger.setLevel(level)
        if console_output and not _has_console_handler(logger):
            for handler in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
                logger.removeHandler(handler)
            logger.addHandler(_console_handler(formatter))
        return logger

    logger.setLevel(level)

    if console_output:
        logger.addHandler(_console_handler(formatter))

    if file_output:
        if log_dir is None:
            from config.settings import Settings

            log_dir = Settings.get_logs_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        sanitized_logger_name = "".join(c if c.isalnum() or c in ['_', '-'] else '_' for c in logger_name)
        file_handler = RotatingFileHandler(
            log_dir / f"{sanitized_logger_name}.log",
            maxBytes=log_file_max_bytes,
            backupCount=log_file_backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
