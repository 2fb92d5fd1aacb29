import logging
import os
import sys
from pathlib import Path

_logging_configured = False
_log_file_path: Path | None = None

def setup_logging(log_file_name: str | None = None, level: str | None = None):
    """
    Setup logging for the CLI.

    Diagnostics and warnings always go to stderr. A log file under ``./log``
    is added when a file name is given (or ``LOG_FILE_NAME`` is set).

    Log levels:
    - CRITICAL
    - ERROR
    - WARNING
    - INFO
    - DEBUG
    - NOTSET
    """
    global _logging_configured, _log_file_path

    file_name = log_file_name if log_file_name else os.getenv('LOG_FILE_NAME')
    log_file = Path.cwd() / "log" / file_name if file_name else None

    # If already configured and path matches, skip reconfiguration
    if _logging_configured and _log_file_path == log_file:
        return

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel((level or os.getenv('LOG_LEVEL', 'WARNING')).upper())

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_formatter = logging.Formatter('%(levelname)s - %(name)s - %(message)s')
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Ensure log directory exists
        log_file.parent.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), mode='a')
        file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # Set up global exception handler to catch uncaught exceptions
    def log_uncaught_exception(exc_type, exc_value, exc_traceback):
        # Don't log KeyboardInterrupt (Ctrl+C)
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logging.critical(
            "Uncaught exception crashed the CLI",
            exc_info=(exc_type, exc_value, exc_traceback)
        )

    # Install the global exception handler
    sys.excepthook = log_uncaught_exception

    _log_file_path = log_file

    _logging_configured = True
    logging.debug("Logging configured")


def get_log_file_path() -> Path | None:
    return _log_file_path
