import logging

from pythonjsonlogger.json import JsonFormatter

from siswa_directory.core.config import settings

LOGGER_NAME = "siswa_directory"


def configure_logging() -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Human readable lines by default; JSON lines when LOG_JSON is enabled so
    the output can be shipped to a log collector as-is.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if any(getattr(handler, "_siswa_directory", False) for handler in logger.handlers):
        return logger

    handler = logging.StreamHandler()
    if settings.log_json:
        formatter = JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s in %(module)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    handler.setFormatter(formatter)
    handler._siswa_directory = True
    logger.addHandler(handler)
    return logger
