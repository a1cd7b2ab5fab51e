import logging.config
import sys
from pathlib import Path

from heritage_puzzle.config import LOG_FILENAME


def configure_logging(data_dir: Path, level: str = "INFO") -> None:
    data_dir.mkdir(parents=True, exist_ok=True)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,

        # Formatters: How the logs look
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },

        # Handlers: Where the logs go.  stdout belongs to the terminal UI,
        # so the console handler writes to stderr and only for warnings.
        "handlers": {
            "console": {
                "level": "WARNING",
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": sys.stderr,
            },
            "file": {
                "level": level,
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "standard",
                "filename": str(data_dir / LOG_FILENAME),
                "maxBytes": 1048576,  # 1MB
                "backupCount": 3,
                "encoding": "utf-8",
            },
        },

        # Loggers: The configuration for specific modules
        "loggers": {
            "": {  # root
                "handlers": ["console"],
                "level": "WARNING",
            },
            "heritage_puzzle": {
                "handlers": ["console", "file"],
                "level": level,
                "propagate": False
            },
        }
    }

    logging.config.dictConfig(logging_config)
