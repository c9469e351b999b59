import logging
import os
from logging.handlers import RotatingFileHandler

from emoji_map.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024


def format_context(extra: dict | None) -> str:
    """Render log context as ``key=value`` pairs in insertion order."""
    if not extra:
        return ""
    return " ".join(f"{key}={value!r}" for key, value in extra.items())


class LoggerConfig:
    """
    Service-wide logger for the places API.

    Console output is always on. A rotating file under ``log_directory`` is
    added when ``to_file`` is set. Handlers are attached once per logger
    name so re-imports and test reloads do not duplicate lines.
    """
    def __init__(
        self,
        env: int = logging.INFO,
        logger_name: str = "EMOJI-MAP-BE",
        log_directory: str = "logs",
        log_file: str = "emoji_map.log",
        to_file: bool = True,
    ):
        self.env = env
        self.logger = logging.getLogger(logger_name)
        self.log_file_path = os.path.join(os.path.abspath(log_directory), log_file)
        self.to_file = to_file
        self._attach_handlers()

    def _build_handlers(self) -> list[logging.Handler]:
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if self.to_file:
            try:
                os.makedirs(os.path.dirname(self.log_file_path), exist_ok=True)
                handlers.append(RotatingFileHandler(
                    self.log_file_path, maxBytes=MAX_LOG_BYTES, backupCount=5, encoding="utf-8"
                ))
            except OSError as e:
                print(f"File logging disabled, cannot open {self.log_file_path}: {str(e)}")
        return handlers

    def _attach_handlers(self):
        self.logger.setLevel(self.env)
        if self.logger.handlers:
            return

        formatter = logging.Formatter(LOG_FORMAT)
        for handler in self._build_handlers():
            handler.setLevel(self.env)
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log(self, level: int, message: str, extra: dict = None):
        context = format_context(extra)
        self.logger.log(level, f"{message} | {context}" if context else message)


logs = LoggerConfig(
    env=settings.LOGGER,
    log_directory=settings.LOG_DIRECTORY,
    log_file=settings.LOG_FILE,
    to_file=settings.LOG_TO_FILE,
)
