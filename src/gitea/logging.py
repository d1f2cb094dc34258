import logging
import sys
from typing import Any, Mapping, Optional

REDACTED = "***"
SENSITIVE_KEYS = frozenset({"authorization", "access_token", "token", "password"})


def redact(value: Any, key: Optional[str] = None) -> Any:
    """Mask credentials before they reach a log handler.

    Mappings are walked one level at a time, so a headers or params dict
    passed as log context keeps its non-sensitive entries readable.
    """
    if key is not None and key.lower() in SENSITIVE_KEYS:
        return REDACTED
    if isinstance(value, Mapping):
        return {k: redact(v, str(k)) for k, v in value.items()}
    return value


class Logger:
    """Logger used by the Gitea client and API requesters.

    Thin wrapper over the standard ``logging`` module that appends
    ``key=value`` context to each message and never prints tokens.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    def __init__(
        self,
        name: str = "gitea-api-client",
        level: int = logging.INFO,
        format_string: Optional[str] = None,
        log_to_console: bool = True,
        log_file: Optional[str] = None,
    ):
        """Initialize the logger.

        Args:
            name: Logger name
            level: Minimum logging level
            format_string: Custom format string for log messages
            log_to_console: Whether to log to stdout
            log_file: Optional file path to log to
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Re-creating a logger with the same name must not stack handlers
        if self.logger.handlers:
            self.logger.handlers.clear()

        if format_string is None:
            format_string = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"

        formatter = logging.Formatter(format_string)

        if log_to_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @property
    def level(self) -> int:
        return self.logger.level

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(self.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(self.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(self.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(self.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(self.CRITICAL, message, **kwargs)

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        """Format context and emit a record.

        Args:
            level: Log level
            message: The message to log
            **kwargs: Additional context, sensitive keys are redacted
        """
        if kwargs:
            context_str = " ".join(f"{k}={redact(v, k)}" for k, v in kwargs.items())
            message = f"{message} - {context_str}"
        self.logger.log(level, message)


class DefaultLogger(Logger):
    """Pre-configured console logger for the Gitea client."""

    def __init__(
        self,
        name: str = "gitea-api-client",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
    ):
        super().__init__(
            name=name,
            level=level,
            format_string="[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s",
            log_to_console=True,
            log_file=log_file,
        )
