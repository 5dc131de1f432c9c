"""Debug logging.

``log`` forwards app messages to Textual's devtools log and to the ``kanterm``
logger; ``setup_debug_logging`` adds a ``debug.log`` file handler with ``--debug``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kanterm.constants import MAX_LOG_MESSAGE_LENGTH

if TYPE_CHECKING:
    from pathlib import Path

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _truncate(message: str) -> str:
    if len(message) > MAX_LOG_MESSAGE_LENGTH:
        return message[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
    return message


def format_message(*args: object, **kwargs: Any) -> str:
    """Join positional args with spaces, then ``key=value`` pairs; truncate."""
    output = " ".join(str(arg) for arg in args)
    if kwargs:
        key_values = " ".join(f"{key}={value!r}" for key, value in kwargs.items())
        output = f"{output} {key_values}" if output else key_values
    return _truncate(output)


class KantermLogger:
    """Logger for the app shell, writing to Textual's log and the ``kanterm`` logger."""

    def __init__(self, name: str = "kanterm.app") -> None:
        self._logger = logging.getLogger(name)

    def __call__(self, *args: object, **kwargs: Any) -> None:
        """Log at INFO level (default)."""
        self.info(*args, **kwargs)

    def _log(self, level: str, *args: object, **kwargs: Any) -> None:
        output = format_message(*args, **kwargs)

        from textual import log as textual_log

        getattr(textual_log, level)(output)
        self._logger.log(_LEVELS[level], output)

    def debug(self, *args: object, **kwargs: Any) -> None:
        self._log("debug", *args, **kwargs)

    def info(self, *args: object, **kwargs: Any) -> None:
        self._log("info", *args, **kwargs)

    def warning(self, *args: object, **kwargs: Any) -> None:
        self._log("warning", *args, **kwargs)

    def error(self, *args: object, **kwargs: Any) -> None:
        self._log("error", *args, **kwargs)


_handlers: list[logging.Handler] = []


def setup_debug_logging(*, debug: bool = False, log_file: Path | None = None) -> None:
    """Set the ``kanterm`` logger level and attach a file handler when given.

    Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger("kanterm")
    for handler in _handlers:
        logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        _handlers.append(file_handler)
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    log.info("Debug logging initialized", debug=debug)


log = KantermLogger()
