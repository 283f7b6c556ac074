"""Logging utilities for id3py.

id3py logs through loguru and is silent by default: the package calls
``logger.disable("id3py")`` on import. Use :func:`enable_logging` to attach a
stderr handler that shows id3py records only.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    that records are not printed twice once ``enable_logging()`` adds its own
    handler. If handler 0 was already removed the ``ValueError`` is suppressed.
"""

from __future__ import annotations

import contextlib
import sys
from typing import TYPE_CHECKING, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["short", "full"]

LOG_LEVELS: Final[tuple[str, ...]] = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

_SHORT_FORMAT: Final[str] = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{function}</cyan> - <level>{message}</level>"
)
_FULL_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class LoggingHandle:
    """Handle for an id3py log handler.

    Removing the handler (``disable()`` or leaving the ``with`` block) also
    disables the id3py logger again.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     tree = train(records, catalog)
    """

    def __init__(self, handler_id: int) -> None:
        """Initialize the handle.

        Args:
            handler_id (int): The loguru handler ID returned by ``logger.add``.
        """
        self.handler_id: int | None = handler_id

    def disable(self) -> None:
        """Remove the handler and disable id3py logging. Idempotent."""
        if self.handler_id is None:
            return
        with contextlib.suppress(ValueError):
            logger.remove(self.handler_id)
        self.handler_id = None
        logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()


def enable_logging(*, level: LogLevel = "INFO", log_format: LogFormat = "short", sink=None) -> LoggingHandle:
    """Enable id3py logging.

    Args:
        level (LogLevel): Minimum level to display. ``"DEBUG"`` shows split
            choices, unresolved leaves and every pruning step.
        log_format (LogFormat): ``"short"`` shows the function name only,
            ``"full"`` adds module and line number.
        sink: Any loguru sink. Defaults to ``sys.stderr``.

    Returns:
        LoggingHandle: Handle used to remove the handler again.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr if sink is None else sink,
        level=level,
        filter=_is_id3py_record,
        format=_SHORT_FORMAT if log_format == "short" else _FULL_FORMAT,
    )
    return LoggingHandle(handler_id)


def _is_id3py_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
