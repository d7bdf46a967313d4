import logging
import sys
import contextvars
from typing import Optional

# Context variable carrying the connector (log source) currently being compared
_CONNECTOR: contextvars.ContextVar[str] = contextvars.ContextVar("connector", default="-")

PACKAGE_LOGGER = "cdcorder"


class _ConnectorFilter(logging.Filter):
    """Logging filter that injects the connector id from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        try:
            record.connector = _CONNECTOR.get()
        except Exception:
            record.connector = "-"
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | connector=%(connector)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def configure_root_logger(level: str = "INFO") -> None:
    """
    Configure the root logger and the cdcorder package logger.

    The root handler stays at INFO so that other libraries do not flood
    stdout; only the ``cdcorder`` namespace follows the requested level.

    Args:
        level: Log level for cdcorder logs (DEBUG, INFO, WARNING, ERROR).

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _ConnectorFilter) for f in h.filters):
            # Already configured; only the package level may change
            h.setLevel(min(logging.INFO, _level(level)))
            package_logger.setLevel(_level(level))
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_ConnectorFilter())
    handler.setLevel(min(logging.INFO, _level(level)))
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)

    package_logger.setLevel(_level(level))


def get_logger(name: str = PACKAGE_LOGGER, level: Optional[str] = None) -> logging.Logger:
    """
    Get a module-specific logger under the cdcorder namespace.

    When ``level`` is omitted the logger inherits from the ``cdcorder``
    package logger, so a single ``configure_root_logger`` call controls
    every module.
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(_level(level))
    return logger


def push_connector(connector: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current connector id in context and return a token for later reset."""
    if not connector:
        return None
    return _CONNECTOR.set(connector)


def reset_connector(token: Optional[contextvars.Token]) -> None:
    """Reset the connector context using the provided token (if any)."""
    if token is None:
        return
    try:
        _CONNECTOR.reset(token)
    except ValueError:
        # Token created in another context; leave the current value alone
        pass
