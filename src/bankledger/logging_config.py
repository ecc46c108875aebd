"""Logging setup for the bankledger command line."""

import logging

import click

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ClickEchoHandler(logging.Handler):
    """Write records to whatever stderr click currently sees."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Send bankledger log records to stderr at the given level.

    Calling it again only changes the level.
    """
    logger = logging.getLogger("bankledger")
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not any(isinstance(h, ClickEchoHandler) for h in logger.handlers):
        handler = ClickEchoHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
