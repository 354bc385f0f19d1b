"""structlog setup for the zapper API and dry-run tooling."""

import logging

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog with console rendering.

    Args:
        verbose: Emit debug events (sizing, allowance checks) as well as info
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
