"""structlog configuration shared by the sandbox and the test suite."""

import structlog

from txsandbox.core.config import Settings, settings as default_settings


def configure_logging(config: Settings | None = None) -> None:
    """
    Configure structlog with the sandbox processor chain.

    Console output when ``debug`` is set, JSON lines otherwise. Events below
    ``log_level`` are dropped by the filtering bound logger.
    """
    config = config or default_settings

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer() if config.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(config.log_level_number),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
