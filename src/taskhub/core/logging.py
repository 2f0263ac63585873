"""structlog setup for the TaskHub API.

Every log line carries the request's correlation ID and, once the bearer
token is verified, the acting user, tenant and role. Services only pass
event-specific fields.
"""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


def _renderer(debug: bool) -> structlog.typing.Processor:
    if debug:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def setup_logging(debug: bool = False) -> None:
    """Route stdlib and structlog output to stdout.

    Debug mode renders colored console lines at DEBUG; otherwise one JSON
    object per line at INFO, ready for a log shipper.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(debug),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None, method: str, path: str) -> None:
    """Tag the rest of this request's log lines with its id and route."""
    bind_contextvars(method=method, path=path)
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_principal_context(user_id: UUID, tenant_id: UUID | None, role: str) -> None:
    """Tag log lines with the caller. tenant_id is None for super admins."""
    bind_contextvars(
        user_id=str(user_id),
        tenant_id=str(tenant_id) if tenant_id else None,
        role=role,
    )


def clear_request_context() -> None:
    clear_contextvars()
