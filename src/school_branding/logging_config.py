"""Structured logging setup.

Production emits one JSON object per line; development gets colored
console output and testing plain console output. Call configure_logging()
once from the FastAPI lifespan. Per-request context (the detected school)
is carried in structlog contextvars, see bind_school().
"""

import logging
import re
import sys

import structlog

SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"password", "secret", "token", "authorization", "cookie"}
)

# Event keys whose values are URLs that may carry client query strings.
URL_KEYS: frozenset[str] = frozenset({"url", "path"})

QUIET_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}

REDACTED = "***REDACTED***"

_SENSITIVE_PARAMS = "|".join(sorted(SENSITIVE_KEYS))
_SENSITIVE_PARAM_RE = re.compile(
    rf"([?&](?:{_SENSITIVE_PARAMS})=)[^&#]*", re.IGNORECASE
)


def redact_url(url: str) -> str:
    """Mask sensitive query values: ``?token=abc`` becomes ``?token=***``."""
    return _SENSITIVE_PARAM_RE.sub(r"\1***", url)


def _redact_sensitive(
    logger: logging.Logger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    for key, value in event_dict.items():
        lowered = key.lower()
        if lowered in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        elif lowered in URL_KEYS and isinstance(value, str):
            event_dict[key] = redact_url(value)
    return event_dict


def _select_renderer(environment: str) -> structlog.types.Processor:
    if environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=environment != "testing")


def configure_logging(
    environment: str = "development",
    log_level: str = "INFO",
) -> None:
    """Configure the structlog processor chain and the stdlib root logger.

    Args:
        environment: 'production' for JSON, 'testing' for plain console,
            anything else for colored console output.
        log_level: Python log level name (DEBUG, INFO, WARNING, etc.).
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_sensitive,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _select_renderer(environment),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


def bind_school(tenant_id: str) -> None:
    """Attach the detected school to every log event of the current request.

    Clears previously bound context first; one request, one school.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(tenant_id=tenant_id)
