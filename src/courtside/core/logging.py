"""
structlog setup for courtside.

Stdout belongs to the CLI's JSON payloads, so log lines go to stderr, one
JSON object each. Adapters and the aggregator log event keys
(``provider_fetch_failed``, ``feed_partial_failure``, ``fallback_substituted``)
with the league and provider bound as fields.

LOG_LEVEL wins when set; otherwise production logs at INFO and everything
else at DEBUG.
"""

from __future__ import annotations

import logging
import sys

import structlog

from courtside.core.config import Settings, settings

_PROCESSORS = [
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.add_log_level,
    structlog.processors.EventRenamer("message"),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


def resolve_log_level(cfg: Settings) -> int:
    if cfg.log_level:
        name = cfg.log_level.strip().upper()
    elif cfg.environment.lower() == "production":
        name = "INFO"
    else:
        name = "DEBUG"
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(cfg: Settings = settings) -> None:
    level = resolve_log_level(cfg)
    structlog.configure(
        processors=_PROCESSORS,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


configure_logging()

logger = structlog.get_logger("courtside").bind(
    service="courtside",
    environment=settings.environment,
)
