"""Route nativeprobe's diagnostic logging to stderr through structlog.

Probe results own stdout; log records never go there. ``--log-json``
switches the stderr renderer from console text to JSON lines, and
``--verbose`` lowers the ``nativeprobe`` logger to DEBUG so each probe
step is traced.
"""

from __future__ import annotations

import logging
import logging.config
import sys
from typing import Any

import structlog

# Loggers that stay at WARNING even under --verbose.
QUIET_LIBRARIES = ("sqlalchemy",)


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler on the root logger, replacing any previous one."""
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    loggers: dict[str, Any] = {
        "nativeprobe": {"level": "DEBUG" if verbose else "WARNING"},
    }
    loggers.update({name: {"level": "WARNING"} for name in QUIET_LIBRARIES})

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "probe": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _stderr_renderer(log_json),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stderr,
                    "formatter": "probe",
                },
            },
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": loggers,
        }
    )
