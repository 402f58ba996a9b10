"""structlog setup for the postctl CLI.

Library modules log through plain ``logging.getLogger(__name__)``; this
module routes those records through structlog so they come out either as
colored console lines or, with ``--log-json``, as one JSON object per line.
Both go to stderr, leaving stdout to command output.

With ``--verbose`` each record also names the thread that emitted it, which
tells pool workers apart when posts are parsed with ``--workers``.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Install the single stderr handler and set postctl's log level.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        verbose: Log postctl at DEBUG and add thread names. Otherwise only
            WARNING and above are shown.
        log_json: Render JSON lines instead of console lines.
    """
    post_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if verbose:
        shared_processors.append(CallsiteParameterAdder([CallsiteParameter.THREAD_NAME]))

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    # Third-party loggers stay at WARNING through the root.
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("postctl").setLevel(post_level)
