"""Logging setup for network runs.

structlog and stdlib loggers share one handler, so pipeline events
(``graph_built``, ``communities_split``, ...) and messages from
third-party libraries render the same way: JSON lines for batch runs,
coloured console output for interactive use.

Every event logged inside ``run_context`` carries the run's input file,
input hash and config path, so the log lines of one network run can be
told apart when several runs share a log sink.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

import structlog


def configure_logging(
    json_output: bool = True,
    log_level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Configure unified logging for both structlog and stdlib.

    Args:
        json_output: If ``True``, render logs as JSON lines. If ``False``,
            use structlog's coloured console renderer.
        log_level: Root log level (``"DEBUG"``, ``"INFO"``, ``"WARNING"``, etc.).
        stream: Destination of log lines. Defaults to stderr, which keeps
            stdout free for the cluster summary.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper()))


@contextmanager
def run_context(
    input_path: Path,
    config_path: Path,
    input_hash: str | None = None,
) -> Iterator[None]:
    """Bind the identity of one network run to every event logged inside.

    The fields are removed again on exit, even when the run fails.
    """
    fields = {"input_file": str(input_path), "config_path": str(config_path)}
    if input_hash is not None:
        fields["input_hash"] = input_hash
    with structlog.contextvars.bound_contextvars(**fields):
        yield
