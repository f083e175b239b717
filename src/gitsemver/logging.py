# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Structured logging for git-semver.

Everything the resolver reports (tags found or skipped, mainline steps
classified, version increments, expanded merges) is a structlog event
with key/value context, routed through the standard library root
logger onto stderr.  Stdout is reserved for the version string and the
changelog lines, so ``VERSION=$(git semver -v)`` still captures only
the version.

``--verbose`` shows the per-commit debug trail and ``--json-log``
switches the renderer to one JSON object per line for CI log parsers::

    $ git semver -v -b -a -t
    2026-10-18T12:45:01Z [debug    ] version_tag_found   [gitsemver.baseline] commit=1a2b3c tag=v1.4.2
    2026-10-18T12:45:01Z [debug    ] version_incremented [gitsemver.version] impact=minor version=1.5.0
    1.5.0-beta.1

Usage::

    from gitsemver.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
    log.debug('version_incremented', impact='patch', version='1.4.3')
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Route git-semver's events to stderr.

    The CLI calls this once per run with ``quiet=not verbose``; tests
    call it at import time with ``quiet=True``.  Calling it again
    replaces the previous handlers.

    Args:
        verbose: Show the per-tag, per-commit and per-step debug events.
        quiet: Only warnings and errors.  Ignored when *verbose* is set.
        json_log: One JSON object per event instead of console lines.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    # stderr only; stdout belongs to the version string.
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    shared_processors: list[structlog.types.Processor] = [  # type: ignore[assignment]
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'gitsemver') -> structlog.stdlib.BoundLogger:
    """Return the logger for a git-semver module (pass ``__name__``)."""
    return structlog.get_logger(name)


__all__ = [
    'configure_logging',
    'get_logger',
]
