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

"""Command-line entry point: ``git semver [options]``.

Stdout carries the version string on its own line, followed by one
line per changelog entry when ``--change-log`` is given.  Diagnostics
and logs go to stderr.

Exit codes:
    0  Version resolved.
    1  Resolution failed (see the diagnostic on stderr).
    2  Invalid command-line arguments.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from gitsemver import __version__
from gitsemver.backends.vcs.git import GitCLIBackend
from gitsemver.config import build_pattern_config, load_config
from gitsemver.errors import GitSemverError
from gitsemver.logging import configure_logging, get_logger
from gitsemver.resolver import ResolveOptions, resolve

logger = get_logger(__name__)

__all__ = [
    'build_parser',
    'main',
]

_PATTERN_FLAGS: tuple[tuple[str, str], ...] = (
    ('--tag-pattern', 'pattern for version tag matching; "()" marks the major.minor.patch position.'),
    ('--major-pattern', 'commit message pattern for major changes.'),
    ('--minor-pattern', 'commit message pattern for minor changes.'),
    ('--patch-pattern', 'commit message pattern for patches; unmatched commits then have no impact.'),
    ('--merge-pattern', 'merge commit message pattern; its capture group is the merged title.'),
    ('--revert-pattern', 'revert commit message pattern; its capture group is the reverted subject.'),
    ('--reapply-pattern', 'reapply commit message pattern; its capture group is the reapplied subject.'),
)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``git semver``."""
    parser = argparse.ArgumentParser(
        prog='git semver',
        description='Derive a semantic version from version tags and commit messages.',
    )
    parser.add_argument('-b', '--no-branch', action='store_true', help='disables branch build metadata.')
    parser.add_argument('-a', '--no-hash', action='store_true', help='disables commit hash build metadata.')
    parser.add_argument('-t', '--no-timestamp', action='store_true', help='disables timestamp build metadata.')
    parser.add_argument('-l', '--no-local', action='store_true', help='disables the .local uncommitted changes marker.')
    parser.add_argument('-p', '--no-pre-release', action='store_true', help='disables pre-release version generation.')
    parser.add_argument(
        '-r',
        '--release',
        action='store_true',
        help='emits a bare release version; fails on uncommitted changes.',
    )
    parser.add_argument('-c', '--change-log', action='store_true', help='prints changelog lines after the version.')
    parser.add_argument(
        '-s',
        '--single-step',
        action='store_true',
        help='increments the version once using the most relevant change.',
    )
    parser.add_argument('--branch', metavar='NAME', help='branch name to use instead of asking git.')
    for flag, help_text in _PATTERN_FLAGS:
        parser.add_argument(flag, metavar='PATTERN', help=help_text)
    parser.add_argument('--config', type=Path, metavar='FILE', help='settings file (default: .git-semver.toml).')
    parser.add_argument('-C', dest='directory', type=Path, metavar='PATH', help='run as if started in PATH.')
    parser.add_argument('-v', '--verbose', action='store_true', help='diagnostic message logging.')
    parser.add_argument('--json-log', action='store_true', help='logs as JSON lines.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def _pattern_overrides(args: argparse.Namespace) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for flag, _ in _PATTERN_FLAGS:
        key = flag.lstrip('-').replace('-', '_')
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    return overrides


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``git semver`` and return the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=not args.verbose, json_log=args.json_log)
    err = Console(stderr=True)

    try:
        backend = GitCLIBackend(args.directory)
        settings = load_config(backend.toplevel(), args.config)
        settings.update(_pattern_overrides(args))
        patterns = build_pattern_config(settings)
        options = ResolveOptions(
            branch=not args.no_branch,
            hash=not args.no_hash,
            timestamp=not args.no_timestamp,
            local=not args.no_local,
            pre_release=not args.no_pre_release,
            release=args.release,
            changelog=args.change_log,
            single_step=args.single_step,
            branch_override=args.branch,
        )
        result = resolve(backend, patterns, options)
    except GitSemverError as exc:
        logger.debug('resolution_failed', code=exc.code.value)
        err.print(f'[bold red]error[/]: {escape(str(exc))}', highlight=False, soft_wrap=True)
        if exc.hint:
            err.print(f'[dim]hint[/]: {escape(exc.hint)}', highlight=False, soft_wrap=True)
        return 1

    lines = [result.semver, *(entry.format() for entry in result.changelog)]
    sys.stdout.write('\n'.join(lines) + '\n')
    return 0
