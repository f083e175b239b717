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

"""Pattern configuration for git-semver.

All patterns are validated and compiled exactly once, at startup, into
a frozen :class:`PatternConfig`.  Nothing downstream ever sees a raw
pattern string.

Sources, lowest precedence first:

1. Built-in defaults (:data:`DEFAULT_PATTERNS`).
2. ``[tool.git-semver]`` in ``pyproject.toml`` at the repository root.
3. ``.git-semver.toml`` at the repository root (or ``--config``).
4. Command-line flags.

Example ``.git-semver.toml``::

    tag_pattern = "^release/()$"
    major_pattern = "^(?:Breaking|BREAKING CHANGE):\\s*(.*)$"
    merge_pattern = "^Merged PR \\d+:\\s*(.*)$"

The tag pattern uses ``()`` as a placeholder for the numeric
``major.minor.patch`` grammar, so ``^v()$`` matches ``v1.4.2``.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from gitsemver.errors import ErrorCode, GitSemverError
from gitsemver.logging import get_logger

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = get_logger(__name__)

__all__ = [
    'CONFIG_FILE_NAME',
    'DEFAULT_PATTERNS',
    'PATTERN_KEYS',
    'TAG_PLACEHOLDER',
    'TRIPLE_GRAMMAR',
    'PatternConfig',
    'build_pattern_config',
    'expand_tag_pattern',
    'load_config',
]

CONFIG_FILE_NAME = '.git-semver.toml'
_PYPROJECT_TABLE = 'git-semver'

TAG_PLACEHOLDER = '()'
TRIPLE_GRAMMAR = r'([0-9]+)\.([0-9]+)\.([0-9]+)'

# ``None`` means "not configured": an unset patch pattern classifies
# every remaining commit as a patch.
DEFAULT_PATTERNS: dict[str, str | None] = {
    'tag_pattern': '^v()$',
    'major_pattern': r'^Breaking:\s*(.*)$',
    'minor_pattern': r'^Feature:\s*(.*)$',
    'patch_pattern': None,
    'merge_pattern': r'^Merged PR \d+:\s*(.*)$',
    'revert_pattern': r'^Revert "(.*)"$',
    'reapply_pattern': r'^Reapply "(.*)"$',
}

PATTERN_KEYS: frozenset[str] = frozenset(DEFAULT_PATTERNS)


@dataclass(frozen=True)
class PatternConfig:
    """Compiled and validated patterns for one resolution run.

    Attributes:
        tag: Version tag pattern with exactly three capture groups
            (major, minor, patch).
        major: Subject pattern for breaking changes.
        minor: Subject pattern for features.
        patch: Optional subject pattern for patches.  When ``None``
            every commit that is neither major nor minor is a patch.
        merge: Merge-summary pattern; its capture group is the merged
            change's title.
        revert: Revert-wrapper pattern; its capture group is the
            reverted subject.
        reapply: Reapply-wrapper pattern; its capture group is the
            reapplied subject.
    """

    tag: re.Pattern[str]
    major: re.Pattern[str]
    minor: re.Pattern[str]
    patch: re.Pattern[str] | None
    merge: re.Pattern[str]
    revert: re.Pattern[str]
    reapply: re.Pattern[str]


def expand_tag_pattern(pattern: str) -> str:
    """Replace every ``()`` placeholder with the numeric triple grammar.

    >>> expand_tag_pattern('^v()$')
    '^v([0-9]+)\\\\.([0-9]+)\\\\.([0-9]+)$'
    """
    return pattern.replace(TAG_PLACEHOLDER, TRIPLE_GRAMMAR)


def _compile(key: str, pattern: str) -> re.Pattern[str]:
    """Compile *pattern*, converting syntax errors into config errors."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise GitSemverError(
            ErrorCode.CONFIG_INVALID,
            f'{key} is not a valid regular expression: {pattern!r} ({exc})',
            hint='Patterns use Python regular expression syntax.',
        ) from exc


def _compile_tag(pattern: str) -> re.Pattern[str]:
    compiled = _compile('tag_pattern', expand_tag_pattern(pattern))
    if compiled.groups != 3:
        raise GitSemverError(
            ErrorCode.CONFIG_INVALID,
            f'tag_pattern must capture exactly three version components, got {compiled.groups}: {pattern!r}',
            hint=f"Mark the version position with a single '{TAG_PLACEHOLDER}' placeholder, e.g. '^v()$'.",
        )
    return compiled


def _compile_message(key: str, pattern: str) -> re.Pattern[str]:
    compiled = _compile(key, pattern)
    if compiled.groups > 1:
        raise GitSemverError(
            ErrorCode.CONFIG_INVALID,
            f'{key} may have at most one capture group, got {compiled.groups}: {pattern!r}',
            hint='Use non-capturing groups (?:...) for alternatives.',
        )
    return compiled


def build_pattern_config(overrides: Mapping[str, str | None] | None = None) -> PatternConfig:
    """Merge *overrides* into the defaults and compile the result.

    Args:
        overrides: Raw pattern strings keyed by ``*_pattern`` name.
            ``None`` values leave the default in place.

    Returns:
        A validated :class:`PatternConfig`.

    Raises:
        GitSemverError: With :attr:`ErrorCode.CONFIG_INVALID` when a key
            is unknown or a pattern is invalid.
    """
    merged = dict(DEFAULT_PATTERNS)
    for key, value in (overrides or {}).items():
        if key not in PATTERN_KEYS:
            raise GitSemverError(
                ErrorCode.CONFIG_INVALID,
                f'Unknown key {key!r}.',
                hint=f'Valid keys: {", ".join(sorted(PATTERN_KEYS))}.',
            )
        if value is not None:
            merged[key] = value

    patch = merged['patch_pattern']
    return PatternConfig(
        tag=_compile_tag(merged['tag_pattern'] or ''),
        major=_compile_message('major_pattern', merged['major_pattern'] or ''),
        minor=_compile_message('minor_pattern', merged['minor_pattern'] or ''),
        patch=_compile_message('patch_pattern', patch) if patch is not None else None,
        merge=_compile_message('merge_pattern', merged['merge_pattern'] or ''),
        revert=_compile_message('revert_pattern', merged['revert_pattern'] or ''),
        reapply=_compile_message('reapply_pattern', merged['reapply_pattern'] or ''),
    )


def _parse_section(section: object, source: str) -> dict[str, str]:
    """Validate one table of pattern settings."""
    if not isinstance(section, dict):
        raise GitSemverError(
            ErrorCode.CONFIG_INVALID,
            f'{source}: git-semver settings must be a table.',
        )
    unknown = sorted(set(section) - PATTERN_KEYS)
    if unknown:
        raise GitSemverError(
            ErrorCode.CONFIG_INVALID,
            f'{source}: Unknown key(s) {", ".join(unknown)}.',
            hint=f'Valid keys: {", ".join(sorted(PATTERN_KEYS))}.',
        )
    result: dict[str, str] = {}
    for key, value in section.items():
        if not isinstance(value, str):
            raise GitSemverError(
                ErrorCode.CONFIG_INVALID,
                f'{source}: {key} must be a string, got {type(value).__name__}.',
            )
        result[key] = value
    return result


def _read_toml(path: Path) -> dict[str, object]:
    try:
        with path.open('rb') as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise GitSemverError(
            ErrorCode.CONFIG_INVALID,
            f'{path} is not valid TOML: {exc}',
        ) from exc


def load_config(root: Path, config_file: Path | None = None) -> dict[str, str]:
    """Read pattern settings from the repository's configuration files.

    Args:
        root: The repository work-tree root.
        config_file: Explicit settings file; replaces the
            ``.git-semver.toml`` lookup and must exist.

    Returns:
        Raw pattern strings keyed by ``*_pattern`` name.  Empty when
        no configuration file is present.
    """
    settings: dict[str, str] = {}

    pyproject = root / 'pyproject.toml'
    if pyproject.is_file():
        tool = _read_toml(pyproject).get('tool', {})
        if isinstance(tool, dict) and _PYPROJECT_TABLE in tool:
            settings.update(_parse_section(tool[_PYPROJECT_TABLE], str(pyproject)))
            logger.debug('config_loaded', path=str(pyproject))

    if config_file is not None:
        if not config_file.is_file():
            raise GitSemverError(
                ErrorCode.CONFIG_INVALID,
                f'Configuration file not found: {config_file}',
            )
        dedicated: Path | None = config_file
    else:
        candidate = root / CONFIG_FILE_NAME
        dedicated = candidate if candidate.is_file() else None

    if dedicated is not None:
        settings.update(_parse_section(_read_toml(dedicated), str(dedicated)))
        logger.debug('config_loaded', path=str(dedicated))

    return settings
