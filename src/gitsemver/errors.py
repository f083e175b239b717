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

"""Error types for git-semver.

Every fatal condition is a :class:`GitSemverError` carrying an
:class:`ErrorCode`, a human-readable message and an optional hint that
tells the caller how to fix the problem.  There is no local recovery:
the CLI prints the diagnostic and exits non-zero without emitting a
partial version string.

Usage::

    from gitsemver.errors import ErrorCode, GitSemverError

    raise GitSemverError(
        ErrorCode.CONFIG_INVALID,
        'major_pattern is not a valid regular expression',
        hint='Check the escaping of special characters.',
    )
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    'ErrorCode',
    'GitSemverError',
]


class ErrorCode(Enum):
    """Stable identifiers for every fatal error git-semver can raise."""

    CONFIG_INVALID = 'GS-CONFIG-INVALID'
    NOT_A_REPOSITORY = 'GS-NOT-A-REPOSITORY'
    EMPTY_REPOSITORY = 'GS-EMPTY-REPOSITORY'
    AMBIGUOUS_BRANCH = 'GS-AMBIGUOUS-BRANCH'
    RELEASE_CONTEXT = 'GS-RELEASE-CONTEXT'
    GIT_COMMAND_FAILED = 'GS-GIT-COMMAND-FAILED'


class GitSemverError(Exception):
    """Raised when a version cannot be resolved.

    Attributes:
        code: The :class:`ErrorCode` identifying the failure class.
        message: Human-readable description of the problem.
        hint: Optional suggestion for resolving the problem.
    """

    def __init__(self, code: ErrorCode, message: str, *, hint: str = '') -> None:
        """Initialize with an error code, a message and an optional hint."""
        self.code = code
        self.message = message
        self.hint = hint
        super().__init__(f'[{code.value}] {message}')
