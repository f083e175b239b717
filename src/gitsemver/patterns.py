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

r"""Commit subject classification.

Subjects are matched against the compiled patterns of a
:class:`~gitsemver.config.PatternConfig`.  Wrapper patterns (reapply,
revert, merge) peel a generated prefix off a subject so that the
wrapped change is classified by its own message::

    Revert "Breaking: drop v1 API"    ->  Breaking: drop v1 API  ->  MAJOR
    Merged PR 42: Feature: dark mode  ->  Feature: dark mode     ->  MINOR
    Fix typo                          ->  Fix typo               ->  PATCH

No I/O, no logging, no side effects.
"""

from __future__ import annotations

import re

from gitsemver._types import Impact
from gitsemver.config import PatternConfig

__all__ = [
    'PatternMatcher',
    'unwrap',
]


def unwrap(pattern: re.Pattern[str], message: str) -> str | None:
    """Extract the inner message wrapped by *pattern*.

    Args:
        pattern: A compiled pattern with at most one capture group.
        message: The commit subject.

    Returns:
        The captured text when the pattern matches, the whole
        *message* when it matches but has no capture group, otherwise
        ``None``.
    """
    match = pattern.search(message)
    if match is None:
        return None
    if pattern.groups:
        return match.group(1) or ''
    return message


class PatternMatcher:
    """Classifies commit subjects with a fixed set of patterns.

    Example::

        matcher = PatternMatcher(build_pattern_config())
        assert matcher.classify('Breaking: drop v1 API') is Impact.MAJOR
        assert matcher.strip('Revert "Feature: dark mode"') == 'Feature: dark mode'
    """

    def __init__(self, patterns: PatternConfig) -> None:
        """Initialize with compiled patterns."""
        self.patterns = patterns

    def strip_revert(self, message: str) -> str:
        """Remove the reapply wrapper, then the revert wrapper."""
        for pattern in (self.patterns.reapply, self.patterns.revert):
            inner = unwrap(pattern, message)
            if inner is not None:
                message = inner
        return message

    def merge_title(self, message: str) -> str | None:
        """Return the merged change's title, or ``None`` if not a merge summary."""
        return unwrap(self.patterns.merge, message)

    def strip(self, message: str) -> str:
        """Remove reapply, revert and merge wrappers, in that order."""
        message = self.strip_revert(message)
        title = self.merge_title(message)
        return message if title is None else title

    def classify(self, message: str) -> Impact:
        """Classify an already stripped subject.

        Unrecognized messages are patches unless a patch pattern is
        configured, in which case they carry no impact.
        """
        if self.patterns.major.search(message):
            return Impact.MAJOR
        if self.patterns.minor.search(message):
            return Impact.MINOR
        if self.patterns.patch is None or self.patterns.patch.search(message):
            return Impact.PATCH
        return Impact.NONE

    def impact_of(self, subject: str) -> Impact:
        """Strip wrappers from a raw subject and classify it."""
        return self.classify(self.strip(subject))
