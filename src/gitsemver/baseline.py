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

"""Baseline discovery: the most recent version tag on the mainline.

The walk follows first parents only.  ``git describe`` names just one
tag per commit and may pick a tag that looks like a version but does
not match the configured tag pattern (``nightly-1.2.3`` when the pattern
is ``^v()$``), so every tag on the described commit is checked.  When
none of them match, the search resumes from that commit's first parent.
When the walk runs out of history the first-parent root becomes the
baseline at version ``0.1.0``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gitsemver._types import VersionTriple
from gitsemver.backends.vcs import VCSBackend
from gitsemver.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    'DEFAULT_VERSION',
    'Baseline',
    'resolve_baseline',
]

DEFAULT_VERSION = VersionTriple(0, 1, 0)


@dataclass(frozen=True)
class Baseline:
    """Starting point of a version resolution.

    Attributes:
        commit: The tagged commit, or the first-parent root.
        version: Version parsed from the tag, or ``0.1.0``.
        tag: The matching tag name; ``None`` for the root fallback.
    """

    commit: str
    version: VersionTriple
    tag: str | None = None


def _best_version_tag(names: list[str], tag_pattern: re.Pattern[str]) -> tuple[VersionTriple, str] | None:
    """Return the highest version among *names* matching *tag_pattern*."""
    best: tuple[VersionTriple, str] | None = None
    for name in names:
        match = tag_pattern.search(name)
        if match is None:
            continue
        major, minor, patch = (int(group) for group in match.groups())
        version = VersionTriple(major, minor, patch)
        if best is None or _key(version) > _key(best[0]):
            best = (version, name)
    return best


def _key(version: VersionTriple) -> tuple[int, int, int]:
    return (version.major, version.minor, version.patch)


def resolve_baseline(backend: VCSBackend, head: str, tag_pattern: re.Pattern[str]) -> Baseline:
    """Find the baseline commit and version for *head*.

    Args:
        backend: Repository access.
        head: The commit being versioned.
        tag_pattern: Compiled tag pattern with three capture groups.

    Returns:
        The :class:`Baseline` for *head*.  When one commit carries
        several matching tags the highest version wins.
    """
    commit = head
    while True:
        described = backend.describe_nearest_tag(commit)
        if described is None:
            break
        tagged = backend.resolve(described)
        names = [described, *(name for name in backend.tags_at(tagged) if name != described)]
        found = _best_version_tag(names, tag_pattern)
        if found is not None:
            version, tag = found
            logger.debug('version_tag_found', tag=tag, commit=tagged)
            return Baseline(tagged, version, tag)

        logger.debug('version_tag_skipped', tags=names)
        first_parent = backend.commit(tagged).first_parent
        if first_parent is None:
            break
        commit = first_parent

    root = backend.first_parent_root(head)
    logger.debug('version_tag_not_found', root=root)
    return Baseline(root, DEFAULT_VERSION)
