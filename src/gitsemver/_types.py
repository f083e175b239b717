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

"""Shared leaf-level types used across git-semver.

This module must have **zero** imports from other ``gitsemver``
modules to avoid circular-import chains.  Everything here is a frozen
dataclass or enum: no I/O, no logging, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    'CommitInfo',
    'Impact',
    'VersionTriple',
    'max_impact',
]


class Impact(IntEnum):
    """Impact of a commit (or a set of commits) on the version number.

    Ordered so that the strongest impact compares greatest.  Combining
    impacts for the same history step always takes the maximum.
    """

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3


def max_impact(a: Impact, b: Impact) -> Impact:
    """Return the stronger of two impacts.

    >>> max_impact(Impact.MINOR, Impact.PATCH)
    <Impact.MINOR: 2>
    >>> max_impact(Impact.NONE, Impact.MAJOR)
    <Impact.MAJOR: 3>
    """
    return a if a >= b else b


@dataclass(frozen=True)
class VersionTriple:
    """A ``major.minor.patch`` version number.

    Attributes:
        major: Major component (breaking changes).
        minor: Minor component (features).
        patch: Patch component (everything else).
    """

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self) -> None:
        """Reject negative components."""
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            msg = f'Version components must be non-negative, got {self.major}.{self.minor}.{self.patch}'
            raise ValueError(msg)

    def __str__(self) -> str:
        """Render as ``major.minor.patch``."""
        return f'{self.major}.{self.minor}.{self.patch}'


@dataclass(frozen=True)
class CommitInfo:
    """Read-only view of a single commit.

    Attributes:
        sha: The full commit id.
        subject: The first line of the commit message.
        author: The author name.
        parents: Parent commit ids; the first one is the mainline parent.
    """

    sha: str
    subject: str
    author: str
    parents: tuple[str, ...] = ()

    @property
    def first_parent(self) -> str | None:
        """The mainline parent, or ``None`` for a root commit."""
        return self.parents[0] if self.parents else None

    @property
    def is_merge(self) -> bool:
        """``True`` if the commit has two or more parents."""
        return len(self.parents) >= 2
