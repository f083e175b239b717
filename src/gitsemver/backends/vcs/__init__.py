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

"""Version-control backend protocol.

The resolution engine never runs commands itself.  It asks a
:class:`VCSBackend` for tags, first-parent paths, ancestor sets and
commit metadata, so the engine can be exercised against an in-memory
commit graph in tests and against ``git`` in production.

Built-in implementations:

- :class:`~gitsemver.backends.vcs.git.GitCLIBackend`: shells out to
  the ``git`` executable.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from gitsemver._types import CommitInfo

__all__ = [
    'VCSBackend',
]


@runtime_checkable
class VCSBackend(Protocol):
    """Read-only view of a repository's commit graph and work tree."""

    def head(self) -> str:
        """Return the id of the current commit.

        Raises:
            GitSemverError: With ``EMPTY_REPOSITORY`` when there are
                no commits.
        """
        ...

    def describe_nearest_tag(self, commit: str) -> str | None:
        """Return the nearest ``?*.?*.?*``-shaped tag on *commit*'s first-parent ancestry.

        Returns ``None`` when no such tag exists.
        """
        ...

    def tags_at(self, commit: str) -> list[str]:
        """Return every tag name pointing at *commit*, annotated tags included."""
        ...

    def resolve(self, ref: str) -> str:
        """Return the commit id a tag or other ref points at."""
        ...

    def first_parent_root(self, commit: str) -> str:
        """Return the root commit reached by following first parents from *commit*."""
        ...

    def first_parent_path(self, exclusive: str, inclusive: str) -> list[str]:
        """Return first-parent commits after *exclusive* up to *inclusive*, oldest first."""
        ...

    def ancestors_excluding(self, include: Sequence[str], exclude: str | None) -> list[str]:
        """Return commits reachable from any of *include* but not from *exclude*.

        Reachability follows every parent.  The result holds each
        commit once, newest first, and never contains *exclude*.
        A ``None`` *exclude* yields the full ancestry of *include*.
        """
        ...

    def commit(self, sha: str) -> CommitInfo:
        """Return metadata for a single commit."""
        ...

    def is_clean(self) -> bool:
        """Return ``True`` if the working tree has no uncommitted changes."""
        ...

    def current_branch(self) -> str | None:
        """Return the checked-out branch name, or ``None`` on a detached HEAD."""
        ...

    def branches_at(self, commit: str) -> list[str]:
        """Return the names of local branches whose tip is *commit*."""
        ...
