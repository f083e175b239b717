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

"""Changelog extraction.

Produces one line per mainline commit between two points::

    Fix crash on empty input (Carol)
    Add feature X (Alice, Bob)          <- "Merged PR 12: Add feature X"
    Tweak logging (Dave)                <- from an unrecognized merge
    Bump deps (Erin)                    <- from the same merge

How each mainline commit ``c`` is turned into entries:

- **Resolved merge** (subject matches the merge pattern): one entry
  titled with the captured text, credited to the authors of every
  commit the merge brought in.
- **Unresolved merge** (two or more parents, subject does not match):
  no entry for ``c`` itself.  Each side branch is expanded in place,
  from the side parent back to ``c``'s first parent, with the same
  rules.
- **Ordinary commit**: one entry with its own subject and author.

Side branches are expanded with an explicit stack of lazy iterators,
so arbitrarily deep merge-of-merge chains never hit the interpreter's
recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from itertools import chain

from gitsemver.backends.vcs import VCSBackend
from gitsemver.logging import get_logger
from gitsemver.patterns import PatternMatcher

logger = get_logger(__name__)

__all__ = [
    'ChangelogEntry',
    'extract_changelog',
    'ordered_authors',
]


@dataclass(frozen=True)
class ChangelogEntry:
    """One changelog line.

    Attributes:
        message: Subject with reapply/revert/merge wrappers removed.
        authors: Distinct author names in first-seen order.
    """

    message: str
    authors: tuple[str, ...]

    def format(self) -> str:
        """Render as ``message (author, author)``."""
        return f'{self.message} ({", ".join(self.authors)})'

    def __str__(self) -> str:
        """Same as :meth:`format`."""
        return self.format()


def ordered_authors(names: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate *names* by exact match, keeping first occurrences in order.

    >>> ordered_authors(['Alice', 'Bob', 'Alice', 'alice'])
    ('Alice', 'Bob', 'alice')
    """
    return tuple(dict.fromkeys(names))


def _merged_authors(backend: VCSBackend, parents: tuple[str, ...]) -> tuple[str, ...]:
    """Authors of every commit a merge introduced, in encounter order."""
    introduced = backend.ancestors_excluding(list(parents[1:]), parents[0])
    return ordered_authors(backend.commit(sha).author for sha in introduced)


def _side_branches(backend: VCSBackend, parents: tuple[str, ...]) -> Iterator[str]:
    """Lazily walk each side parent's mainline back to the first parent."""
    first_parent = parents[0]
    return chain.from_iterable(backend.first_parent_path(first_parent, side) for side in parents[1:])


def extract_changelog(
    backend: VCSBackend,
    matcher: PatternMatcher,
    start: str,
    boundary: str,
) -> list[ChangelogEntry]:
    """Build changelog entries for the mainline ``boundary..start``.

    Args:
        backend: Repository access.
        matcher: Supplies the reapply, revert and merge patterns.
        start: Newest commit to include.
        boundary: Exclusive lower bound (normally the baseline commit).

    Returns:
        Entries in mainline order, oldest first.
    """
    entries: list[ChangelogEntry] = []
    stack: list[Iterator[str]] = [iter(backend.first_parent_path(boundary, start))]

    while stack:
        sha = next(stack[-1], None)
        if sha is None:
            stack.pop()
            continue

        commit = backend.commit(sha)
        message = matcher.strip_revert(commit.subject)
        title = matcher.merge_title(message)

        if title is not None:
            authors: tuple[str, ...] = ()
            if commit.is_merge:
                authors = _merged_authors(backend, commit.parents)
            # A merge of already-merged history introduces no commits.
            if not authors:
                authors = (commit.author,)
            entries.append(ChangelogEntry(title, authors))
        elif commit.is_merge:
            logger.debug('unresolved_merge_expanded', commit=sha, side_parents=len(commit.parents) - 1)
            stack.append(_side_branches(backend, commit.parents))
        else:
            entries.append(ChangelogEntry(message, (commit.author,)))

    return entries
