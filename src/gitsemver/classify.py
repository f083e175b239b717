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

"""Per-step change classification.

A step is one mainline commit.  Its impact is the strongest impact of
every commit it brings in: for a merge that is the whole merged branch,
not only the merge commit, so merging two ``Breaking:`` commits under a
generic ``Merged PR 7: Sync`` summary is still a major change.

The commit set of a step is "ancestors of *commit* minus ancestors of
*previous*" over the full parent relation.  Octopus merges contribute
every side parent's ancestry; a topic branch merged a second time only
contributes the commits added since its first merge.
"""

from __future__ import annotations

from gitsemver._types import Impact, max_impact
from gitsemver.backends.vcs import VCSBackend
from gitsemver.logging import get_logger
from gitsemver.patterns import PatternMatcher

logger = get_logger(__name__)

__all__ = [
    'classify_step',
]


def classify_step(
    backend: VCSBackend,
    matcher: PatternMatcher,
    commit: str,
    previous: str,
) -> Impact:
    """Return the strongest impact among commits introduced by *commit*.

    Args:
        backend: Repository access.
        matcher: Subject classifier.
        commit: The mainline commit of this step.
        previous: The mainline commit processed just before.

    Returns:
        The step impact; :attr:`Impact.NONE` if the step introduces
        nothing.
    """
    impact = Impact.NONE
    seen: set[str] = set()
    for sha in backend.ancestors_excluding([commit], previous):
        if sha in seen or sha == previous:
            continue
        seen.add(sha)
        subject = backend.commit(sha).subject
        commit_impact = matcher.impact_of(subject)
        logger.debug('commit_analyzed', commit=sha, subject=subject, impact=commit_impact.name.lower())
        impact = max_impact(impact, commit_impact)
        if impact is Impact.MAJOR:
            break
    return impact
