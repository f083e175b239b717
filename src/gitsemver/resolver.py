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

"""Version resolution pipeline.

Wires the engine together for one run::

    resolve_baseline ─► linearize ─► classify_step (per step)
                                          │
                                          ▼
                       compose  ◄───  accumulate
                          │
    extract_changelog ────┴─► Resolution

Usage::

    from gitsemver.backends.vcs.git import GitCLIBackend
    from gitsemver.config import build_pattern_config
    from gitsemver.resolver import ResolveOptions, resolve

    result = resolve(GitCLIBackend(), build_pattern_config(), ResolveOptions(changelog=True))
    print(result.semver)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from gitsemver._types import Impact, VersionTriple
from gitsemver.backends.vcs import VCSBackend
from gitsemver.baseline import Baseline, resolve_baseline
from gitsemver.changelog import ChangelogEntry, extract_changelog
from gitsemver.classify import classify_step
from gitsemver.compose import ComposeOptions, compose
from gitsemver.config import PatternConfig
from gitsemver.errors import ErrorCode, GitSemverError
from gitsemver.history import linearize, steps
from gitsemver.logging import get_logger
from gitsemver.patterns import PatternMatcher
from gitsemver.version import accumulate, accumulate_single_step

logger = get_logger(__name__)

__all__ = [
    'ResolveOptions',
    'Resolution',
    'resolve',
    'resolve_branch',
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ResolveOptions:
    """What to resolve and which version string parts to emit.

    Attributes:
        branch: Emit ``Branch.`` build metadata.
        hash: Emit ``Hash.`` build metadata.
        timestamp: Emit ``Timestamp.`` build metadata.
        local: Mark dirty working trees with ``.local``.
        pre_release: Emit the ``beta.N`` pre-release segment.
        release: Produce a bare release version.  Suppresses the
            pre-release segment and all build metadata, and requires a
            clean working tree.
        changelog: Extract changelog entries.
        single_step: Bump once by the strongest impact in the range
            instead of once per mainline step.
        branch_override: Branch name to use instead of asking git.
        clock: Source of the build timestamp.
    """

    branch: bool = True
    hash: bool = True
    timestamp: bool = True
    local: bool = True
    pre_release: bool = True
    release: bool = False
    changelog: bool = False
    single_step: bool = False
    branch_override: str | None = None
    clock: Callable[[], datetime] = field(default=_utcnow, compare=False)


@dataclass(frozen=True)
class Resolution:
    """Outcome of one :func:`resolve` run.

    Attributes:
        baseline: Where the walk started.
        history: Mainline commits from the baseline to ``HEAD``, oldest
            first; element 0 is the baseline commit.
        impacts: One impact per step after the baseline.
        version: The accumulated version triple.
        semver: The composed version string.
        changelog: Changelog entries (empty unless requested).
    """

    baseline: Baseline
    history: tuple[str, ...]
    impacts: tuple[Impact, ...]
    version: VersionTriple
    semver: str
    changelog: tuple[ChangelogEntry, ...] = ()

    @property
    def beta_count(self) -> int:
        """Number of mainline steps after the baseline."""
        return len(self.history) - 1


def resolve_branch(backend: VCSBackend, head: str, override: str | None = None) -> str:
    """Name the branch being versioned.

    A detached ``HEAD`` (common in CI checkouts) is attributed to the
    single local branch whose tip is ``HEAD``.

    Raises:
        GitSemverError: With ``AMBIGUOUS_BRANCH`` when several branches
            point at a detached ``HEAD`` and no *override* is given.
    """
    if override:
        return override
    current = backend.current_branch()
    if current is not None:
        return current
    candidates = backend.branches_at(head)
    if len(candidates) > 1:
        raise GitSemverError(
            ErrorCode.AMBIGUOUS_BRANCH,
            f'HEAD is detached and matches several branches: {", ".join(candidates)}.',
            hint='Pass --branch=<name> to choose one, or --no-branch to omit it.',
        )
    if candidates:
        return candidates[0]
    return 'HEAD'


def resolve(backend: VCSBackend, patterns: PatternConfig, options: ResolveOptions | None = None) -> Resolution:
    """Resolve the version of the repository's current commit.

    Args:
        backend: Repository access.
        patterns: Compiled classification patterns.
        options: Output options; defaults to :class:`ResolveOptions`.

    Returns:
        The :class:`Resolution`.
    """
    options = options or ResolveOptions()
    matcher = PatternMatcher(patterns)

    head = backend.head()
    baseline = resolve_baseline(backend, head, patterns.tag)
    history = linearize(backend, baseline.commit, head)
    step_count = len(history) - 1
    logger.debug('history_linearized', baseline=baseline.commit, steps=step_count)

    impacts = [classify_step(backend, matcher, commit, previous) for previous, commit in steps(history)]
    if options.single_step:
        version = accumulate_single_step(baseline.version, impacts)
    else:
        version = accumulate(baseline.version, impacts)

    pre_release = options.pre_release and not options.release
    needs_status = options.release or (pre_release and options.local and step_count > 0)
    dirty = needs_status and not backend.is_clean()
    if options.release and dirty:
        raise GitSemverError(
            ErrorCode.RELEASE_CONTEXT,
            'Cannot resolve a release version: the working tree has uncommitted changes.',
            hint='Commit or stash your changes, or drop --release.',
        )

    metadata = not options.release
    compose_options = ComposeOptions(
        beta_count=step_count,
        pre_release=pre_release,
        dirty=dirty,
        mark_local=options.local,
        branch=resolve_branch(backend, head, options.branch_override) if metadata and options.branch else None,
        commit=head if metadata and options.hash else None,
        timestamp=options.clock() if metadata and options.timestamp else None,
    )
    semver = compose(version, compose_options)
    logger.debug('version_resolved', version=semver)

    changelog: list[ChangelogEntry] = []
    if options.changelog:
        changelog = extract_changelog(backend, matcher, head, baseline.commit)

    return Resolution(
        baseline=baseline,
        history=tuple(history),
        impacts=tuple(impacts),
        version=version,
        semver=semver,
        changelog=tuple(changelog),
    )
