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

"""Git backend that shells out to the ``git`` executable.

Command mapping::

    head()                  git rev-parse --verify --quiet HEAD^{commit}
    describe_nearest_tag()  git describe --tags --abbrev=0 --first-parent --match ?*.?*.?*
    tags_at()               git tag --points-at <commit>
    resolve()               git rev-parse --verify <ref>^{commit}
    first_parent_root()     git rev-list --first-parent --max-parents=0 <commit>
    first_parent_path()     git rev-list --first-parent --reverse <a>..<b>
    ancestors_excluding()   git rev-list <include>... ^<exclude>
    commit()                git log -1 --format=%H%x00%an%x00%P%x00%s <sha>
    is_clean()              git status --porcelain
    current_branch()        git symbolic-ref --quiet --short HEAD
    branches_at()           git branch --points-at <commit>

Every call is a blocking :func:`subprocess.run`.  A non-zero exit that
is not an expected "nothing found" answer raises
:class:`~gitsemver.errors.GitSemverError`.
"""

from __future__ import annotations

import os
import subprocess  # noqa: S404 - intentional use for git commands
from collections.abc import Sequence
from pathlib import Path

from gitsemver._types import CommitInfo
from gitsemver.errors import ErrorCode, GitSemverError
from gitsemver.logging import get_logger

log = get_logger('gitsemver.backends.vcs.git')

# Tags shaped like a dotted triple; the tag pattern filters further.
_DESCRIBE_MATCH = '?*.?*.?*'

# git describe failures that simply mean "no tag".
_NO_TAG_MARKERS = ('No names found', 'No tags can describe', 'cannot describe')


class GitCLIBackend:
    """:class:`~gitsemver.backends.vcs.VCSBackend` backed by the ``git`` CLI.

    Commit metadata is memoized for the lifetime of the instance, which
    is one resolution run.

    Args:
        cwd: Any directory inside the work tree.  Defaults to the
            process working directory.
    """

    def __init__(self, cwd: Path | None = None) -> None:
        """Initialize for the repository containing *cwd*."""
        self.cwd = cwd or Path.cwd()
        self._commits: dict[str, CommitInfo] = {}

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        cmd = ['git', *args]
        log.debug('git_command', cmd=' '.join(cmd))
        try:
            proc = subprocess.run(  # noqa: S603 - intentional subprocess call
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                env={**os.environ, 'LC_ALL': 'C'},
            )
        except FileNotFoundError as exc:
            raise GitSemverError(
                ErrorCode.GIT_COMMAND_FAILED,
                'git executable not found.',
                hint='Install git and make sure it is on PATH.',
            ) from exc
        if check and proc.returncode != 0:
            raise GitSemverError(
                ErrorCode.GIT_COMMAND_FAILED,
                f'{" ".join(cmd)} exited {proc.returncode}: {proc.stderr.strip()}',
            )
        return proc

    def _lines(self, *args: str) -> list[str]:
        return [line for line in self._run(*args).stdout.splitlines() if line.strip()]

    def toplevel(self) -> Path:
        """Return the work-tree root directory."""
        proc = self._run('rev-parse', '--show-toplevel', check=False)
        if proc.returncode != 0:
            raise GitSemverError(
                ErrorCode.NOT_A_REPOSITORY,
                f'{self.cwd} is not inside a git work tree.',
                hint='Run git-semver from a repository or pass -C <path>.',
            )
        return Path(proc.stdout.strip())

    def head(self) -> str:
        """Return the id of ``HEAD``."""
        proc = self._run('rev-parse', '--verify', '--quiet', 'HEAD^{commit}', check=False)
        if proc.returncode != 0 or not proc.stdout.strip():
            raise GitSemverError(
                ErrorCode.EMPTY_REPOSITORY,
                'The repository has no commits.',
                hint='Create at least one commit before resolving a version.',
            )
        return proc.stdout.strip()

    def describe_nearest_tag(self, commit: str) -> str | None:
        """Return the nearest dotted-triple tag along first-parent ancestry."""
        proc = self._run(
            'describe',
            '--tags',
            '--abbrev=0',
            '--first-parent',
            '--match',
            _DESCRIBE_MATCH,
            commit,
            check=False,
        )
        if proc.returncode == 0:
            return proc.stdout.strip() or None
        if any(marker in proc.stderr for marker in _NO_TAG_MARKERS):
            return None
        raise GitSemverError(
            ErrorCode.GIT_COMMAND_FAILED,
            f'git describe {commit} exited {proc.returncode}: {proc.stderr.strip()}',
        )

    def tags_at(self, commit: str) -> list[str]:
        """Return the tags pointing at *commit*."""
        return self._lines('tag', '--points-at', commit)

    def resolve(self, ref: str) -> str:
        """Return the commit id *ref* points at, peeling annotated tags."""
        if not ref.startswith('refs/'):
            tag_ref = f'refs/tags/{ref}'
            if self._run('rev-parse', '--verify', '--quiet', tag_ref, check=False).returncode == 0:
                ref = tag_ref
        return self._run('rev-parse', '--verify', f'{ref}^{{commit}}').stdout.strip()

    def first_parent_root(self, commit: str) -> str:
        """Return the root at the end of *commit*'s first-parent chain."""
        roots = self._lines('rev-list', '--first-parent', '--max-parents=0', commit)
        return roots[-1]

    def first_parent_path(self, exclusive: str, inclusive: str) -> list[str]:
        """Return the first-parent commits in ``exclusive..inclusive``, oldest first."""
        return self._lines('rev-list', '--first-parent', '--reverse', f'{exclusive}..{inclusive}')

    def ancestors_excluding(self, include: Sequence[str], exclude: str | None) -> list[str]:
        """Return ``git rev-list <include>... ^<exclude>``."""
        if not include:
            return []
        args = ['rev-list', *include]
        if exclude is not None:
            args.append(f'^{exclude}')
        return self._lines(*args)

    def commit(self, sha: str) -> CommitInfo:
        """Return (memoized) metadata for *sha*."""
        cached = self._commits.get(sha)
        if cached is not None:
            return cached
        out = self._run('log', '-1', '--no-show-signature', '--format=%H%x00%an%x00%P%x00%s', sha).stdout
        full_sha, author, parents, subject = out.rstrip('\n').split('\x00', 3)
        info = CommitInfo(
            sha=full_sha,
            subject=subject,
            author=author,
            parents=tuple(parents.split()),
        )
        self._commits[sha] = info
        self._commits[full_sha] = info
        return info

    def is_clean(self) -> bool:
        """Return ``True`` if ``git status --porcelain`` reports nothing."""
        return not self._run('status', '--porcelain').stdout.strip()

    def current_branch(self) -> str | None:
        """Return the short name of the checked-out branch."""
        proc = self._run('symbolic-ref', '--quiet', '--short', 'HEAD', check=False)
        if proc.returncode != 0:
            return None
        return proc.stdout.strip() or None

    def branches_at(self, commit: str) -> list[str]:
        """Return local branches pointing at *commit*."""
        names = self._lines('branch', '--points-at', commit, '--format=%(refname:short)')
        # Detached HEAD shows up as a pseudo-entry like "(HEAD detached at 1a2b3c)".
        return [name for name in names if not name.startswith('(')]


__all__ = [
    'GitCLIBackend',
]
