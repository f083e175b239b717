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

"""Semantic version string composition.

Layout::

    1.5.1-beta.3.local+Branch.feature-x.Hash.<sha>.Timestamp.20261018-124501-123456
    └───┘ └──────────┘ └──────────────────────────────────────────────────────────┘
    triple pre-release  build metadata

The pre-release segment is dropped when there are no commits since the
baseline.  Build metadata parts are each optional; with none of them
the ``+`` is dropped too.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone

from gitsemver._types import VersionTriple

__all__ = [
    'ComposeOptions',
    'compose',
    'format_timestamp',
    'sanitize_branch',
]

_NON_ALNUM = re.compile(r'[^0-9A-Za-z]')


@dataclass(frozen=True)
class ComposeOptions:
    """Inputs for :func:`compose` besides the triple.

    Attributes:
        beta_count: Linearized steps after the baseline.
        pre_release: Emit the pre-release segment.
        dirty: The working tree has uncommitted changes.
        mark_local: Append ``.local`` to the pre-release when *dirty*.
        branch: Branch name for ``Branch.``; ``None`` omits it.
        commit: Full commit id for ``Hash.``; ``None`` omits it.
        timestamp: Build time for ``Timestamp.``; ``None`` omits it.
    """

    beta_count: int = 0
    pre_release: bool = True
    dirty: bool = False
    mark_local: bool = True
    branch: str | None = None
    commit: str | None = None
    timestamp: datetime | None = None


def sanitize_branch(name: str) -> str:
    """Replace every non-alphanumeric character with ``-``.

    >>> sanitize_branch('feature/JIRA-12_fix')
    'feature-JIRA-12-fix'
    """
    return _NON_ALNUM.sub('-', name)


def format_timestamp(moment: datetime) -> str:
    """Format *moment* in UTC as ``yyyyMMdd-HHmmss-ffffff``.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y%m%d-%H%M%S-%f')


def compose(triple: VersionTriple, options: ComposeOptions) -> str:
    """Assemble the full version string."""
    semver = str(triple)

    if options.pre_release and options.beta_count > 0:
        pre_release = f'beta.{options.beta_count}'
        if options.dirty and options.mark_local:
            pre_release += '.local'
        semver = f'{semver}-{pre_release}'

    metadata: list[str] = []
    if options.branch is not None:
        metadata.append(f'Branch.{sanitize_branch(options.branch)}')
    if options.commit is not None:
        metadata.append(f'Hash.{options.commit}')
    if options.timestamp is not None:
        metadata.append(f'Timestamp.{format_timestamp(options.timestamp)}')
    if metadata:
        semver = f'{semver}+{".".join(metadata)}'

    return semver
