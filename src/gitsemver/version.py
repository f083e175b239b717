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

"""Version accumulation.

A :class:`~gitsemver._types.VersionTriple` is folded through the
per-step impacts of the linearized history, one step at a time::

    v1.4.2  --PATCH-->  1.4.3  --MINOR-->  1.5.0  --PATCH-->  1.5.1

Each step is applied on its own, so the result is not the same as
bumping once by the strongest impact in the range (that is what
:func:`accumulate_single_step` does).
"""

from __future__ import annotations

from collections.abc import Iterable

from gitsemver._types import Impact, VersionTriple
from gitsemver.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    'accumulate',
    'accumulate_single_step',
    'apply_impact',
]


def apply_impact(triple: VersionTriple, impact: Impact) -> VersionTriple:
    """Return *triple* bumped by *impact*.

    >>> str(apply_impact(VersionTriple(1, 4, 2), Impact.MINOR))
    '1.5.0'
    """
    if impact is Impact.MAJOR:
        return VersionTriple(triple.major + 1, 0, 0)
    if impact is Impact.MINOR:
        return VersionTriple(triple.major, triple.minor + 1, 0)
    if impact is Impact.PATCH:
        return VersionTriple(triple.major, triple.minor, triple.patch + 1)
    return triple


def accumulate(triple: VersionTriple, impacts: Iterable[Impact]) -> VersionTriple:
    """Apply every step's impact in order, starting from *triple*."""
    for impact in impacts:
        bumped = apply_impact(triple, impact)
        if bumped != triple:
            logger.debug('version_incremented', impact=impact.name.lower(), version=str(bumped))
        triple = bumped
    return triple


def accumulate_single_step(triple: VersionTriple, impacts: Iterable[Impact]) -> VersionTriple:
    """Bump *triple* once by the strongest of *impacts*."""
    return apply_impact(triple, max(impacts, default=Impact.NONE))
