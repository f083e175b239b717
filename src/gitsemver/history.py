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

"""First-parent history linearization."""

from __future__ import annotations

from collections.abc import Iterator

from gitsemver.backends.vcs import VCSBackend

__all__ = [
    'linearize',
    'steps',
]


def linearize(backend: VCSBackend, baseline: str, head: str) -> list[str]:
    """Return the mainline from *baseline* to *head*, oldest first.

    Element 0 is always *baseline*; it anchors the first step and is
    never itself classified.
    """
    if baseline == head:
        return [baseline]
    return [baseline, *backend.first_parent_path(baseline, head)]


def steps(history: list[str]) -> Iterator[tuple[str, str]]:
    """Yield ``(previous, commit)`` pairs for every step after the baseline."""
    yield from zip(history, history[1:])
