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

"""Semantic versions from git history.

The version of the current commit is derived from the nearest version
tag on the mainline plus the impact of every change since then, as
classified from commit subjects:

- ``Breaking: ...`` bumps the major version.
- ``Feature: ...`` bumps the minor version.
- Anything else bumps the patch version.

Usage::

    from gitsemver.backends.vcs.git import GitCLIBackend
    from gitsemver.config import build_pattern_config
    from gitsemver.resolver import resolve

    result = resolve(GitCLIBackend(), build_pattern_config())
    print(result.semver)   # e.g. 1.5.1-beta.3+Branch.main.Hash.<sha>.Timestamp.<utc>
"""

__version__ = '0.1.0'
