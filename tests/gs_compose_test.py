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

"""Tests for gitsemver.compose."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from gitsemver._types import VersionTriple
from gitsemver.compose import ComposeOptions, compose, format_timestamp, sanitize_branch

TRIPLE = VersionTriple(1, 5, 1)
MOMENT = datetime(2026, 10, 18, 12, 45, 1, 123456, tzinfo=timezone.utc)


class TestSanitizeBranch:
    """Tests for sanitize_branch()."""

    def test_slashes_and_underscores(self) -> None:
        """Non-alphanumerics become dashes."""
        assert sanitize_branch('feature/JIRA-12_fix') == 'feature-JIRA-12-fix'

    def test_alphanumeric_unchanged(self) -> None:
        """Plain names pass through."""
        assert sanitize_branch('main') == 'main'

    def test_every_character_replaced(self) -> None:
        """Consecutive separators are not collapsed."""
        assert sanitize_branch('a//b..c') == 'a--b--c'


class TestFormatTimestamp:
    """Tests for format_timestamp()."""

    def test_utc(self) -> None:
        """UTC times format as yyyyMMdd-HHmmss-ffffff."""
        assert format_timestamp(MOMENT) == '20261018-124501-123456'

    def test_converted_to_utc(self) -> None:
        """Aware non-UTC times are converted to UTC."""
        local = MOMENT.astimezone(timezone(timedelta(hours=2)))
        assert format_timestamp(local) == '20261018-124501-123456'


class TestCompose:
    """Tests for compose()."""

    def test_bare_triple(self) -> None:
        """With nothing enabled only the triple is emitted."""
        assert compose(TRIPLE, ComposeOptions()) == '1.5.1'

    def test_beta(self) -> None:
        """Steps after the baseline produce beta.N."""
        assert compose(TRIPLE, ComposeOptions(beta_count=3)) == '1.5.1-beta.3'

    def test_zero_steps_suppresses_pre_release(self) -> None:
        """A beta count of 0 suppresses the whole pre-release segment."""
        assert compose(TRIPLE, ComposeOptions(beta_count=0, dirty=True)) == '1.5.1'

    def test_local_marker(self) -> None:
        """A dirty tree appends .local to the pre-release."""
        assert compose(TRIPLE, ComposeOptions(beta_count=2, dirty=True)) == '1.5.1-beta.2.local'

    def test_local_marker_disabled(self) -> None:
        """mark_local=False omits .local."""
        assert compose(TRIPLE, ComposeOptions(beta_count=2, dirty=True, mark_local=False)) == '1.5.1-beta.2'

    def test_pre_release_disabled(self) -> None:
        """pre_release=False drops beta and local."""
        assert compose(TRIPLE, ComposeOptions(beta_count=2, dirty=True, pre_release=False)) == '1.5.1'

    def test_full_metadata(self) -> None:
        """All build metadata parts are joined with dots after +."""
        options = ComposeOptions(beta_count=3, branch='feature/x', commit='abc123', timestamp=MOMENT)
        assert compose(TRIPLE, options) == (
            '1.5.1-beta.3+Branch.feature-x.Hash.abc123.Timestamp.20261018-124501-123456'
        )

    def test_metadata_without_pre_release(self) -> None:
        """Build metadata attaches directly to the triple."""
        assert compose(TRIPLE, ComposeOptions(commit='abc123')) == '1.5.1+Hash.abc123'

    def test_partial_metadata(self) -> None:
        """Omitted parts leave no empty identifiers."""
        options = ComposeOptions(branch='main', timestamp=MOMENT)
        assert compose(TRIPLE, options) == '1.5.1+Branch.main.Timestamp.20261018-124501-123456'
