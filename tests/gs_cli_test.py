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

"""Tests for the git-semver command line."""

from __future__ import annotations

import re
from pathlib import Path

import pytest
from gitsemver.cli import build_parser, main

from gs_gitrepo import GitRepo, requires_git

QUIET = ['-b', '-a', '-t']


@pytest.fixture
def repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> GitRepo:
    """An empty repository that git cannot escape upwards from."""
    monkeypatch.setenv('GIT_CEILING_DIRECTORIES', str(tmp_path))
    return GitRepo(tmp_path / 'repo')


class TestBuildParser:
    """Tests for build_parser()."""

    def test_defaults(self) -> None:
        """Every switch is off by default."""
        args = build_parser().parse_args([])
        assert not args.no_branch
        assert not args.no_hash
        assert not args.release
        assert not args.change_log
        assert args.tag_pattern is None
        assert args.directory is None

    def test_short_flags(self) -> None:
        """Short flags map onto their long forms."""
        args = build_parser().parse_args(['-b', '-a', '-t', '-l', '-p', '-s', '-v', '-c'])
        assert args.no_branch and args.no_hash and args.no_timestamp
        assert args.no_local and args.no_pre_release
        assert args.single_step and args.verbose and args.change_log

    def test_pattern_flags(self) -> None:
        """Pattern flags carry their value."""
        args = build_parser().parse_args(['--tag-pattern', '^release-()$', '--patch-pattern', '^Fix:'])
        assert args.tag_pattern == '^release-()$'
        assert args.patch_pattern == '^Fix:'

    def test_unknown_flag_exits_2(self) -> None:
        """Unknown arguments are a usage error."""
        with pytest.raises(SystemExit) as info:
            build_parser().parse_args(['--frobnicate'])
        assert info.value.code == 2


@requires_git
class TestMain:
    """Tests for main() against real repositories."""

    def test_prints_version(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """The version is printed on its own line."""
        repo.commit('init')
        repo.git('tag', 'v1.4.2')
        repo.commit('Feature: dark mode')
        assert main(['-C', str(repo.path), *QUIET]) == 0
        assert capsys.readouterr().out == '1.5.0-beta.1\n'

    def test_metadata(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """Branch, hash and timestamp are appended by default."""
        repo.commit('init')
        head = repo.commit('Fix')
        repo.git('checkout', '-q', '-b', 'feature/x')
        assert main(['-C', str(repo.path)]) == 0
        out = capsys.readouterr().out.strip()
        assert re.fullmatch(
            rf'0\.1\.1-beta\.1\+Branch\.feature-x\.Hash\.{head}\.Timestamp\.\d{{8}}-\d{{6}}-\d{{6}}',
            out,
        )

    def test_change_log(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """--change-log prints one line per entry after the version."""
        repo.commit('init')
        repo.commit('Fix crash', author='Carol')
        repo.commit('Feature: search', author='Bob')
        assert main(['-C', str(repo.path), *QUIET, '--change-log']) == 0
        assert capsys.readouterr().out.splitlines() == [
            '0.2.0-beta.2',
            'Fix crash (Carol)',
            'Feature: search (Bob)',
        ]

    def test_release(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """--release prints the bare triple."""
        repo.commit('init')
        repo.commit('Breaking: new API')
        assert main(['-C', str(repo.path), '--release']) == 0
        assert capsys.readouterr().out == '1.0.0\n'

    def test_release_dirty(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """--release fails on uncommitted changes."""
        repo.commit('init')
        (repo.path / 'scratch.txt').write_text('wip\n')
        assert main(['-C', str(repo.path), '--release']) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'GS-RELEASE-CONTEXT' in captured.err

    def test_tag_pattern_override(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """--tag-pattern selects differently named tags."""
        repo.commit('init')
        repo.git('tag', 'release-2.0.0')
        repo.commit('Fix')
        assert main(['-C', str(repo.path), *QUIET, '--tag-pattern', '^release-()$']) == 0
        assert capsys.readouterr().out == '2.0.1-beta.1\n'

    def test_config_file(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """Patterns are read from .git-semver.toml at the work-tree root."""
        (repo.path / '.git-semver.toml').write_text("minor_pattern = '^feat:'\n")
        repo.git('add', '.git-semver.toml')
        repo.commit('init')
        repo.commit('feat: thing')
        assert main(['-C', str(repo.path), *QUIET]) == 0
        assert capsys.readouterr().out == '0.2.0-beta.1\n'

    def test_invalid_pattern(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """A broken pattern is reported and nothing is printed to stdout."""
        repo.commit('init')
        assert main(['-C', str(repo.path), '--major-pattern', '(']) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'major_pattern' in captured.err

    def test_empty_repository(self, repo: GitRepo, capsys: pytest.CaptureFixture[str]) -> None:
        """An empty repository exits 1 without output."""
        assert main(['-C', str(repo.path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'no commits' in captured.err

    def test_not_a_repository(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Running outside a repository exits 1."""
        plain = tmp_path / 'plain'
        plain.mkdir()
        with pytest.MonkeyPatch.context() as mp:
            mp.setenv('GIT_CEILING_DIRECTORIES', str(tmp_path))
            assert main(['-C', str(plain)]) == 1
        assert 'not inside a git work tree' in capsys.readouterr().err
