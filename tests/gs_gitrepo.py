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

"""Helpers for building throwaway git repositories in tests."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which('git') is None, reason='git is not installed')


class GitRepo:
    """A real git repository rooted at *path*."""

    def __init__(self, path: Path) -> None:
        """Initialize an empty repository on branch ``main``."""
        self.path = path
        self.path.mkdir(parents=True, exist_ok=True)
        self.git('init', '-q')
        self.git('symbolic-ref', 'HEAD', 'refs/heads/main')
        self.git('config', 'user.name', 'Alice')
        self.git('config', 'user.email', 'alice@example.com')
        self.git('config', 'commit.gpgsign', 'false')
        self.git('config', 'tag.gpgsign', 'false')

    def git(self, *args: str) -> str:
        """Run git in the repository and return stripped stdout."""
        env = {**os.environ, 'GIT_CONFIG_NOSYSTEM': '1', 'LC_ALL': 'C'}
        proc = subprocess.run(
            ['git', *args],
            cwd=self.path,
            capture_output=True,
            text=True,
            check=True,
            env=env,
        )
        return proc.stdout.strip()

    def commit(self, message: str, author: str = 'Alice') -> str:
        """Create an empty commit and return its id."""
        self.git('-c', f'user.name={author}', 'commit', '-q', '--allow-empty', '-m', message)
        return self.head()

    def merge(self, branch: str, message: str, author: str = 'Alice') -> str:
        """Create a merge commit of *branch* into the current branch."""
        self.git('-c', f'user.name={author}', 'merge', '-q', '--no-ff', '--no-edit', '-m', message, branch)
        return self.head()

    def head(self) -> str:
        """Return the id of HEAD."""
        return self.git('rev-parse', 'HEAD')
