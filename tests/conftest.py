import logging
import os
import shutil
import subprocess

import pytest

from nextver.errors import RepositoryAccessError


class FakeRepo:
    """Linear in-memory history: commits[0] is the root, commits[-1] is HEAD."""

    def __init__(self, messages: list[str], tags: dict[str, int] | None = None):
        self.commits = [(f"c{i:03d}", msg) for i, msg in enumerate(messages)]
        self.tags = {name: self.commits[idx][0] for name, idx in (tags or {}).items()}

    def list_tag_names(self):
        return list(self.tags)

    def resolve(self, ref):
        if ref == "HEAD":
            return self.current_head()
        name = ref.removeprefix("refs/tags/")
        if name in self.tags:
            return self.tags[name]
        raise RepositoryAccessError(f"unknown ref {ref}")

    def current_head(self):
        if not self.commits:
            raise RepositoryAccessError("HEAD does not point at a commit")
        return self.commits[-1][0]

    def root_commit(self, start):
        return self.commits[0][0]

    def walk(self, start, exclude=None):
        ids = [cid for cid, _ in self.commits]
        end = ids.index(start) + 1
        begin = ids.index(exclude) + 1 if exclude in ids[:end] else 0
        return ids[begin:end]

    def read_message(self, commit_id):
        return dict(self.commits)[commit_id]


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    # handlers bind to the sys.stderr of the test that created them
    logging.getLogger("nextver").handlers.clear()


@pytest.fixture
def fake_repo():
    return FakeRepo


class GitFixture:
    def __init__(self, path):
        self.path = path
        self._tick = 0

    def run(self, *args: str) -> str:
        return subprocess.run(
            ["git", *args], cwd=self.path, capture_output=True, text=True, check=True
        ).stdout.strip()

    def commit(self, message: str) -> str:
        # distinct timestamps keep --date-order stable
        self._tick += 1
        stamp = f"{1700000000 + self._tick * 60} +0000"
        subprocess.run(
            ["git", "commit", "--allow-empty", "-q", "-m", message],
            cwd=self.path,
            check=True,
            env={**os.environ, "GIT_AUTHOR_DATE": stamp, "GIT_COMMITTER_DATE": stamp},
        )
        return self.run("rev-parse", "HEAD")

    def tag(self, name: str, annotated: bool = False):
        if annotated:
            self.run("tag", "-a", name, "-m", f"release {name}")
        else:
            self.run("tag", name)


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    repo = tmp_path / "repo"
    repo.mkdir()
    fixture = GitFixture(repo)
    fixture.run("init", "-q")
    return fixture
