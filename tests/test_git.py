"""
Tests for the git wrappers, run against a throwaway repository.

Run with:
    pytest tests/test_git.py -v
"""

import shutil
import subprocess

import pytest

from commitcoach.git import (
    CommitError, GitAnalyzer, GitCommitter, NoStagedChanges, ToolInvocationError, run_git,
)
from commitcoach.git import analyzer as analyzer_module

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(repo, *args):
    return subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True).stdout


@pytest.fixture
def repo(tmp_path, monkeypatch):
    """An initialized repository with one commit, used as cwd."""
    git(tmp_path, "init", "-q")
    git(tmp_path, "config", "user.email", "dev@example.com")
    git(tmp_path, "config", "user.name", "Dev")
    git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "app.py").write_text("print('helo')\n")
    git(tmp_path, "add", "app.py")
    git(tmp_path, "commit", "-q", "-m", "initial")
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# GitAnalyzer
# ---------------------------------------------------------------------------

class TestGitAnalyzer:

    def test_nothing_staged_raises(self, repo):
        with pytest.raises(NoStagedChanges, match="No staged changes"):
            GitAnalyzer().get_staged_diff()

    def test_unstaged_changes_ignored(self, repo):
        (repo / "app.py").write_text("print('hello')\n")
        with pytest.raises(NoStagedChanges):
            GitAnalyzer().get_staged_diff()

    def test_staged_diff_has_zero_context(self, repo):
        (repo / "app.py").write_text("print('hello')\n")
        git(repo, "add", "app.py")
        diff = GitAnalyzer().get_staged_diff()
        assert "-print('helo')" in diff
        assert "+print('hello')" in diff
        assert "@@ -1 +1 @@" in diff

    def test_staged_files(self, repo):
        (repo / "app.py").write_text("print('hello')\nprint('bye')\n")
        (repo / "new.txt").write_text("a\nb\nc\n")
        git(repo, "add", ".")
        files = {f.path: (f.additions, f.deletions) for f in GitAnalyzer().get_staged_files()}
        assert files == {"app.py": (2, 1), "new.txt": (3, 0)}

    def test_binary_files_count_zero(self, repo):
        (repo / "blob.bin").write_bytes(b"\x00\x01\x02\x00")
        git(repo, "add", "blob.bin")
        files = GitAnalyzer().get_staged_files()
        assert [(f.path, f.additions, f.deletions) for f in files] == [("blob.bin", 0, 0)]

    def test_outside_repository_raises_tool_error(self, tmp_path, monkeypatch):
        outside = tmp_path / "plain"
        outside.mkdir()
        monkeypatch.chdir(outside)
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        with pytest.raises(ToolInvocationError) as exc:
            GitAnalyzer().get_staged_diff()
        assert "not a git repository" in str(exc.value).lower()
        assert "usage:" not in str(exc.value)

    def test_missing_git_binary(self, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError("git")
        monkeypatch.setattr(analyzer_module.subprocess, "run", missing)
        with pytest.raises(ToolInvocationError, match="not installed"):
            run_git("--version")


# ---------------------------------------------------------------------------
# GitCommitter
# ---------------------------------------------------------------------------

class TestGitCommitter:

    def test_commit_returns_short_hash(self, repo):
        (repo / "app.py").write_text("print('hello')\n")
        git(repo, "add", "app.py")

        revision = GitCommitter().commit("fix: correct greeting typo")

        assert revision == git(repo, "rev-parse", "--short", "HEAD").strip()
        assert git(repo, "log", "-1", "--format=%s").strip() == "fix: correct greeting typo"

    def test_multiline_message_preserved(self, repo):
        (repo / "app.py").write_text("print('hello')\n")
        git(repo, "add", "app.py")
        GitCommitter().commit("fix: greeting\n\n- correct the typo")
        assert git(repo, "log", "-1", "--format=%b").strip() == "- correct the typo"

    def test_nothing_to_commit_raises(self, repo):
        with pytest.raises(CommitError):
            GitCommitter().commit("chore: update")

    def test_hook_failure_raises_with_stderr(self, repo):
        hook = repo / ".git" / "hooks" / "pre-commit"
        hook.write_text("#!/bin/sh\necho 'lint failed' >&2\nexit 1\n")
        hook.chmod(0o755)
        (repo / "app.py").write_text("print('hello')\n")
        git(repo, "add", "app.py")

        with pytest.raises(CommitError, match="lint failed"):
            GitCommitter().commit("fix: greeting")
