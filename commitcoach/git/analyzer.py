"""Git Analyzer - Read staged changes from git."""

import subprocess
from dataclasses import dataclass


class GitError(Exception):
    """Base class for git operation failures."""
    pass


class ToolInvocationError(GitError):
    """Raised when git cannot run or exits abnormally."""
    pass


class NoStagedChanges(GitError):
    """Raised when nothing is staged for commit."""

    def __init__(self, message: str = "No staged changes. Run 'git add' first."):
        super().__init__(message)


class CommitError(GitError):
    """Raised when git refuses to create the commit."""
    pass


def run_git(*args: str, error_cls: type[GitError] = ToolInvocationError, fallback: str = "git failed") -> str:
    """Run a git command and return stdout.

    A non-zero exit raises ``error_cls`` carrying git's own stderr text.
    """
    try:
        result = subprocess.run(
            ['git', *args],
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace',
        )
    except FileNotFoundError:
        raise ToolInvocationError("Git is not installed or not in PATH")
    except OSError as e:
        raise ToolInvocationError(f"Could not run git: {e}")

    if result.returncode != 0:
        raise error_cls((result.stderr or '').strip() or fallback)
    return result.stdout


@dataclass
class StagedFile:
    """A single staged file with its line counts."""
    path: str
    additions: int
    deletions: int


class GitAnalyzer:
    """Extracts the staged diff from git."""

    DIFF_ARGS = ('diff', '--cached', '--no-color', '--unified=0')

    def get_staged_diff(self) -> str:
        """Return the staged, zero-context diff.

        Raises:
            ToolInvocationError: git is missing or exited non-zero
            NoStagedChanges: the diff is empty
        """
        self._verify_in_repo()
        diff = run_git(*self.DIFF_ARGS, fallback="git diff failed")
        if not diff.strip():
            raise NoStagedChanges()
        return diff

    def _verify_in_repo(self) -> None:
        """Fail fast outside a repository, with git's own message."""
        run_git('rev-parse', '--git-dir', fallback="Not inside a git repository")

    def get_staged_files(self) -> list[StagedFile]:
        """Parse 'git diff --cached --numstat' output."""
        output = run_git('diff', '--cached', '--numstat', fallback="git diff failed")

        files = []
        for line in output.strip().split('\n'):
            parts = line.split('\t')
            if len(parts) >= 3:
                # Binary files report '-' for both counts
                additions = int(parts[0]) if parts[0] != '-' else 0
                deletions = int(parts[1]) if parts[1] != '-' else 0
                files.append(StagedFile(path=parts[2], additions=additions, deletions=deletions))

        return files
