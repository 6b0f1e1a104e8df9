"""Git Committer - Create the commit and report its short hash."""

from commitcoach.git.analyzer import CommitError, run_git


class GitCommitter:
    """Commits the staged changes with a given message."""

    def commit(self, message: str) -> str:
        """Commit with ``message`` and return the new short revision id.

        Raises:
            CommitError: git rejected the commit (hooks, nothing staged, ...)
        """
        run_git('commit', '-q', '-m', message, error_cls=CommitError, fallback="git commit failed")
        return run_git('rev-parse', '--short', 'HEAD', error_cls=CommitError, fallback="git rev-parse failed").strip()
