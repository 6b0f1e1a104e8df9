"""Git Operations Package"""

from commitcoach.git.analyzer import (
    GitAnalyzer, GitError, ToolInvocationError, NoStagedChanges, CommitError, StagedFile, run_git,
)
from commitcoach.git.committer import GitCommitter
from commitcoach.git.diff import DIFF_CHAR_LIMIT, TRUNCATION_MARKER, truncate_diff, diff_stats

__all__ = [
    "GitAnalyzer",
    "GitCommitter",
    "GitError",
    "ToolInvocationError",
    "NoStagedChanges",
    "CommitError",
    "StagedFile",
    "run_git",
    "DIFF_CHAR_LIMIT",
    "TRUNCATION_MARKER",
    "truncate_diff",
    "diff_stats",
]
