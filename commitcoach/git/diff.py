"""Diff limits - keep oversized diffs within what a request may carry."""

DIFF_CHAR_LIMIT = 20_000
TRUNCATION_MARKER = '\n...[truncated]'


def truncate_diff(diff: str, limit: int = DIFF_CHAR_LIMIT) -> str:
    """Cut ``diff`` to ``limit`` characters and append the marker if it was longer."""
    if len(diff) <= limit:
        return diff
    return diff[:limit] + TRUNCATION_MARKER


def diff_stats(diff: str) -> tuple[int, int]:
    """Count added and removed lines in a unified diff, skipping file headers."""
    additions = deletions = 0
    for line in diff.split('\n'):
        if line.startswith('+++') or line.startswith('---'):
            continue
        if line.startswith('+'):
            additions += 1
        elif line.startswith('-'):
            deletions += 1
    return additions, deletions
