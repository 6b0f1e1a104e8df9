"""CLI Main Entry Point"""

import logging
import os
import sys
import time

from commitcoach.config import Config, load_config, load_env
from commitcoach.git import (
    GitAnalyzer, GitCommitter, GitError, NoStagedChanges, StagedFile, truncate_diff, diff_stats,
)
from commitcoach.proxy import CoachClient, BackendError
from commitcoach.output import dim, bold, info, print_error, print_warning, print_committed, Spinner

from commitcoach.cli.args import parse_args
from commitcoach.cli.commands import display_config, run_setup, run_install_completion
from commitcoach.cli.loop import DecisionLoop, Menu
from commitcoach.cli.menu import TerminalMenu

logger = logging.getLogger(__name__)

MAX_FILE_DISPLAY = 8


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.setup:
        return run_setup(), True
    return 0, False


def _resolve_config(args) -> Config:
    """Resolve settings once: CLI args > environment > config file > defaults."""
    config = load_config().apply_env(os.environ)
    if args.style:
        config.style = args.style
    if args.server:
        config.server = args.server.rstrip('/')
    return config


def _display_file_list(files: list[StagedFile], max_shown: int = MAX_FILE_DISPLAY) -> None:
    """Show which files are staged, collapsing long lists."""
    if not files:
        return
    print(bold("Staged changes:"))
    for f in files[:max_shown]:
        print(dim(f"  {f.path} (+{f.additions} -{f.deletions})"))
    remaining = len(files) - max_shown
    if remaining > 0:
        print(dim(f"  ... and {remaining} more files"))


def _print_verbose_stats(diff: str, timings: dict) -> None:
    additions, deletions = diff_stats(diff)
    print(dim(f"  Diff: {len(diff)} chars (+{additions} -{deletions} lines)"))
    print(dim(f"  Timings: git={timings.get('git', 0):.2f}s, suggest={timings.get('suggest', 0):.2f}s"))


def _make_suggester(client: CoachClient, diff: str, style: str, timings: dict, show_progress: bool):
    """Bind the captured diff and style into a no-argument suggest callable."""
    def suggest() -> str:
        t0 = time.time()
        if show_progress:
            with Spinner(f"Asking {info(client.server)}..."):
                message = client.suggest(diff, style=style)
        else:
            message = client.suggest(diff, style=style)
        timings['suggest'] = time.time() - t0
        return message
    return suggest


def _commit_flow(args, config: Config, menu: Menu | None = None) -> int:
    """Main flow: staged diff -> suggestion -> decision loop -> commit.

    Returns:
        int: Exit code
    """
    is_pipe = not sys.stdout.isatty()
    is_interactive = menu is not None or (sys.stdin.isatty() and not is_pipe)

    timings = {}
    t0 = time.time()
    analyzer = GitAnalyzer()
    try:
        diff = analyzer.get_staged_diff()
        files = analyzer.get_staged_files()
    except NoStagedChanges as e:
        print_warning(str(e))
        return 0
    except GitError as e:
        print_error(str(e))
        return 1
    timings['git'] = time.time() - t0

    if not is_pipe:
        _display_file_list(files)

    limited = truncate_diff(diff)
    if len(limited) != len(diff):
        logger.debug("diff truncated from %d to %d chars", len(diff), len(limited))
        if not is_pipe:
            print(dim(f"  Diff truncated to {len(limited)} chars"))

    client = CoachClient(config.server, timeout=config.timeout)
    suggest = _make_suggester(client, limited, config.style, timings, show_progress=not is_pipe)

    try:
        suggestion = suggest()
        if args.verbose and not is_pipe:
            _print_verbose_stats(limited, timings)

        # Pipe mode: output raw message, no commit
        if not is_interactive:
            print(suggestion)
            return 0

        loop = DecisionLoop(suggest, GitCommitter().commit, menu or TerminalMenu())
        result = loop.run(suggestion)
    except BackendError as e:
        print_error(str(e))
        return 1
    except GitError as e:
        print_error(str(e))
        return 1

    if not result.committed:
        print(dim("Cancelled."))
        return 0

    print_committed(result.revision, result.message)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    load_env()
    args = parse_args(argv)
    _configure_logging(args.verbose)

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    config = _resolve_config(args)
    return _commit_flow(args, config)
