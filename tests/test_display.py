"""
Tests for CLI output formatting.

Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import re

import pytest

from commitcoach import output
from commitcoach.cli.main import _display_file_list
from commitcoach.cli import menu as menu_module
from commitcoach.cli.loop import Decision
from commitcoach.cli.menu import CHOICES, TerminalMenu, display_message
from commitcoach.git import StagedFile
from commitcoach.output import print_committed, print_error, subject_line, colorize_commit_type

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


# ---------------------------------------------------------------------------
# File list display
# ---------------------------------------------------------------------------

class TestDisplayFileList:

    def test_small_list_shows_all(self, capsys, strip_ansi):
        _display_file_list([
            StagedFile("src/utils/validator.py", 15, 3),
            StagedFile("tests/test_validator.py", 22, 0),
        ])
        out = strip_ansi(capsys.readouterr().out)

        assert "Staged changes:" in out
        assert "src/utils/validator.py (+15 -3)" in out
        assert "tests/test_validator.py (+22 -0)" in out
        assert "..." not in out

    def test_large_list_collapses(self, capsys, strip_ansi):
        """12 files - first 8 shown, rest collapsed."""
        _display_file_list([StagedFile(f"src/mod_{i}.py", i, 0) for i in range(12)])
        out = strip_ansi(capsys.readouterr().out)

        assert "src/mod_7.py" in out
        assert "src/mod_8.py" not in out
        assert "... and 4 more files" in out

    def test_empty_list_prints_nothing(self, capsys):
        _display_file_list([])
        assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# Suggestion display
# ---------------------------------------------------------------------------

class TestDisplayMessage:

    def test_subject_and_body_between_rules(self, capsys, strip_ansi):
        display_message("feat(auth): add login\n\n- validate password")
        lines = strip_ansi(capsys.readouterr().out).strip('\n').split('\n')

        assert lines[0] == "Suggested commit message:"
        assert set(lines[1]) == {'─'}
        assert lines[2] == "feat(auth): add login"
        assert lines[-1] == lines[1]
        assert "- validate password" in lines

    def test_rule_width_matches_longest_line(self, capsys, strip_ansi):
        display_message("fix: a\n\n- a much longer body line")
        lines = strip_ansi(capsys.readouterr().out).strip('\n').split('\n')
        assert len(lines[1]) == len("- a much longer body line")


# ---------------------------------------------------------------------------
# Result reporting
# ---------------------------------------------------------------------------

class TestReporting:

    def test_committed_shows_hash_and_subject_only(self, capsys, strip_ansi):
        print_committed("1a2b3c4", "feat: add login\n\n- body line")
        out = strip_ansi(capsys.readouterr().out)
        assert "Committed 1a2b3c4: feat: add login" in out
        assert "body line" not in out

    def test_errors_go_to_stderr(self, capsys, strip_ansi):
        print_error("git commit failed")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "git commit failed" in strip_ansi(captured.err)

    def test_subject_line(self):
        assert subject_line("fix: x\n\nbody") == "fix: x"
        assert subject_line("fix: x") == "fix: x"


class TestColorizeCommitType:

    def test_no_color_returns_input(self, monkeypatch):
        monkeypatch.setattr(output, "COLORS_ENABLED", False)
        assert colorize_commit_type("feat: x") == "feat: x"

    def test_colors_known_prefix(self, monkeypatch):
        monkeypatch.setattr(output, "COLORS_ENABLED", True)
        result = colorize_commit_type("fix(api): handle timeout")
        assert result.startswith(output.Colors.BOLD + output.Colors.RED + "fix(api):")
        assert ANSI_RE.sub('', result) == "fix(api): handle timeout"

    def test_leaves_plain_subjects_alone(self, monkeypatch):
        monkeypatch.setattr(output, "COLORS_ENABLED", True)
        assert colorize_commit_type("Add login page") == "Add login page"


class TestColorSupport:

    class Tty:
        def isatty(self):
            return True

    def test_no_color_wins(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert output._supports_color() is False

    def test_force_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("FORCE_COLOR", "1")
        assert output._supports_color() is True

    def test_follows_stdout_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr(output.sys, "stdout", self.Tty())
        assert output._supports_color() is True


# ---------------------------------------------------------------------------
# Terminal menu
# ---------------------------------------------------------------------------

class FakeQuestion:
    def __init__(self, answer):
        self.answer = answer

    def ask(self):
        return self.answer


@pytest.fixture
def prompts(monkeypatch):
    """Replace questionary prompts; set ``prompts.answer`` and read ``prompts.calls``."""
    class Recorder:
        answer = None

        def __init__(self):
            self.calls = []

        def select(self, message, **kwargs):
            self.calls.append(("select", message, kwargs))
            return FakeQuestion(self.answer)

        def text(self, message, **kwargs):
            self.calls.append(("text", message, kwargs))
            return FakeQuestion(self.answer)

    recorder = Recorder()
    monkeypatch.setattr(menu_module.questionary, "select", recorder.select)
    monkeypatch.setattr(menu_module.questionary, "text", recorder.text)
    return recorder


class TestTerminalMenu:

    def test_choices_map_to_decisions(self):
        assert [c.value for c in CHOICES] == [Decision.USE, Decision.EDIT, Decision.REGEN, Decision.CANCEL]
        assert CHOICES[0].title == "Use as-is"

    def test_choose_shows_suggestion_and_returns_decision(self, prompts, capsys, strip_ansi):
        prompts.answer = Decision.REGEN
        assert TerminalMenu().choose("feat: add login") is Decision.REGEN
        assert "feat: add login" in strip_ansi(capsys.readouterr().out)
        kind, _, kwargs = prompts.calls[0]
        assert kind == "select"
        assert kwargs["choices"] is CHOICES

    def test_choose_ctrl_c_is_none(self, prompts):
        prompts.answer = None
        assert TerminalMenu().choose("feat: x") is None

    def test_edit_prefills_suggestion(self, prompts):
        prompts.answer = "feat: edited"
        assert TerminalMenu().edit("feat: x") == "feat: edited"
        kind, _, kwargs = prompts.calls[0]
        assert kind == "text"
        assert kwargs["default"] == "feat: x"
        assert kwargs["multiline"] is False

    def test_edit_multiline_for_body(self, prompts):
        prompts.answer = "feat: x\n\nbody"
        TerminalMenu().edit("feat: x\n\n- body")
        assert prompts.calls[0][2]["multiline"] is True

    def test_edit_ctrl_c_is_none(self, prompts):
        prompts.answer = None
        assert TerminalMenu().edit("feat: x") is None
