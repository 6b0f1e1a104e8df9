"""Prompt Builder - Construct LLM prompts for commit message generation."""

from commitcoach import STYLE_HINTS, GENERIC_STYLE_HINT

ROLE_LINE = "You are CommitCoach, an expert at writing excellent Git commit messages."

GUIDELINES = """GUIDELINES:
- Single-line subject <= 72 chars
- Use imperative mood
- Be specific about the change and intent
- No code blocks, return plain text only"""

TASK_LINE = "Generate a commit message for the staged diff below."

# Markers keep the model from reading diff lines as instructions
DIFF_START = "DIFF START"
DIFF_END = "DIFF END"


def style_hint(style: str) -> str:
    """Return the hint for a style, or the generic hint for unknown styles."""
    return STYLE_HINTS.get(style, GENERIC_STYLE_HINT)


class PromptBuilder:
    """Constructs the single instruction string sent to the model."""

    def build(self, style: str, diff: str) -> str:
        sections = [
            ROLE_LINE,
            self._build_style_section(style),
            style_hint(style),
            TASK_LINE,
            self._build_diff_section(diff),
        ]
        return "\n\n".join(sections)

    def _build_style_section(self, style: str) -> str:
        return f"STYLE: {style}\n{GUIDELINES}"

    def _build_diff_section(self, diff: str) -> str:
        return f"{DIFF_START}\n{diff}\n{DIFF_END}"


def compose(style: str, diff: str) -> str:
    """Map (style, diff) to the prompt text. Pure and deterministic."""
    return PromptBuilder().build(style, diff)
