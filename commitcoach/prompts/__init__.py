"""Prompt Construction Package"""

from commitcoach.prompts.builder import PromptBuilder, compose, style_hint, GUIDELINES, DIFF_START, DIFF_END

__all__ = [
    "PromptBuilder",
    "compose",
    "style_hint",
    "GUIDELINES",
    "DIFF_START",
    "DIFF_END",
]
