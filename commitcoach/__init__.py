"""
CommitCoach

AI-drafted commit messages for staged git changes, served through a small proxy.
"""

__version__ = "1.0.0"

# Centralized styles - single source of truth
# Used by: prompts/builder.py, cli/args.py (argparse), config (validation)
STYLE_HINTS = {
    'conventional': 'Use Conventional Commits. Start with feat/fix/docs/refactor/etc and a short scope.',
    'casual': 'Friendly but clear, ~1 short sentence.',
    'formal': 'Professional tone, concise summary first.',
}

GENERIC_STYLE_HINT = 'Be clear and concise.'

# List of style names for validation and argparse
STYLE_NAMES = list(STYLE_HINTS.keys())

DEFAULT_STYLE = 'conventional'

# Used whenever a backend answers without a usable message
FALLBACK_MESSAGE = 'chore: update'
