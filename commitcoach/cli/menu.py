"""Terminal menu - questionary prompts behind the decision loop."""

import questionary

from commitcoach.cli.loop import Decision
from commitcoach.output import bold, dim, colorize_commit_type

CHOICES = [
    questionary.Choice("Use as-is", value=Decision.USE),
    questionary.Choice("Edit message (type inline, press Enter to commit)", value=Decision.EDIT),
    questionary.Choice("Regenerate", value=Decision.REGEN),
    questionary.Choice("Cancel", value=Decision.CANCEL),
]


def display_message(message: str) -> None:
    """Display a suggestion between horizontal rules with its type colored."""
    colored = colorize_commit_type(message)
    lines = colored.split('\n')
    # Width from the raw message, colored text carries ANSI codes
    width = max((len(line) for line in message.split('\n')), default=40)
    print(f"\n{bold('Suggested commit message:')}")
    print(dim('─' * width))
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim('─' * width))


class TerminalMenu:
    """Interactive menu. Both prompts return None on Ctrl-C."""

    def choose(self, suggestion: str) -> Decision | None:
        display_message(suggestion)
        return questionary.select("Choose:", choices=CHOICES).ask()

    def edit(self, suggestion: str) -> str | None:
        multiline = '\n' in suggestion
        prompt = "Edit the message (Esc then Enter to commit):" if multiline \
            else "Type your commit subject and press Enter to commit:"
        return questionary.text(prompt, default=suggestion, multiline=multiline).ask()
