"""Decision Loop - present a suggestion until the user commits or cancels.

States::

    PRESENTING --use--------> COMMITTING --> DONE
    PRESENTING --edit-------> EDITING -----> COMMITTING --> DONE
    PRESENTING --regen------> REGENERATING -> PRESENTING
    PRESENTING --cancel-----> CANCELLED

Editing always commits; it never goes back to PRESENTING. Regeneration is a
fresh request with the same diff and has no limit.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """What the user picked from the menu."""
    USE = 'use'
    EDIT = 'edit'
    REGEN = 'regen'
    CANCEL = 'cancel'


class State(Enum):
    PRESENTING = 'presenting'
    EDITING = 'editing'
    REGENERATING = 'regenerating'
    COMMITTING = 'committing'
    CANCELLED = 'cancelled'
    DONE = 'done'


class Menu(Protocol):
    """Source of user decisions. None means the prompt was aborted."""

    def choose(self, suggestion: str) -> Decision | None: ...

    def edit(self, suggestion: str) -> str | None: ...


@dataclass
class LoopResult:
    """Where the loop ended and what was committed."""
    state: State
    message: str | None = None
    revision: str | None = None
    regenerations: int = 0

    @property
    def committed(self) -> bool:
        return self.state is State.DONE


class DecisionLoop:
    """Drives one suggestion through the menu until a terminal state.

    Args:
        suggest: returns a fresh suggestion for the captured diff
        commit: commits a message and returns the short revision id
        menu: asks the user; see ``Menu``
    """

    def __init__(self, suggest: Callable[[], str], commit: Callable[[str], str], menu: Menu):
        self.suggest = suggest
        self.commit = commit
        self.menu = menu
        self.state = State.PRESENTING

    def _enter(self, state: State) -> None:
        logger.debug("decision loop: %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self, suggestion: str) -> LoopResult:
        """Present ``suggestion`` and loop until DONE or CANCELLED.

        Errors from ``suggest`` and ``commit`` propagate unchanged.
        """
        self.state = State.PRESENTING
        regenerations = 0

        while True:
            decision = self.menu.choose(suggestion) or Decision.CANCEL

            match decision:
                case Decision.USE:
                    message = suggestion
                case Decision.EDIT:
                    self._enter(State.EDITING)
                    edited = self.menu.edit(suggestion)
                    if edited is None:
                        self._enter(State.CANCELLED)
                        return LoopResult(State.CANCELLED, regenerations=regenerations)
                    message = edited.strip() or suggestion
                case Decision.REGEN:
                    self._enter(State.REGENERATING)
                    suggestion = self.suggest()
                    regenerations += 1
                    self._enter(State.PRESENTING)
                    continue
                case Decision.CANCEL:
                    self._enter(State.CANCELLED)
                    return LoopResult(State.CANCELLED, regenerations=regenerations)
                case _:
                    raise ValueError(f"Unknown decision: {decision!r}")

            self._enter(State.COMMITTING)
            revision = self.commit(message)
            self._enter(State.DONE)
            return LoopResult(State.DONE, message=message, revision=revision, regenerations=regenerations)
