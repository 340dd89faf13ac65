"""Errors raised for engine/caller desynchronization.

User-input problems never raise; they are reported as boolean results.
"""


class FlashdeckError(Exception):
    """Base class for flashdeck errors."""


class GameStateError(FlashdeckError, RuntimeError):
    """The session state is inconsistent with the requested operation."""


class CardIndexError(GameStateError, IndexError):
    """A card index outside the current session's bounds was requested."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(
            f"Invalid card index {index} (valid range: 0-{length - 1}). "
            "This indicates a bug in the game state management."
        )
