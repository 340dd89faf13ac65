"""flashdeck: leveled flashcard games with a shared scoring engine."""

__version__ = "0.4.0"
