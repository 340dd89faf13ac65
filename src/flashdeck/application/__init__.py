# Application Package
from .decks import DeckManager
from .game_store import GameStore
from .profiles import PROFILES, GameProfile, get_profile
from .scoring import compute_points
from .selection import select_round

__all__ = [
    "DeckManager",
    "GameProfile",
    "GameStore",
    "PROFILES",
    "compute_points",
    "get_profile",
    "select_round",
]
