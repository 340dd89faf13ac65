"""Deck management: add, rename and remove named card collections."""

import logging
from collections.abc import Callable
from dataclasses import replace

from flashdeck.domain.models import Card, Deck
from flashdeck.domain.ports import CardStorage

logger = logging.getLogger(__name__)


class DeckManager:
    """
    CRUD over the decks held by a CardStorage.

    Invariants: deck names are unique, and at least one deck always exists.
    Failed operations return False and write nothing.
    """

    def __init__(
        self,
        storage: CardStorage,
        new_deck_cards: Callable[[], list[Card]] | None = None,
    ):
        """
        Args:
            storage: The persistence port holding decks and settings.
            new_deck_cards: Optional factory for the cards of a new deck;
                new decks start empty when not provided.
        """
        self._storage = storage
        self._new_deck_cards = new_deck_cards

    def get_decks(self) -> list[Deck]:
        return self._storage.load_decks()

    def deck_names(self) -> list[str]:
        return [deck.name for deck in self._storage.load_decks()]

    def add_deck(self, name: str) -> bool:
        decks = self._storage.load_decks()
        if any(d.name == name for d in decks):
            logger.info(f"[decks] Not adding '{name}': name already taken")
            return False

        cards = self._new_deck_cards() if self._new_deck_cards else []
        decks.append(Deck(name=name, cards=cards))
        self._storage.save_decks(decks)
        logger.info(f"[decks] Added '{name}'")
        return True

    def rename_deck(self, old_name: str, new_name: str) -> bool:
        decks = self._storage.load_decks()
        if any(d.name == new_name for d in decks):
            logger.info(f"[decks] Not renaming to '{new_name}': name already taken")
            return False

        deck = next((d for d in decks if d.name == old_name), None)
        if deck is None:
            logger.info(f"[decks] Not renaming '{old_name}': no such deck")
            return False

        deck.name = new_name
        self._storage.save_decks(decks)

        settings = self._storage.load_settings()
        if settings is not None and settings.deck == old_name:
            self._storage.save_settings(replace(settings, deck=new_name))
        logger.info(f"[decks] Renamed '{old_name}' -> '{new_name}'")
        return True

    def remove_deck(self, name: str) -> bool:
        decks = self._storage.load_decks()
        if len(decks) <= 1:
            logger.info(f"[decks] Not removing '{name}': the last deck cannot be removed")
            return False

        remaining = [d for d in decks if d.name != name]
        if len(remaining) == len(decks):
            logger.info(f"[decks] Not removing '{name}': no such deck")
            return False

        self._storage.save_decks(remaining)

        settings = self._storage.load_settings()
        if settings is not None and settings.deck == name:
            self._storage.save_settings(replace(settings, deck=remaining[0].name))
        logger.info(f"[decks] Removed '{name}'")
        return True
