import random
from datetime import datetime, timezone

import pytest

from flashdeck.application.factory import get_memory_storage
from flashdeck.application.game_store import GameStore
from flashdeck.application.profiles import VOCABULARY
from flashdeck.domain.models import Card

FIXED_NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


def _make_cards(*specs: tuple[str, int]) -> list[Card]:
    return [Card(key=key, answer=key.lower(), level=level) for key, level in specs]


@pytest.fixture
def make_cards():
    """Factory building cards from (key, level) pairs."""
    return _make_cards


@pytest.fixture
def now():
    """The fixed clock reading of the store fixture."""
    return FIXED_NOW


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def storages():
    """In-memory durable and session storage seeded with the vocabulary decks."""
    return get_memory_storage(VOCABULARY)


@pytest.fixture
def store(storages, rng):
    storage, session_storage = storages
    s = GameStore(storage, session_storage, VOCABULARY, rng=rng, clock=lambda: FIXED_NOW)
    s.initialize_store()
    return s


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for var in ("FLASHDECK_APP", "FLASHDECK_DATA_DIR", "FLASHDECK_ROUND_SIZE"):
        monkeypatch.delenv(var, raising=False)
    return home
