"""
Store Factory
Centralizes the wiring of profile, storage adapters and game store.
"""

from flashdeck.application.config import AppConfig
from flashdeck.application.game_store import GameStore
from flashdeck.application.profiles import GameProfile, get_profile
from flashdeck.domain.ports import CardStorage, SessionStorage
from flashdeck.infrastructure.adapters.json_storage import JsonCardStorage, JsonSessionStorage
from flashdeck.infrastructure.adapters.key_value import FileKeyValueStore, MemoryKeyValueStore
from flashdeck.infrastructure.stats_ping import StatsPingClient


def get_file_storage(config: AppConfig, profile: GameProfile) -> tuple[CardStorage, SessionStorage]:
    """
    Durable storage under ``data_dir``; session state under ``data_dir/session``.
    """
    durable = FileKeyValueStore(config.data_dir)
    transient = FileKeyValueStore(config.data_dir / "session")
    return (
        JsonCardStorage(durable, profile.name, default_decks=profile.default_decks),
        JsonSessionStorage(transient, profile.name),
    )


def get_memory_storage(profile: GameProfile) -> tuple[CardStorage, SessionStorage]:
    return (
        JsonCardStorage(MemoryKeyValueStore(), profile.name, default_decks=profile.default_decks),
        JsonSessionStorage(MemoryKeyValueStore(), profile.name),
    )


def get_game_store(config: AppConfig) -> GameStore:
    """
    Returns an initialized GameStore for the configured app.
    """
    profile = get_profile(config.app)
    storage, session_storage = get_file_storage(config, profile)
    store = GameStore(storage, session_storage, profile, round_size=config.round_size)
    store.initialize_store()
    return store


def get_stats_client(config: AppConfig) -> StatsPingClient | None:
    if not config.stats_enabled or not config.stats_url:
        return None
    return StatsPingClient(config.stats_url, origin=f"fc-{config.app}", timeout=config.stats_timeout)
