from pathlib import Path

import pytest
from pydantic import ValidationError

from flashdeck.application.config import AppConfig, resolve_config


def test_defaults(mock_home):
    config = resolve_config()
    assert config.app == "vocabulary"
    assert config.round_size == 10
    assert config.data_dir == (mock_home / ".local/share/flashdeck").resolve()
    assert config.stats_enabled is False


def test_toml_file(mock_home):
    cfg_dir = mock_home / ".config/flashdeck"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "config.toml").write_text('app = "spelling"\nround_size = 5\n')

    config = resolve_config()
    assert config.app == "spelling"
    assert config.round_size == 5


def test_env_beats_file_and_cli_beats_env(mock_home, monkeypatch):
    (mock_home / ".flashdeck.toml").write_text('app = "spelling"\n')
    monkeypatch.setenv("FLASHDECK_APP", "multiplication")

    assert resolve_config().app == "multiplication"
    assert resolve_config({"app": "vocabulary", "data_dir": None}).app == "vocabulary"


def test_paths_are_expanded(mock_home):
    config = resolve_config({"data_dir": Path("~/decks")})
    assert config.data_dir == (mock_home / "decks").resolve()


@pytest.mark.parametrize("overrides", [{"round_size": 0}, {"app": "chess"}])
def test_invalid_values(mock_home, overrides):
    with pytest.raises(ValidationError):
        AppConfig(**overrides)
