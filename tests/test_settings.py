from fortune.core.game.config import SuitAwardPolicy
from fortune.settings import EngineSettings


def test_defaults():
    settings = EngineSettings(_env_file=None)
    config = settings.to_game_config()

    assert config.starting_cash == 2500
    assert config.fee_rate == 0.10
    assert config.max_rounds == 30
    assert config.suit_award_policy == SuitAwardPolicy.ON_PURCHASE


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FORTUNE_STARTING_CASH", "3000")
    monkeypatch.setenv("FORTUNE_SUIT_AWARD_POLICY", "on_owner_landing")
    monkeypatch.setenv("FORTUNE_LOG_LEVEL", "debug")

    settings = EngineSettings(_env_file=None)

    assert settings.starting_cash == 3000
    assert settings.suit_award_policy == SuitAwardPolicy.ON_OWNER_LANDING
    assert settings.log_level == "DEBUG"


def test_per_game_overrides_skip_none():
    settings = EngineSettings(_env_file=None, seed=5)
    config = settings.to_game_config(seed=None, max_rounds=4)

    assert config.seed == 5
    assert config.max_rounds == 4
