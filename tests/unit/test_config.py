"""Tests for zapper configuration."""

import pytest

from zapper.config import DEFAULT_ZAPPER_CONFIG, ZapperConfig
from zapper.constants import UNISWAP_V2_FACTORY, UNISWAP_V2_INIT_CODE_HASH

SUSHI_FACTORY = "0xc0aee478e3658e2610c5f7a4a2e1777ce9e4f2ac"
SUSHI_INIT_CODE_HASH = "0xe18a34eb0e04b04f7a0ac29a6e80748dca96319b42c520bfbd2d1f2fc1d0f9d1"


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "ZAPPER_FACTORY_ADDRESS",
        "ZAPPER_INIT_CODE_HASH",
        "ZAPPER_VERIFY_PAIR_ADDRESS",
        "ZAPPER_ROUND_UP_SWAP",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestZapperConfig:
    """Tests for ZapperConfig."""

    def test_defaults(self):
        assert DEFAULT_ZAPPER_CONFIG.factory_address == UNISWAP_V2_FACTORY
        assert DEFAULT_ZAPPER_CONFIG.init_code_hash == UNISWAP_V2_INIT_CODE_HASH
        assert DEFAULT_ZAPPER_CONFIG.verify_pair_address is True
        assert DEFAULT_ZAPPER_CONFIG.round_up_optimal_swap is False

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_ZAPPER_CONFIG.round_up_optimal_swap = True  # type: ignore[misc]

    def test_invalid_factory_raises(self):
        with pytest.raises(ValueError, match="Invalid address"):
            ZapperConfig(factory_address="0x1234")

    @pytest.mark.parametrize("code_hash", ["0x1234", "96e8ac42" * 8, "0x" + "zz" * 32])
    def test_invalid_init_code_hash_raises(self, code_hash):
        with pytest.raises(ValueError):
            ZapperConfig(init_code_hash=code_hash)


class TestFromEnv:
    """Tests for ZapperConfig.from_env()."""

    def test_empty_environment_gives_defaults(self, clean_env):
        assert ZapperConfig.from_env() == DEFAULT_ZAPPER_CONFIG

    def test_reads_fork_settings(self, clean_env):
        clean_env.setenv("ZAPPER_FACTORY_ADDRESS", SUSHI_FACTORY)
        clean_env.setenv("ZAPPER_INIT_CODE_HASH", SUSHI_INIT_CODE_HASH)

        config = ZapperConfig.from_env()

        assert config.factory_address == SUSHI_FACTORY
        assert config.init_code_hash == SUSHI_INIT_CODE_HASH

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False)])
    def test_boolean_flags(self, clean_env, value, expected):
        clean_env.setenv("ZAPPER_VERIFY_PAIR_ADDRESS", value)
        clean_env.setenv("ZAPPER_ROUND_UP_SWAP", value)

        config = ZapperConfig.from_env()

        assert config.verify_pair_address is expected
        assert config.round_up_optimal_swap is expected

    def test_invalid_factory_in_environment_raises(self, clean_env):
        clean_env.setenv("ZAPPER_FACTORY_ADDRESS", "not-an-address")
        with pytest.raises(ValueError):
            ZapperConfig.from_env()
