"""Pytest configuration and fixtures for netresolve tests."""

import os

import pytest

from netresolve.config import ResolverConfig

# Well-known development mnemonic and its first two derived accounts
# (DO NOT USE IN PRODUCTION)
TEST_MNEMONIC = "test test test test test test test test test test test junk"
TEST_KEY_1 = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_KEY_2 = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
TEST_ADDRESS_1 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TEST_ADDRESS_2 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
TEST_API_KEY = "ABC"

ENV_NAMES = (
    "MNEMONIC",
    "PRIVATE_KEY_1",
    "PRIVATE_KEY_2",
    "INFURA_API_KEY",
    "DOTENV_CONFIG_PATH",
    "ETHERSCAN_API_KEY",
    "ARBISCAN_API_KEY",
    "SNOWTRACE_API_KEY",
    "BSCSCAN_API_KEY",
    "OPTIMISM_API_KEY",
    "POLYGONSCAN_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Clear resolver environment variables and isolate from any .env file."""
    for key in list(os.environ.keys()):
        if key in ENV_NAMES or key.startswith("NETRESOLVE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_config():
    """Build a ResolverConfig from explicit environment values."""

    def _make(**env) -> ResolverConfig:
        return ResolverConfig(_env_file=None, **env)

    return _make


@pytest.fixture
def keys_config(make_config):
    """Config with both discrete keys and a managed-provider key."""
    return make_config(
        PRIVATE_KEY_1=TEST_KEY_1,
        PRIVATE_KEY_2=TEST_KEY_2,
        INFURA_API_KEY=TEST_API_KEY,
    )


@pytest.fixture
def mnemonic_config(make_config):
    """Config with only a mnemonic and a managed-provider key."""
    return make_config(MNEMONIC=TEST_MNEMONIC, INFURA_API_KEY=TEST_API_KEY)
