"""Configuration management for netresolve using Pydantic Settings."""

import os
from enum import Enum
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENV_FILE = ".env"


class ApiKeyPolicy(str, Enum):
    """How a missing managed-provider API key is handled."""

    EAGER = "eager"
    FALLBACK = "fallback"


class ResolverConfig(BaseSettings):
    """Secrets and options loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        extra="ignore",
    )

    # Credentials
    mnemonic: SecretStr | None = Field(default=None, alias="MNEMONIC")
    private_key_1: SecretStr | None = Field(default=None, alias="PRIVATE_KEY_1")
    private_key_2: SecretStr | None = Field(default=None, alias="PRIVATE_KEY_2")

    # Managed RPC provider
    infura_api_key: SecretStr | None = Field(default=None, alias="INFURA_API_KEY")
    api_key_policy: ApiKeyPolicy = Field(
        default=ApiKeyPolicy.EAGER, alias="NETRESOLVE_API_KEY_POLICY"
    )

    # Networks
    fork_chain: str | None = Field(default=None, alias="NETRESOLVE_FORK_CHAIN")
    network_timeout_ms: int = Field(default=60_000, alias="NETRESOLVE_NETWORK_TIMEOUT_MS", gt=0)

    # Block explorer verification (passed through)
    etherscan_api_key: SecretStr | None = Field(default=None, alias="ETHERSCAN_API_KEY")
    arbiscan_api_key: SecretStr | None = Field(default=None, alias="ARBISCAN_API_KEY")
    snowtrace_api_key: SecretStr | None = Field(default=None, alias="SNOWTRACE_API_KEY")
    bscscan_api_key: SecretStr | None = Field(default=None, alias="BSCSCAN_API_KEY")
    optimism_api_key: SecretStr | None = Field(default=None, alias="OPTIMISM_API_KEY")
    polygonscan_api_key: SecretStr | None = Field(default=None, alias="POLYGONSCAN_API_KEY")

    # Observability
    log_level: str = Field(default="INFO", alias="NETRESOLVE_LOG_LEVEL")
    log_format: str = Field(default="text", alias="NETRESOLVE_LOG_FORMAT")

    @field_validator(
        "mnemonic",
        "private_key_1",
        "private_key_2",
        "infura_api_key",
        "etherscan_api_key",
        "arbiscan_api_key",
        "snowtrace_api_key",
        "bscscan_api_key",
        "optimism_api_key",
        "polygonscan_api_key",
        "fork_chain",
        mode="before",
    )
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


def load_config(env_file: str | Path | None = None) -> ResolverConfig:
    """Load configuration from the environment and a dotenv file.

    Parameters
    ----------
    env_file : str | Path | None
        Dotenv file to read. Defaults to ``DOTENV_CONFIG_PATH`` or ``.env``.

    Returns
    -------
    ResolverConfig
        The loaded configuration.
    """
    if env_file is None:
        env_file = os.environ.get("DOTENV_CONFIG_PATH") or DEFAULT_ENV_FILE
    return ResolverConfig(_env_file=env_file)
