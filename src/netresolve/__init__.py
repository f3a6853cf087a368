"""netresolve - multi-chain network configuration for deploy and test runs."""

from importlib.metadata import PackageNotFoundError, version

from .config import ApiKeyPolicy, ResolverConfig, load_config
from .core import AssembledConfig, LocalChainConfig, NetworkConfig, assemble
from .exceptions import (
    InvalidForkTargetError,
    MissingApiKeyError,
    MissingCredentialsError,
    ResolverError,
    UnknownChainError,
)

try:
    __version__ = version("netresolve")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "ApiKeyPolicy",
    "AssembledConfig",
    "InvalidForkTargetError",
    "LocalChainConfig",
    "MissingApiKeyError",
    "MissingCredentialsError",
    "NetworkConfig",
    "ResolverConfig",
    "ResolverError",
    "UnknownChainError",
    "assemble",
    "load_config",
]
