"""Chain registry, endpoint selection and fork policy."""

from .endpoints import EndpointSelector, managed_provider_url, mask_api_key
from .fork import FORK_BLOCK_NUMBERS, ForkingConfig, ForkPolicy, ForkSpec
from .registry import (
    CHAINS,
    DEFAULT_REGISTRY,
    LOCAL_CHAIN_ID,
    ChainDescriptor,
    ChainId,
    ChainRegistry,
)

__all__ = [
    "CHAINS",
    "DEFAULT_REGISTRY",
    "FORK_BLOCK_NUMBERS",
    "LOCAL_CHAIN_ID",
    "ChainDescriptor",
    "ChainId",
    "ChainRegistry",
    "EndpointSelector",
    "ForkPolicy",
    "ForkSpec",
    "ForkingConfig",
    "managed_provider_url",
    "mask_api_key",
]
