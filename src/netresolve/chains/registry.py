"""Registry of supported chains.

One ``ChainDescriptor`` per ``ChainId`` holds the display name, managed
provider support and ordered public fallback endpoints. Operators edit
``CHAINS`` when a public endpoint becomes unreliable.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from netresolve.exceptions import UnknownChainError


class ChainId(IntEnum):
    """Closed set of supported chain identifiers."""

    ETHEREUM_MAINNET = 1
    OPTIMISM_MAINNET = 10
    BSC_MAINNET = 56
    POLYGON_MAINNET = 137
    HEDERA_MAINNET = 295
    GANACHE = 1337
    HARDHAT = 31337
    ARBITRUM_MAINNET = 42161
    AVALANCHE_MAINNET = 43114
    POLYGON_MUMBAI = 80001
    SEPOLIA = 11155111


# Identifier of the in-process development chain when it is not forking.
LOCAL_CHAIN_ID = ChainId.HARDHAT


@dataclass(frozen=True)
class ChainDescriptor:
    """Static description of a supported chain.

    Attributes
    ----------
    chain_id : ChainId
        The chain identifier.
    name : str
        Display name, also used as the network name and managed-provider subdomain.
    managed_provider_supported : bool
        Whether the managed RPC provider serves this chain.
    fallback_urls : tuple[str, ...]
        Public endpoints in order of preference. Never empty.
    """

    chain_id: ChainId
    name: str
    managed_provider_supported: bool
    fallback_urls: tuple[str, ...]

    def __post_init__(self):
        if not self.fallback_urls or not all(self.fallback_urls):
            raise ValueError(f"Chain {self.name!r} needs at least one non-empty fallback URL")

    @property
    def default_url(self) -> str:
        return self.fallback_urls[0]


CHAINS: tuple[ChainDescriptor, ...] = (
    ChainDescriptor(
        ChainId.ETHEREUM_MAINNET,
        "mainnet",
        managed_provider_supported=True,
        fallback_urls=("https://eth.llamarpc.com",),
    ),
    ChainDescriptor(
        ChainId.OPTIMISM_MAINNET,
        "optimism",
        managed_provider_supported=True,
        fallback_urls=("https://optimism.llamarpc.com",),
    ),
    ChainDescriptor(
        ChainId.BSC_MAINNET,
        "bsc",
        managed_provider_supported=False,
        fallback_urls=(
            "https://bsc-dataseed.bnbchain.org",
            "https://getblock.io/nodes/bsc",
            "https://binance.llamarpc.com",
            "https://rpc.ankr.com/bsc",
        ),
    ),
    ChainDescriptor(
        ChainId.POLYGON_MAINNET,
        "polygon",
        managed_provider_supported=True,
        fallback_urls=("https://polygon.llamarpc.com",),
    ),
    ChainDescriptor(
        ChainId.HEDERA_MAINNET,
        "hedera",
        managed_provider_supported=False,
        fallback_urls=("https://mainnet.hashio.io/api",),
    ),
    ChainDescriptor(
        ChainId.GANACHE,
        "ganache",
        managed_provider_supported=False,
        fallback_urls=("http://localhost:8545",),
    ),
    ChainDescriptor(
        ChainId.HARDHAT,
        "hardhat",
        managed_provider_supported=False,
        fallback_urls=("http://127.0.0.1:8545",),
    ),
    ChainDescriptor(
        ChainId.ARBITRUM_MAINNET,
        "arbitrum",
        managed_provider_supported=True,
        fallback_urls=("https://arbitrum.llamarpc.com",),
    ),
    ChainDescriptor(
        ChainId.AVALANCHE_MAINNET,
        "avalanche",
        managed_provider_supported=True,
        fallback_urls=(
            "https://avalanche-mainnet-rpc.allthatnode.com",
            "https://rpc.ankr.com/avalanche",
            "https://1rpc.io/avax/c",
            "https://api.avax.network/ext/bc/C/rpc",
            "https://avalanche.public-rpc.com",
            "https://avalanche-c-chain.publicnode.com",
            "https://avalanche.blockpi.network/v1/rpc/public",
            "https://avalanche.drpc.org",
        ),
    ),
    ChainDescriptor(
        ChainId.POLYGON_MUMBAI,
        "polygon-mumbai",
        managed_provider_supported=False,
        fallback_urls=("https://polygon-testnet.public.blastapi.io",),
    ),
    ChainDescriptor(
        ChainId.SEPOLIA,
        "sepolia",
        managed_provider_supported=False,
        fallback_urls=("https://1rpc.io/sepolia",),
    ),
)


class ChainRegistry:
    """Read-only lookup over a set of chain descriptors.

    Parameters
    ----------
    descriptors : Iterable[ChainDescriptor]
        The chains to serve. Identifiers and names must be unique.
    """

    def __init__(self, descriptors: Iterable[ChainDescriptor] = CHAINS):
        by_id: dict[int, ChainDescriptor] = {}
        by_name: dict[str, ChainDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.chain_id in by_id:
                raise ValueError(f"Duplicate chain id {int(descriptor.chain_id)}")
            if descriptor.name in by_name:
                raise ValueError(f"Duplicate chain name {descriptor.name!r}")
            by_id[descriptor.chain_id] = descriptor
            by_name[descriptor.name] = descriptor
        self._by_id: Mapping[int, ChainDescriptor] = MappingProxyType(by_id)
        self._by_name: Mapping[str, ChainDescriptor] = MappingProxyType(by_name)

    def describe(self, chain_id: int) -> ChainDescriptor:
        """Get the descriptor for a chain.

        Raises
        ------
        UnknownChainError
            If the chain is not registered.
        """
        try:
            return self._by_id[chain_id]
        except (KeyError, TypeError):
            raise UnknownChainError(chain_id) from None

    def by_name(self, name: str) -> ChainDescriptor:
        """Get the descriptor for a network name (case-insensitive)."""
        try:
            return self._by_name[name.lower()]
        except KeyError:
            raise UnknownChainError(name) from None

    def lookup(self, name_or_id: str | int) -> ChainDescriptor:
        """Resolve a network name or numeric chain id to its descriptor."""
        if isinstance(name_or_id, int):
            return self.describe(name_or_id)
        value = str(name_or_id).strip()
        if value.isdecimal():
            return self.describe(int(value))
        return self.by_name(value)

    def all_chain_ids(self) -> frozenset[ChainId]:
        return frozenset(d.chain_id for d in self._by_id.values())

    def __iter__(self):
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, chain_id: object) -> bool:
        return chain_id in self._by_id


DEFAULT_REGISTRY = ChainRegistry()
