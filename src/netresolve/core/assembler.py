"""Assembly of per-chain and local network configuration.

``assemble()`` is the single initialization entry point. It resolves
credentials, selects an RPC endpoint for every registered chain and builds
the local development chain entry, optionally forked from a remote chain.
The result is immutable; a reload builds a new value rather than mutating
the old one.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pydantic import SecretStr

from netresolve.chains.endpoints import EndpointSelector, mask_api_key
from netresolve.chains.fork import FORK_BLOCK_NUMBERS, ForkingConfig, ForkPolicy
from netresolve.chains.registry import DEFAULT_REGISTRY, LOCAL_CHAIN_ID, ChainId, ChainRegistry
from netresolve.config import ApiKeyPolicy, ResolverConfig, load_config
from netresolve.core.credentials import (
    CredentialSet,
    DiscreteKeys,
    MnemonicPhrase,
    resolve_credentials,
)
from netresolve.exceptions import MissingApiKeyError, UnknownChainError

logger = logging.getLogger(__name__)

# Some chains (Hedera) respond slower than the deploy tool's default timeout
DEFAULT_TIMEOUT_MS = 60_000

# 1000 ether
LOCAL_ACCOUNT_BALANCE_WEI = 10**21

# Same activation history for every chain the local node simulates
HARDFORK_HISTORY: Mapping[str, int] = MappingProxyType({"london": 1})

# Secondary test networks that sign with the mnemonic whenever one is set
MNEMONIC_NETWORKS = frozenset({ChainId.GANACHE})

# Verifier network name -> ResolverConfig field
EXPLORER_API_KEY_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        "arbitrumOne": "arbiscan_api_key",
        "avalanche": "snowtrace_api_key",
        "bsc": "bscscan_api_key",
        "mainnet": "etherscan_api_key",
        "optimisticEthereum": "optimism_api_key",
        "polygon": "polygonscan_api_key",
        "polygonMumbai": "polygonscan_api_key",
        "sepolia": "etherscan_api_key",
    }
)


def _secret(value: SecretStr | None, reveal: bool) -> str:
    if value is None:
        return ""
    return value.get_secret_value() if reveal else str(value)


def _accounts_entry(credentials: CredentialSet, reveal: bool) -> list | dict:
    if isinstance(credentials, DiscreteKeys):
        return [_secret(key, reveal) for key in credentials.keys]
    return {"mnemonic": _secret(credentials.phrase, reveal)}


@dataclass(frozen=True)
class NetworkConfig:
    """Connection parameters for one chain.

    ``api_key`` is the managed-provider key embedded in ``url``, if any. The
    raw URL is kept out of ``repr``; use ``masked_url`` for display.
    """

    chain_id: ChainId
    name: str
    url: str = field(repr=False)
    credentials: CredentialSet
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    api_key: SecretStr | None = field(default=None, repr=False, compare=False)

    @property
    def masked_url(self) -> str:
        return mask_api_key(self.url, self.api_key)

    def to_dict(self, reveal_secrets: bool = False) -> dict:
        """Render as a deploy-tool network entry.

        Secrets are masked unless ``reveal_secrets`` is set.
        """
        return {
            "chainId": int(self.chain_id),
            "url": self.url if reveal_secrets else self.masked_url,
            "accounts": _accounts_entry(self.credentials, reveal_secrets),
            "timeout": self.timeout_ms,
        }


@dataclass(frozen=True)
class FundedAccount:
    """A local chain account seeded with a starting balance."""

    private_key: SecretStr
    balance_wei: int = LOCAL_ACCOUNT_BALANCE_WEI


@dataclass(frozen=True)
class LocalChainConfig(NetworkConfig):
    """The local development chain.

    Attributes
    ----------
    funded_accounts : tuple[FundedAccount, ...]
        Pre-funded accounts when signing with discrete keys; empty when
        accounts are derived from the mnemonic.
    chains : Mapping[int, Mapping[str, int]]
        Hard-fork activation history per simulated chain.
    forking : ForkingConfig | None
        Fork source, or None for a fresh chain.
    """

    funded_accounts: tuple[FundedAccount, ...] = ()
    chains: Mapping[int, Mapping[str, int]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    forking: ForkingConfig | None = None

    @property
    def is_fork(self) -> bool:
        return self.forking is not None

    def to_dict(self, reveal_secrets: bool = False) -> dict:
        if self.funded_accounts:
            accounts: list | dict = [
                {
                    "privateKey": _secret(account.private_key, reveal_secrets),
                    "balance": str(account.balance_wei),
                }
                for account in self.funded_accounts
            ]
        else:
            accounts = _accounts_entry(self.credentials, reveal_secrets)

        data = {
            "chainId": int(self.chain_id),
            "accounts": accounts,
            "chains": {
                int(chain_id): {"hardforkHistory": dict(history)}
                for chain_id, history in self.chains.items()
            },
        }
        if self.forking is not None:
            data["forking"] = self.forking.to_dict(reveal_secrets)
        return data


@dataclass(frozen=True)
class AssembledConfig:
    """Resolved configuration for every supported chain plus the local chain."""

    per_chain: Mapping[ChainId, NetworkConfig]
    local: LocalChainConfig
    explorer_api_keys: Mapping[str, SecretStr | None] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def credentials(self) -> CredentialSet:
        return self.local.credentials

    def networks(self) -> dict[str, NetworkConfig]:
        """Get every network keyed by name; the local chain's name maps to ``local``."""
        by_name: dict[str, NetworkConfig] = {
            network.name: network for network in self.per_chain.values()
        }
        by_name[self.local.name] = self.local
        return by_name

    def network(self, name: str) -> NetworkConfig:
        """Get one network by name.

        Raises
        ------
        UnknownChainError
            If no network has that name.
        """
        try:
            return self.networks()[name.lower()]
        except KeyError:
            raise UnknownChainError(name) from None

    def to_dict(self, reveal_secrets: bool = False) -> dict:
        return {
            "defaultNetwork": self.local.name,
            "networks": {
                name: network.to_dict(reveal_secrets)
                for name, network in self.networks().items()
            },
            "etherscan": {
                "apiKey": {
                    name: _secret(key, reveal_secrets)
                    for name, key in self.explorer_api_keys.items()
                }
            },
        }


class ConfigurationAssembler:
    """Compose credentials, endpoints and fork policy into an ``AssembledConfig``.

    Parameters
    ----------
    config : ResolverConfig
        Environment-supplied secrets and options.
    registry : ChainRegistry
        Supported chains.
    fork_pins : Mapping[int, int]
        Per-chain pinned fork blocks.
    """

    def __init__(
        self,
        config: ResolverConfig,
        registry: ChainRegistry = DEFAULT_REGISTRY,
        fork_pins: Mapping[int, int] = FORK_BLOCK_NUMBERS,
    ):
        self._config = config
        self._registry = registry
        self._fork_pins = fork_pins

    def assemble(self) -> AssembledConfig:
        """Resolve the full configuration.

        Raises
        ------
        MissingCredentialsError
            If no credential mode can be resolved.
        MissingApiKeyError
            If the managed provider is needed and no API key is set.
        InvalidForkTargetError
            If the configured fork target is not forkable.
        UnknownChainError
            If a chain is missing from the registry.
        """
        config = self._config
        credentials = resolve_credentials(config)

        selector = EndpointSelector(
            api_key=config.infura_api_key,
            registry=self._registry,
            allow_fallback=config.api_key_policy == ApiKeyPolicy.FALLBACK,
        )
        if (
            config.api_key_policy == ApiKeyPolicy.EAGER
            and not selector.has_api_key
            and selector.requires_api_key()
        ):
            raise MissingApiKeyError("No managed RPC provider key configured. Set INFURA_API_KEY")

        fork_policy = ForkPolicy(selector, registry=self._registry, pins=self._fork_pins)
        fork_spec = fork_policy.build_fork_spec(config.fork_chain)

        per_chain: dict[ChainId, NetworkConfig] = {}
        for chain_id in sorted(self._registry.all_chain_ids()):
            descriptor = self._registry.describe(chain_id)
            per_chain[chain_id] = NetworkConfig(
                chain_id=descriptor.chain_id,
                name=descriptor.name,
                url=selector.select_url(chain_id),
                credentials=self._network_credentials(chain_id, credentials),
                timeout_ms=config.network_timeout_ms,
                api_key=config.infura_api_key,
            )

        local_descriptor = self._registry.describe(LOCAL_CHAIN_ID)
        forking = fork_policy.forking_config(fork_spec) if fork_spec is not None else None
        local = LocalChainConfig(
            chain_id=fork_spec.target_chain_id if fork_spec is not None else LOCAL_CHAIN_ID,
            name=local_descriptor.name,
            url=local_descriptor.default_url,
            credentials=credentials,
            timeout_ms=config.network_timeout_ms,
            funded_accounts=self._funded_accounts(credentials),
            chains=MappingProxyType(
                {chain_id: HARDFORK_HISTORY for chain_id in sorted(self._registry.all_chain_ids())}
            ),
            forking=forking,
        )

        explorer_api_keys = MappingProxyType(
            {name: getattr(config, attr) for name, attr in EXPLORER_API_KEY_FIELDS.items()}
        )

        logger.info(
            "Assembled %d networks (credentials: %s, local chain id: %d)",
            len(per_chain),
            credentials.mode.value,
            local.chain_id,
        )
        return AssembledConfig(
            per_chain=MappingProxyType(per_chain),
            local=local,
            explorer_api_keys=explorer_api_keys,
        )

    def _network_credentials(self, chain_id: ChainId, credentials: CredentialSet) -> CredentialSet:
        if chain_id in MNEMONIC_NETWORKS and self._config.mnemonic is not None:
            return MnemonicPhrase(phrase=self._config.mnemonic)
        return credentials

    @staticmethod
    def _funded_accounts(credentials: CredentialSet) -> tuple[FundedAccount, ...]:
        if isinstance(credentials, DiscreteKeys):
            return tuple(FundedAccount(private_key=key) for key in credentials.keys)
        return ()


def assemble(
    config: ResolverConfig | None = None,
    registry: ChainRegistry = DEFAULT_REGISTRY,
) -> AssembledConfig:
    """Build the network configuration once for this process.

    Parameters
    ----------
    config : ResolverConfig | None
        Explicit settings; loaded from the environment when omitted.
    registry : ChainRegistry
        Supported chains.

    Returns
    -------
    AssembledConfig
        Immutable configuration for every chain and the local chain.
    """
    if config is None:
        config = load_config()
    return ConfigurationAssembler(config, registry=registry).assemble()
