"""Fork pinning for the local development chain.

When a fork target is configured the local chain mirrors that chain's state.
Historical forking of some chains fails for certain block ranges, so
``FORK_BLOCK_NUMBERS`` pins those chains to a block known to work. Chains
without a pin fork from the latest block.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pydantic import SecretStr

from netresolve.chains.endpoints import EndpointSelector, mask_api_key
from netresolve.chains.registry import (
    DEFAULT_REGISTRY,
    LOCAL_CHAIN_ID,
    ChainId,
    ChainRegistry,
)
from netresolve.exceptions import InvalidForkTargetError, UnknownChainError

logger = logging.getLogger(__name__)

FORK_BLOCK_NUMBERS: Mapping[int, int] = MappingProxyType(
    {
        # 62_402_086 fails to fork
        ChainId.HEDERA_MAINNET: 62_617_300,
    }
)


@dataclass(frozen=True)
class ForkSpec:
    """Which chain the local chain mirrors, and from which block.

    ``pinned_block`` of None means the latest block.
    """

    target_chain_id: ChainId
    pinned_block: int | None = None


@dataclass(frozen=True)
class ForkingConfig:
    """Parameters used to initialize a forked local chain.

    ``api_key`` is the managed-provider key embedded in ``url``, if any.
    """

    url: str = field(repr=False)
    block_number: int | None = None
    api_key: SecretStr | None = field(default=None, repr=False, compare=False)

    def to_dict(self, reveal_secrets: bool = False) -> dict:
        url = self.url if reveal_secrets else mask_api_key(self.url, self.api_key)
        data: dict = {"url": url}
        if self.block_number is not None:
            data["blockNumber"] = self.block_number
        return data


class ForkPolicy:
    """Build fork parameters for the local chain.

    Parameters
    ----------
    selector : EndpointSelector
        Resolves the fork target's RPC URL.
    registry : ChainRegistry
        Chains that may be forked.
    pins : Mapping[int, int]
        Per-chain pinned block numbers.
    """

    def __init__(
        self,
        selector: EndpointSelector,
        registry: ChainRegistry = DEFAULT_REGISTRY,
        pins: Mapping[int, int] = FORK_BLOCK_NUMBERS,
    ):
        self._selector = selector
        self._registry = registry
        self._pins = pins

    def build_fork_spec(self, target: str | int | None) -> ForkSpec | None:
        """Resolve the configured fork target.

        Parameters
        ----------
        target : str | int | None
            Chain name or id to fork, or None to disable forking.

        Returns
        -------
        ForkSpec | None
            The fork spec, or None when forking is disabled.

        Raises
        ------
        InvalidForkTargetError
            If the target is unknown or is the local chain itself.
        """
        if target is None:
            return None

        try:
            descriptor = self._registry.lookup(target)
        except UnknownChainError:
            raise InvalidForkTargetError(target) from None

        if descriptor.chain_id == LOCAL_CHAIN_ID:
            raise InvalidForkTargetError(target, "cannot fork the local chain")

        pinned_block = self._pins.get(descriptor.chain_id)
        if pinned_block is not None and pinned_block < 0:
            raise InvalidForkTargetError(target, f"negative pinned block {pinned_block}")

        logger.info(
            "Forking %s at block %s",
            descriptor.name,
            pinned_block if pinned_block is not None else "latest",
        )
        return ForkSpec(target_chain_id=descriptor.chain_id, pinned_block=pinned_block)

    def forking_config(self, spec: ForkSpec) -> ForkingConfig:
        """Resolve the forking endpoint for a fork spec."""
        return ForkingConfig(
            url=self._selector.select_url(spec.target_chain_id),
            block_number=spec.pinned_block,
            api_key=self._selector.api_key,
        )
