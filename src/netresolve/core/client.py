"""Web3 client factory for resolved networks."""

import logging

from web3 import Web3

from netresolve.core.assembler import NetworkConfig

logger = logging.getLogger(__name__)


def build_web3(network: NetworkConfig) -> Web3:
    """Create a Web3 instance for a resolved network.

    The provider is not contacted here; connection errors surface on the
    first request.

    Parameters
    ----------
    network : NetworkConfig
        The network whose URL and timeout configure the provider.

    Returns
    -------
    Web3
        An HTTP-backed Web3 instance.
    """
    if not network.url:
        raise ValueError(f"RPC URL for {network.name!r} must not be empty")
    provider = Web3.HTTPProvider(
        network.url, request_kwargs={"timeout": network.timeout_ms / 1000}
    )
    logger.debug(
        "Built HTTP provider for %s (%s) with %sms timeout",
        network.name,
        network.masked_url,
        network.timeout_ms,
    )
    return Web3(provider)
