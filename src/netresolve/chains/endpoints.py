"""RPC endpoint selection.

Selection is static string construction from registry data. No endpoint is
contacted and there is no failover between fallback URLs; an unreachable URL
surfaces as an error from the network client.
"""

import logging

from pydantic import SecretStr

from netresolve.chains.registry import DEFAULT_REGISTRY, ChainRegistry
from netresolve.exceptions import MissingApiKeyError

logger = logging.getLogger(__name__)

MANAGED_PROVIDER_HOST = "infura.io"


def managed_provider_url(chain_name: str, api_key: str) -> str:
    """Build the managed-provider URL for a chain.

    Parameters
    ----------
    chain_name : str
        The chain's display name (used as the subdomain).
    api_key : str
        The managed-provider API key.

    Returns
    -------
    str
        The API-key-scoped RPC URL.
    """
    return f"https://{chain_name}.{MANAGED_PROVIDER_HOST}/v3/{api_key}"


def mask_api_key(url: str, api_key: SecretStr | None) -> str:
    """Replace the managed-provider API key at the end of a URL with its mask.

    URLs that do not end in the key are returned unchanged.
    """
    if api_key is None:
        return url
    key = api_key.get_secret_value()
    if not key or not url.endswith(f"/v3/{key}"):
        return url
    return url[: -len(key)] + str(api_key)


class EndpointSelector:
    """Choose one RPC URL per chain.

    Parameters
    ----------
    api_key : SecretStr | None
        Managed-provider API key, if configured.
    registry : ChainRegistry
        Chains to select endpoints for.
    allow_fallback : bool
        Use the first public fallback URL for managed chains when no API key
        is configured, instead of raising ``MissingApiKeyError``.
    """

    def __init__(
        self,
        api_key: SecretStr | None = None,
        registry: ChainRegistry = DEFAULT_REGISTRY,
        allow_fallback: bool = False,
    ):
        self._api_key = api_key
        self._registry = registry
        self._allow_fallback = allow_fallback

    @property
    def api_key(self) -> SecretStr | None:
        return self._api_key

    @property
    def has_api_key(self) -> bool:
        return self._api_key is not None and bool(self._api_key.get_secret_value())

    def requires_api_key(self) -> bool:
        """Check whether any registered chain is served by the managed provider."""
        return any(d.managed_provider_supported for d in self._registry)

    def select_url(self, chain_id: int) -> str:
        """Get the RPC URL for a chain.

        Parameters
        ----------
        chain_id : int
            The chain to select an endpoint for.

        Returns
        -------
        str
            The managed-provider URL when supported and keyed, else the first
            fallback URL.

        Raises
        ------
        UnknownChainError
            If the chain is not registered.
        MissingApiKeyError
            If the chain uses the managed provider, no API key is configured
            and fallback is not allowed.
        """
        descriptor = self._registry.describe(chain_id)
        if not descriptor.managed_provider_supported:
            return descriptor.default_url

        if self.has_api_key:
            return managed_provider_url(descriptor.name, self._api_key.get_secret_value())

        if not self._allow_fallback:
            raise MissingApiKeyError(
                f"Chain {descriptor.name!r} uses the managed RPC provider. Set INFURA_API_KEY"
            )

        logger.warning(
            "No managed-provider API key; using public endpoint for %s", descriptor.name
        )
        return descriptor.default_url
