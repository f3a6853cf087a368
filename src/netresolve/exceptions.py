"""Exception classes raised while resolving network configuration."""


class ResolverError(Exception):
    """Base exception for configuration resolution errors."""

    pass


class MissingCredentialsError(ResolverError, ValueError):
    """Raised when neither discrete keys nor a mnemonic are configured."""

    pass


class MissingApiKeyError(ResolverError, ValueError):
    """Raised when a managed-provider URL is required but no API key is set."""

    pass


class UnknownChainError(ResolverError, LookupError):
    """Raised when a chain identifier or name is not in the registry."""

    def __init__(self, chain: int | str):
        self.chain = chain
        super().__init__(f"Unknown chain: {chain!r}")


class InvalidForkTargetError(ResolverError, ValueError):
    """Raised when the configured fork target is not a forkable chain."""

    def __init__(self, target: int | str, reason: str = "not a known chain"):
        self.target = target
        super().__init__(f"Invalid fork target {target!r}: {reason}")
