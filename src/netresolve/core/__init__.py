"""Core netresolve components."""

from .assembler import (
    AssembledConfig,
    ConfigurationAssembler,
    FundedAccount,
    LocalChainConfig,
    NetworkConfig,
    assemble,
)
from .client import build_web3
from .credentials import (
    CredentialMode,
    CredentialSet,
    DiscreteKeys,
    MnemonicPhrase,
    resolve_credentials,
)
from .wallet import DiscreteKeySigners, MnemonicSigners, SignerProvider, signer_provider

__all__ = [
    "AssembledConfig",
    "ConfigurationAssembler",
    "CredentialMode",
    "CredentialSet",
    "DiscreteKeySigners",
    "DiscreteKeys",
    "FundedAccount",
    "LocalChainConfig",
    "MnemonicPhrase",
    "MnemonicSigners",
    "NetworkConfig",
    "SignerProvider",
    "assemble",
    "build_web3",
    "resolve_credentials",
    "signer_provider",
]
