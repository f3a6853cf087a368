"""Signer credential resolution.

Exactly one credential mode is active per process: two discrete private keys,
or a mnemonic phrase. Discrete keys win when both pairs of inputs are set.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from pydantic import SecretStr

from netresolve.config import ResolverConfig
from netresolve.exceptions import MissingCredentialsError

logger = logging.getLogger(__name__)


class CredentialMode(str, Enum):
    """Active credential mode."""

    DISCRETE_KEYS = "discrete_keys"
    MNEMONIC = "mnemonic"


@dataclass(frozen=True)
class DiscreteKeys:
    """Two private keys used directly as signers."""

    key1: SecretStr
    key2: SecretStr

    mode = CredentialMode.DISCRETE_KEYS

    @property
    def keys(self) -> tuple[SecretStr, SecretStr]:
        return (self.key1, self.key2)


@dataclass(frozen=True)
class MnemonicPhrase:
    """A mnemonic phrase signers are derived from."""

    phrase: SecretStr

    mode = CredentialMode.MNEMONIC


CredentialSet = DiscreteKeys | MnemonicPhrase


def resolve_credentials(config: ResolverConfig) -> CredentialSet:
    """Select the credential mode from configured secrets.

    Parameters
    ----------
    config : ResolverConfig
        Configuration holding the mnemonic and discrete keys.

    Returns
    -------
    CredentialSet
        ``DiscreteKeys`` if both keys are set, otherwise ``MnemonicPhrase``.

    Raises
    ------
    MissingCredentialsError
        If neither both keys nor a mnemonic are set.
    """
    key1, key2 = config.private_key_1, config.private_key_2

    if key1 is not None and key2 is not None:
        logger.info("Using discrete private keys for signing")
        return DiscreteKeys(key1=key1, key2=key2)

    if (key1 is None) != (key2 is None):
        logger.warning(
            "Only one of PRIVATE_KEY_1 and PRIVATE_KEY_2 is set; ignoring discrete keys"
        )

    if config.mnemonic is not None:
        logger.info("Using mnemonic phrase for signing")
        return MnemonicPhrase(phrase=config.mnemonic)

    raise MissingCredentialsError(
        "No signer credentials configured. Set PRIVATE_KEY_1 and PRIVATE_KEY_2, or MNEMONIC"
    )
