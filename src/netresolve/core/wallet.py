"""Signer accounts derived from resolved credentials."""

from abc import ABC, abstractmethod

from eth_account import Account
from eth_account.signers.local import LocalAccount

from netresolve.core.credentials import CredentialSet, DiscreteKeys, MnemonicPhrase

# Matches the local development node's default account derivation
DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0"
DEFAULT_ACCOUNT_COUNT = 20


class SignerProvider(ABC):
    """Abstract source of signing accounts."""

    @abstractmethod
    def get_accounts(self) -> list[LocalAccount]:
        """Get the signing accounts.

        Returns
        -------
        list[LocalAccount]
            Accounts in signer order; the first is the deployer.
        """
        ...

    @property
    def addresses(self) -> list[str]:
        """Get the checksummed signer addresses."""
        return [account.address for account in self.get_accounts()]


class DiscreteKeySigners(SignerProvider):
    """Signers loaded directly from the two discrete private keys.

    Parameters
    ----------
    credentials : DiscreteKeys
        The resolved discrete keys.
    """

    def __init__(self, credentials: DiscreteKeys):
        self._accounts = [
            Account.from_key(key.get_secret_value()) for key in credentials.keys
        ]

    def get_accounts(self) -> list[LocalAccount]:
        return list(self._accounts)


class MnemonicSigners(SignerProvider):
    """Signers derived from a mnemonic phrase along a BIP-44 path.

    Parameters
    ----------
    credentials : MnemonicPhrase
        The resolved mnemonic.
    count : int
        Number of accounts to derive.
    path : str
        Derivation path prefix; the account index is appended.

    Raises
    ------
    ValueError
        If count is not positive or the phrase is not a valid mnemonic.
    """

    def __init__(
        self,
        credentials: MnemonicPhrase,
        count: int = DEFAULT_ACCOUNT_COUNT,
        path: str = DEFAULT_DERIVATION_PATH,
    ):
        if count <= 0:
            raise ValueError(f"Account count must be positive, got {count}")
        Account.enable_unaudited_hdwallet_features()
        phrase = credentials.phrase.get_secret_value()
        self._accounts = [
            Account.from_mnemonic(phrase, account_path=f"{path}/{index}")
            for index in range(count)
        ]

    def get_accounts(self) -> list[LocalAccount]:
        return list(self._accounts)


def signer_provider(credentials: CredentialSet, count: int = DEFAULT_ACCOUNT_COUNT) -> SignerProvider:
    """Build the signer provider for the active credential mode."""
    if isinstance(credentials, DiscreteKeys):
        return DiscreteKeySigners(credentials)
    if isinstance(credentials, MnemonicPhrase):
        return MnemonicSigners(credentials, count=count)
    raise TypeError(f"Unsupported credentials: {type(credentials).__name__}")
