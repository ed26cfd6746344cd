"""
GXAccount SDK - Key Providers

Abstract interface for the signing keys used on certification requests,
with multiple backend implementations. Separates key storage/signing from
service logic so private keys never reach the request layer.
"""

import os
from abc import ABC, abstractmethod
from typing import Optional

from .constants import DEFAULT_ADDRESS_PREFIX, MERCHANT
from .errors import InvalidKeyError, MissingConfigError, MissingKeyError
from .infra.keys import PrivateKey


MERCHANT_KEY_ENV = "GXACCOUNT_MERCHANT_KEY"
DATASOURCE_KEY_ENV = "GXACCOUNT_DATASOURCE_KEY"


class KeyProvider(ABC):
    """
    Abstract base class for key providers.

    Implementations handle key storage and signing without exposing
    private keys to the SDK core.
    """

    @property
    @abstractmethod
    def public_key(self) -> str:
        """
        Get the public key string.

        Returns:
            Prefixed base58 public key (e.g. GXC6MRy...).
        """
        pass

    @abstractmethod
    def sign(self, message: str) -> str:
        """
        Sign a message.

        Args:
            message: Text to sign (canonical JSON for faucet requests).

        Returns:
            130-character hex compact signature.
        """
        pass


class _PrivateKeyProvider(KeyProvider):
    """Shared implementation for providers holding a local PrivateKey."""

    def __init__(self, wif: str, prefix: str = DEFAULT_ADDRESS_PREFIX):
        self._private_key = PrivateKey.from_wif(wif.strip())
        self._prefix = prefix

    @property
    def public_key(self) -> str:
        return self._private_key.public_key.to_string(self._prefix)

    def sign(self, message: str) -> str:
        return self._private_key.sign(message).to_hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(public_key={self.public_key[:16]}...)"


class EnvKeyProvider(_PrivateKeyProvider):
    """
    Key provider that reads a WIF key from an environment variable.

    Example:
        export GXACCOUNT_MERCHANT_KEY="5K..."

        provider = EnvKeyProvider("GXACCOUNT_MERCHANT_KEY")
        signature = provider.sign(message)
    """

    def __init__(self, env_var: str, prefix: str = DEFAULT_ADDRESS_PREFIX):
        """
        Args:
            env_var: Name of environment variable containing the WIF key.

        Raises:
            MissingConfigError: If environment variable is not set.
        """
        wif = os.environ.get(env_var)
        if not wif:
            raise MissingConfigError(
                f"Environment variable {env_var} not set. "
                f"Set it with: export {env_var}=<your-wif-key>",
                {"env_var": env_var}
            )
        super().__init__(wif, prefix)


class MemoryKeyProvider(_PrivateKeyProvider):
    """
    Key provider with key in memory.

    WARNING: Only use for testing or when the key is already in memory.
    """
    pass


class FileKeyProvider(_PrivateKeyProvider):
    """
    Key provider that reads from a file.

    WARNING: Only for development. The file should contain only the
    WIF-encoded private key.
    """

    def __init__(self, key_file_path: str, prefix: str = DEFAULT_ADDRESS_PREFIX):
        with open(key_file_path, "r") as f:
            wif = f.read()
        try:
            super().__init__(wif, prefix)
        except InvalidKeyError as e:
            raise InvalidKeyError(
                f"Key file does not contain a valid WIF key: {key_file_path}"
            ) from e


class KeyStore:
    """
    Signing keys by account type.

    Merchant requests are signed with the merchant key; every other
    account type uses the data-source key.
    """

    def __init__(
        self,
        merchant: Optional[KeyProvider] = None,
        datasource: Optional[KeyProvider] = None
    ):
        self.merchant = merchant
        self.datasource = datasource

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_ADDRESS_PREFIX) -> "KeyStore":
        """Load whichever keys are present in the environment."""
        merchant = EnvKeyProvider(MERCHANT_KEY_ENV, prefix) if os.environ.get(MERCHANT_KEY_ENV) else None
        datasource = EnvKeyProvider(DATASOURCE_KEY_ENV, prefix) if os.environ.get(DATASOURCE_KEY_ENV) else None
        return cls(merchant=merchant, datasource=datasource)

    def get(self, account_type: Optional[str]) -> KeyProvider:
        """
        Provider for an account type.

        Raises:
            MissingKeyError: No key configured for that type.
        """
        provider = self.merchant if account_type == MERCHANT else self.datasource
        if provider is None:
            raise MissingKeyError(account_type)
        return provider
