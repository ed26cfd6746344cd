"""
Unit tests for signing key providers and the key store.
"""

import pytest

from gxaccount.errors import InvalidKeyError, MissingConfigError, MissingKeyError
from gxaccount.infra.keys import PrivateKey, Signature
from gxaccount.providers import (
    EnvKeyProvider,
    FileKeyProvider,
    KeyStore,
    MemoryKeyProvider,
)


class TestProviders:

    @pytest.mark.unit
    def test_memory_provider_signs(self, merchant_key):
        provider = MemoryKeyProvider(merchant_key.to_wif())

        signature = Signature.from_hex(provider.sign("hello"))

        assert signature.recover_public_key("hello") == merchant_key.public_key
        assert provider.public_key == merchant_key.public_key.to_string()

    @pytest.mark.unit
    def test_memory_provider_rejects_bad_wif(self):
        with pytest.raises(InvalidKeyError):
            MemoryKeyProvider("garbage")

    @pytest.mark.unit
    def test_env_provider(self, monkeypatch, merchant_key):
        monkeypatch.setenv("TEST_SIGNING_KEY", merchant_key.to_wif())
        provider = EnvKeyProvider("TEST_SIGNING_KEY")
        assert provider.public_key == merchant_key.public_key.to_string()

    @pytest.mark.unit
    def test_env_provider_missing_var(self, monkeypatch):
        monkeypatch.delenv("TEST_SIGNING_KEY", raising=False)
        with pytest.raises(MissingConfigError, match="TEST_SIGNING_KEY"):
            EnvKeyProvider("TEST_SIGNING_KEY")

    @pytest.mark.unit
    def test_file_provider_strips_newline(self, tmp_path, merchant_key):
        path = tmp_path / "merchant.key"
        path.write_text(merchant_key.to_wif() + "\n")

        provider = FileKeyProvider(str(path))

        assert provider.public_key == merchant_key.public_key.to_string()

    @pytest.mark.unit
    def test_file_provider_bad_contents(self, tmp_path):
        path = tmp_path / "merchant.key"
        path.write_text("not a key")

        with pytest.raises(InvalidKeyError, match="merchant.key"):
            FileKeyProvider(str(path))

    @pytest.mark.unit
    def test_custom_prefix(self, merchant_key):
        provider = MemoryKeyProvider(merchant_key.to_wif(), prefix="TEST")
        assert provider.public_key.startswith("TEST")

    @pytest.mark.unit
    @pytest.mark.security
    def test_repr_hides_wif(self, merchant_key):
        wif = merchant_key.to_wif()
        assert wif not in repr(MemoryKeyProvider(wif))


class TestKeyStore:
    """Merchant key for "merchant", data-source key for everything else."""

    @pytest.mark.unit
    def test_merchant_type(self, key_store, merchant_key):
        assert key_store.get("merchant").public_key == merchant_key.public_key.to_string()

    @pytest.mark.unit
    @pytest.mark.parametrize("account_type", ["datasource", "dataSource", "league", None])
    def test_other_types_use_datasource(self, key_store, datasource_key, account_type):
        assert key_store.get(account_type).public_key == datasource_key.public_key.to_string()

    @pytest.mark.unit
    def test_missing_key(self):
        with pytest.raises(MissingKeyError) as exc:
            KeyStore().get("merchant")
        assert exc.value.account_type == "merchant"

    @pytest.mark.unit
    def test_from_env(self, monkeypatch, merchant_key):
        monkeypatch.setenv("GXACCOUNT_MERCHANT_KEY", merchant_key.to_wif())
        monkeypatch.delenv("GXACCOUNT_DATASOURCE_KEY", raising=False)

        store = KeyStore.from_env()

        assert store.merchant is not None
        assert store.datasource is None
        with pytest.raises(MissingKeyError):
            store.get("datasource")
