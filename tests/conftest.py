"""
GXAccount SDK Test Configuration

Shared fixtures and test utilities.
"""

import pytest
from unittest.mock import Mock
from pathlib import Path
import sys

# Ensure gxaccount is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from gxaccount.config import EnvironmentConfig, FaucetConfig
from gxaccount.infra.keys import PrivateKey
from gxaccount.providers import KeyStore, MemoryKeyProvider


# =============================================================================
# Test Keys (DO NOT USE IN PRODUCTION)
# =============================================================================

@pytest.fixture
def test_wif():
    """WIF for private key = 1 - DO NOT USE IN PRODUCTION."""
    return "5HpHagT65TZzG1PH3CSu63k8DbpvD8s5ip4nEB3kEsreAnchuDf"


@pytest.fixture
def test_public_key_sec():
    """Compressed SEC public key for private key = 1."""
    return bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")


@pytest.fixture
def merchant_key():
    return PrivateKey((7).to_bytes(32, "big"))


@pytest.fixture
def datasource_key():
    return PrivateKey((11).to_bytes(32, "big"))


@pytest.fixture
def key_store(merchant_key, datasource_key):
    return KeyStore(
        merchant=MemoryKeyProvider(merchant_key.to_wif()),
        datasource=MemoryKeyProvider(datasource_key.to_wif()),
    )


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def faucet_config():
    """Config with distinguishable production / development endpoints."""
    return FaucetConfig(
        production=EnvironmentConfig("http://faucet.example.com", referrer="prod-referrer"),
        development=EnvironmentConfig("http://dev.faucet.example.com", referrer="dev-referrer"),
        rpc_url="http://node.example.com/rpc",
    )


# =============================================================================
# Mock Fixtures
# =============================================================================

def make_response(json_data=None, status_code=200, text=None):
    """Build a requests.Response stand-in."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text if text is not None else ("" if json_data is None else "{...}")
    response.content = response.text.encode()
    response.json.return_value = json_data
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def response_factory():
    """Factory for requests.Response stand-ins."""
    return make_response


@pytest.fixture
def mock_rpc():
    """Mock NodeRPC for isolated testing."""
    rpc = Mock()
    rpc.get_account_by_name.return_value = {"id": "1.2.17", "name": "alice"}
    rpc.get_key_references.return_value = [["1.2.17"]]
    rpc.get_objects.return_value = [{"id": "1.2.17", "name": "alice"}]
    return rpc


@pytest.fixture
def mock_faucet():
    """Mock FaucetAPI; every call answers {"code": 0}."""
    faucet = Mock()
    faucet.base_url = "http://faucet.example.com"
    for call in (
        "register_account",
        "merchant_info",
        "create_merchant",
        "create_data_source",
        "apply_status",
        "league_members",
    ):
        getattr(faucet, call).return_value = {"code": 0}
    return faucet


@pytest.fixture
def faucet_factory(mock_faucet):
    """Factory that records the base URL and returns mock_faucet."""
    return Mock(return_value=mock_faucet)


# =============================================================================
# Marker Helpers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (mocked services)")
    config.addinivalue_line("markers", "security: Security-focused tests")
