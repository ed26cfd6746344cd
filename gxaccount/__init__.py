"""
GXAccount SDK - Account and Certification Client

A Python SDK for registering accounts through the faucet, importing
accounts from private keys, and applying for merchant / data-source
certification with signed requests.

Usage:
    from gxaccount import AccountService, KeyStore, MemoryKeyProvider

    service = AccountService.from_config(
        "config.json",
        key_store=KeyStore(merchant=MemoryKeyProvider("5K...")),
    )

    creds = service.create_account("production", "merchant", "alice")
    print(creds.account_name, creds.private_key)

    info = service.fetch_merchant("production", "alice", "merchant")

Keys only:
    from gxaccount import PrivateKey, suggest_brain_key

    key = PrivateKey.from_brain_key(suggest_brain_key())
    print(key.public_key.to_string(), key.to_wif())
"""

from .service import AccountService
from .config import FaucetConfig, EnvironmentConfig
from .models import Account, AccountConfig, KeyPair, RegistrationRequest
from .payload import sort_json, canonical_json, attach_signature

# Keys and signatures
from .infra.keys import (
    PrivateKey,
    PublicKey,
    Signature,
    generate_key_pair,
    normalize_brain_key,
    suggest_brain_key,
)

# Infrastructure clients
from .infra.rpc import NodeRPC
from .infra.faucet import FaucetAPI

# Key providers
from .providers import (
    KeyProvider,
    EnvKeyProvider,
    MemoryKeyProvider,
    FileKeyProvider,
    KeyStore,
)

# Error types
from .errors import (
    GXAccountError,
    ConfigurationError,
    MissingConfigError,
    InvalidConfigError,
    GXKeyError,
    InvalidKeyError,
    MissingKeyError,
    SignatureError,
    AccountError,
    AccountNotFoundError,
    NetworkError,
    RPCError,
    RPCConnectionError,
    FaucetAPIError,
    FaucetConnectionError,
)

# Event hooks
from .events import EventEmitter, EventType, Event

# Logging
from .logging import StructuredLogger, LogLevel, create_file_logger

__version__ = "0.1.0"
__all__ = [
    # Core
    "AccountService",
    "FaucetConfig",
    "EnvironmentConfig",
    "Account",
    "AccountConfig",
    "KeyPair",
    "RegistrationRequest",
    "sort_json",
    "canonical_json",
    "attach_signature",

    # Keys
    "PrivateKey",
    "PublicKey",
    "Signature",
    "generate_key_pair",
    "normalize_brain_key",
    "suggest_brain_key",

    # Clients
    "NodeRPC",
    "FaucetAPI",

    # Key Providers
    "KeyProvider",
    "EnvKeyProvider",
    "MemoryKeyProvider",
    "FileKeyProvider",
    "KeyStore",

    # Errors
    "GXAccountError",
    "ConfigurationError",
    "MissingConfigError",
    "InvalidConfigError",
    "GXKeyError",
    "InvalidKeyError",
    "MissingKeyError",
    "SignatureError",
    "AccountError",
    "AccountNotFoundError",
    "NetworkError",
    "RPCError",
    "RPCConnectionError",
    "FaucetAPIError",
    "FaucetConnectionError",

    # Events
    "EventEmitter",
    "EventType",
    "Event",

    # Logging
    "StructuredLogger",
    "LogLevel",
    "create_file_logger",
]
