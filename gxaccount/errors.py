"""
GXAccount SDK - Error Types

Specific exception classes for better error handling and debugging.
Every operation raises one of these with the underlying exception
chained as ``__cause__``.
"""

from typing import Optional, Any


class GXAccountError(Exception):
    """Base exception for all GXAccount SDK errors."""
    
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(GXAccountError):
    """Error in SDK configuration."""
    pass


class MissingConfigError(ConfigurationError):
    """Required configuration is missing."""
    pass


class InvalidConfigError(ConfigurationError):
    """Configuration value is invalid."""
    pass


# =============================================================================
# Key and Signature Errors
# =============================================================================

class GXKeyError(GXAccountError):
    """Error related to cryptographic keys."""
    pass


class InvalidKeyError(GXKeyError):
    """Key, WIF or brain key format is invalid."""
    pass


class MissingKeyError(GXKeyError):
    """No signing key configured for the requested account type."""
    
    def __init__(self, account_type: Optional[str]):
        super().__init__(
            f"No signing key configured for account type: {account_type}",
            {"account_type": account_type}
        )
        self.account_type = account_type


class SignatureError(GXAccountError):
    """Error during signature creation or verification."""
    pass


# =============================================================================
# Account Errors
# =============================================================================

class AccountError(GXAccountError):
    """Error related to on-chain accounts."""
    pass


class AccountNotFoundError(AccountError):
    """Account does not exist on chain."""
    
    def __init__(self, lookup: str, message: Optional[str] = None):
        super().__init__(message or f"Account not found: {lookup}", {"lookup": lookup})
        self.lookup = lookup


# =============================================================================
# Network Errors
# =============================================================================

class NetworkError(GXAccountError):
    """Error communicating with the node or the faucet."""
    pass


class RPCError(NetworkError):
    """The node answered a JSON-RPC call with an error."""
    
    def __init__(self, method: str, message: str, code: Optional[int] = None, data: Any = None):
        super().__init__(
            f"RPC {method} failed: {message}",
            {"method": method, "code": code}
        )
        self.method = method
        self.code = code
        self.data = data


class RPCConnectionError(NetworkError):
    """Cannot reach the node RPC endpoint."""
    pass


class FaucetAPIError(NetworkError):
    """Faucet returned a non-success HTTP status."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        body: Any = None
    ):
        super().__init__(message, {"status_code": status_code, "endpoint": endpoint})
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body


class FaucetConnectionError(NetworkError):
    """Cannot reach the faucet."""
    pass
