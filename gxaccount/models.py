"""
GXAccount SDK - Data Models

Core data structures used throughout the SDK.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any


@dataclass
class Account:
    """On-chain account reference."""
    id: str
    name: str
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)
    
    @classmethod
    def from_rpc(cls, data: dict) -> "Account":
        """Create from a node account object."""
        return cls(id=data["id"], name=data["name"], raw=data)


@dataclass
class AccountConfig:
    """
    Credentials handed back after creating or importing an account.
    
    private_key is the WIF string; it is kept out of repr.
    """
    account_name: str
    private_key: str = field(repr=False)
    
    def to_dict(self) -> dict:
        return {"account_name": self.account_name, "private_key": self.private_key}


@dataclass
class KeyPair:
    """Freshly generated brain key with the keys it derives."""
    brain_key: str = field(repr=False)
    private_key: str = field(repr=False)
    public_key: str


@dataclass
class RegistrationRequest:
    """Account registration body sent to the faucet."""
    name: str
    owner_key: str
    active_key: str
    memo_key: str
    referrer: Optional[str] = None
    refcode: str = ""
    
    @classmethod
    def single_key(cls, name: str, public_key: str, referrer: Optional[str] = None) -> "RegistrationRequest":
        """Owner, active and memo authorities all set to one key."""
        return cls(
            name=name,
            owner_key=public_key,
            active_key=public_key,
            memo_key=public_key,
            referrer=referrer
        )
    
    def to_dict(self) -> dict:
        return {
            "account": {
                "name": self.name,
                "owner_key": self.owner_key,
                "active_key": self.active_key,
                "memo_key": self.memo_key,
                "refcode": self.refcode,
                "referrer": self.referrer,
            }
        }
