"""Infrastructure layer package."""

from .rpc import NodeRPC
from .faucet import FaucetAPI
from .keys import PrivateKey, PublicKey, Signature

__all__ = ["NodeRPC", "FaucetAPI", "PrivateKey", "PublicKey", "Signature"]
