"""
GXAccount SDK - Node RPC Client

Handles account lookups against a Graphene witness node over HTTP JSON-RPC.
"""

import itertools
from typing import Any, List, Optional

import requests

from ..constants import (
    DATABASE_API,
    DEFAULT_RPC_URL,
    DEFAULT_TIMEOUT,
    GET_ACCOUNT_BY_NAME,
    GET_KEY_REFERENCES,
    GET_OBJECTS,
)
from ..errors import RPCConnectionError, RPCError


class NodeRPC:
    """
    Client for the node's database API.
    
    Every call is sent as ``call("database", method, params)``, which the
    node accepts on its HTTP endpoint.
    """
    
    def __init__(
        self,
        url: str = DEFAULT_RPC_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize RPC client.
        
        Args:
            url: Node HTTP RPC endpoint.
            timeout: Seconds before a call is abandoned.
            session: Optional pre-configured requests session.
        """
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)
    
    def call(self, method: str, params: list, api: str = DATABASE_API) -> Any:
        """
        Invoke an API method on the node.
        
        Args:
            method: Method name (e.g. "get_objects").
            params: Positional parameters.
            api: Node API the method belongs to.
        
        Returns:
            The ``result`` member of the response.
        
        Raises:
            RPCConnectionError: Node unreachable or returned non-JSON.
            RPCError: Node reported an error for the call.
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": "call",
            "params": [api, method, params],
        }
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise RPCConnectionError(
                f"RPC request failed: {e}",
                {"url": self.url, "method": method}
            ) from e
        except ValueError as e:
            raise RPCConnectionError(
                f"RPC response is not JSON: {e}",
                {"url": self.url, "method": method}
            ) from e
        
        if not isinstance(data, dict):
            raise RPCConnectionError(
                f"RPC response is not a JSON object: {data!r}",
                {"url": self.url, "method": method}
            )
        
        error = data.get("error")
        if error:
            if isinstance(error, dict):
                raise RPCError(method, error.get("message", str(error)), error.get("code"), error.get("data"))
            raise RPCError(method, str(error))
        
        return data.get("result")
    
    # =========================================================================
    # Database API
    # =========================================================================
    
    def get_account_by_name(self, name: str) -> Optional[dict]:
        """
        Look up an account object by name.
        
        Returns:
            Account object, or None if no such account.
        """
        return self.call(GET_ACCOUNT_BY_NAME, [name])
    
    def get_key_references(self, public_keys: List[str]) -> List[List[str]]:
        """
        Find accounts whose authorities reference each key.
        
        Args:
            public_keys: Public key strings.
        
        Returns:
            One list of account ids per key, in input order.
        """
        return self.call(GET_KEY_REFERENCES, [list(public_keys)]) or []
    
    def get_objects(self, ids: List[str]) -> List[Optional[dict]]:
        """
        Fetch objects by id.
        
        Returns:
            Objects in input order; None where an id is unknown.
        """
        return self.call(GET_OBJECTS, [list(ids)]) or []
