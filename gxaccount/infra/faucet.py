"""
GXAccount SDK - Faucet API Client

Handles account registration and merchant / data-source certification
requests against the faucet backend.
"""

from typing import Any, Optional

import requests

from ..constants import (
    APPLY_STATUS_PATH,
    DATA_SOURCE_CREATE_PATH,
    DEFAULT_TIMEOUT,
    JSON_HEADERS,
    LEAGUE_MEMBERS_PATH,
    MERCHANT_CREATE_PATH,
    MERCHANT_INFO_PATH,
    REGISTER_ACCOUNT_PATH,
)
from ..errors import FaucetAPIError, FaucetConnectionError


class FaucetAPI:
    """
    Client for the faucet HTTP API.
    
    All requests send and accept JSON. Signed requests arrive here already
    carrying their ``signature`` field; this class only moves bytes.
    """
    
    def __init__(
        self,
        base_url: str,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize faucet client.
        
        Args:
            base_url: Faucet root URL, scheme included.
            timeout: Seconds before a request is abandoned.
            session: Optional pre-configured requests session.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
    
    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(
                method,
                url,
                headers=JSON_HEADERS,
                timeout=self.timeout,
                **kwargs
            )
        except requests.RequestException as e:
            raise FaucetConnectionError(
                f"Faucet request failed: {e}",
                {"url": url}
            ) from e
        
        if not response.ok:
            raise FaucetAPIError(
                f"Faucet returned HTTP {response.status_code} for {endpoint}",
                status_code=response.status_code,
                endpoint=endpoint,
                body=response.text
            )
        
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise FaucetAPIError(
                f"Faucet response is not JSON: {e}",
                status_code=response.status_code,
                endpoint=endpoint,
                body=response.text
            ) from e
    
    def _get(self, endpoint: str, params: dict) -> Any:
        """Make GET request with query parameters."""
        return self._request("GET", endpoint, params=params)
    
    def _post(self, endpoint: str, body: dict) -> Any:
        """Make POST request with a JSON body."""
        return self._request("POST", endpoint, json=body)
    
    # =========================================================================
    # Accounts
    # =========================================================================
    
    def register_account(self, account: dict) -> Any:
        """
        Register a new account.
        
        Args:
            account: ``{"account": {name, owner_key, active_key, ...}}``.
        """
        return self._post(REGISTER_ACCOUNT_PATH, account)
    
    def apply_status(self, account_id: str) -> Any:
        """Certification application status for an account."""
        return self._get(APPLY_STATUS_PATH, {"account_id": account_id})
    
    # =========================================================================
    # Certification
    # =========================================================================
    
    def merchant_info(self, params: dict) -> Any:
        """Merchant details; params must carry account_id and signature."""
        return self._get(MERCHANT_INFO_PATH, params)
    
    def create_merchant(self, body: dict) -> Any:
        """Submit a signed merchant certification application."""
        return self._post(MERCHANT_CREATE_PATH, body)
    
    def create_data_source(self, body: dict) -> Any:
        """Submit a signed data-source certification application."""
        return self._post(DATA_SOURCE_CREATE_PATH, body)
    
    def league_members(self, league_id: Any) -> Any:
        """Member data sources of a league."""
        return self._get(LEAGUE_MEMBERS_PATH, {"league_id": league_id})
