"""
GXAccount SDK - Account Service

High-level interface for account registration, key import and
merchant / data-source certification.
This is the primary entry point for SDK users.
"""

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Union

from .config import FaucetConfig
from .errors import AccountNotFoundError, GXAccountError, SignatureError
from .events import EventEmitter, EventType
from .infra.faucet import FaucetAPI
from .infra.keys import PrivateKey, suggest_brain_key
from .infra.rpc import NodeRPC
from .logging import StructuredLogger
from .models import Account, AccountConfig, RegistrationRequest
from .payload import attach_signature, canonical_json, sort_json
from .providers import KeyStore


FaucetFactory = Callable[[str], FaucetAPI]


class AccountService:
    """
    Facade over the node RPC, the signing keys and the faucet.

    Every method is a short chain: resolve the account (optional), sign a
    canonical payload (optional), make one faucet or RPC call. Failures
    propagate as GXAccountError subclasses chained to the underlying error.

    Example:
        service = AccountService.from_config("config.json")

        creds = service.create_account("production", "merchant", "alice")
        service.apply_merchant(
            "production", {"name": "Alice Shop"}, "alice", "merchant"
        )

        @service.events.on(EventType.AFTER_REGISTER)
        def on_register(event):
            print(f"Registered: {event.data['account_name']}")
    """

    def __init__(
        self,
        config: Optional[FaucetConfig] = None,
        key_store: Optional[KeyStore] = None,
        rpc: Optional[NodeRPC] = None,
        faucet_factory: Optional[FaucetFactory] = None,
        logger: Optional[logging.Logger] = None,
        enable_events: bool = True,
        dictionary: Optional[Union[str, Sequence[str]]] = None
    ):
        """
        Initialize the service.

        Args:
            config: Endpoints per environment (defaults built in).
            key_store: Merchant / data-source signing keys.
            rpc: Optional NodeRPC instance.
            faucet_factory: Builds a FaucetAPI for a base URL.
            logger: Optional Python logger for structured logging.
            enable_events: Whether to enable event hooks (default: True).
            dictionary: Word list for suggested brain keys.
        """
        self.config = config or FaucetConfig()
        self.key_store = key_store or KeyStore()
        self.rpc = rpc or NodeRPC(self.config.rpc_url, timeout=self.config.timeout)
        self._faucet_factory = faucet_factory or self._default_faucet
        self.events = EventEmitter(logger) if enable_events else None
        self.logger = StructuredLogger(logger=logger or logging.getLogger(__name__))
        self.dictionary = dictionary

    @classmethod
    def from_config(cls, config_path: str, key_store: Optional[KeyStore] = None, **kwargs) -> "AccountService":
        """
        Create a service from a JSON config file.

        Signing keys come from the environment unless a key_store is given.
        """
        config = FaucetConfig.from_file(config_path)
        if key_store is None:
            key_store = KeyStore.from_env(config.address_prefix)
        return cls(config, key_store=key_store, **kwargs)

    def _default_faucet(self, base_url: str) -> FaucetAPI:
        return FaucetAPI(base_url, timeout=self.config.timeout)

    def faucet(self, env: Optional[str], protocol: Optional[str] = None) -> FaucetAPI:
        """Faucet client for an environment and page protocol."""
        return self._faucet_factory(self.config.faucet_url(env, protocol))

    def _emit(self, event_type: EventType, **data) -> None:
        if self.events:
            self.events.emit(event_type, data)

    def _failed(self, call: str, error: GXAccountError) -> GXAccountError:
        """Report a failed RPC, signing or faucet call as ON_ERROR."""
        self._emit(EventType.ON_ERROR, call=call, error=error)
        return error

    def _rpc(self, call: str, *args) -> Any:
        try:
            return getattr(self.rpc, call)(*args)
        except GXAccountError as e:
            self._failed(call, e)
            raise

    # =========================================================================
    # Accounts
    # =========================================================================

    def fetch_account(self, account_name: str) -> Dict[str, Any]:
        """
        Get an account object by name.

        Returns:
            Raw account object from the node.

        Raises:
            AccountNotFoundError: No account with that name.
        """
        account = self._rpc("get_account_by_name", account_name)
        if account is None:
            raise self._failed("get_account_by_name", AccountNotFoundError(account_name))
        return account

    def resolve_account(self, account_name: str) -> Account:
        """Look up an account and return its id/name reference."""
        account = Account.from_rpc(self.fetch_account(account_name))
        self._emit(EventType.ACCOUNT_RESOLVED, account_name=account.name, account_id=account.id)
        return account

    def create_account(
        self,
        env: Optional[str],
        account_type: Optional[str],
        new_account_name: str,
        protocol: Optional[str] = None
    ) -> AccountConfig:
        """
        Register a new account through the faucet.

        A fresh brain key is generated; its derived public key becomes the
        owner, active and memo key of the account.

        Args:
            env: "production" or anything else for development.
            account_type: Kind of account being created (informational).
            new_account_name: Name to register.
            protocol: Caller page protocol ("https:" forces TLS).

        Returns:
            AccountConfig with the account name and its WIF private key.
        """
        with self.logger.operation("create_account") as op:
            op.set_account(new_account_name)
            op.add_detail("env", env)

            private_key = PrivateKey.from_brain_key(suggest_brain_key(self.dictionary))
            public_key = private_key.public_key.to_string(self.config.address_prefix)
            request = RegistrationRequest.single_key(
                new_account_name,
                public_key,
                referrer=self.config.referrer(env)
            )

            self._emit(
                EventType.BEFORE_REGISTER,
                account_name=new_account_name,
                account_type=account_type,
                public_key=public_key
            )
            response = self.faucet(env, protocol).register_account(request.to_dict())
            self._emit(EventType.AFTER_REGISTER, account_name=new_account_name, response=response)

            return AccountConfig(account_name=new_account_name, private_key=private_key.to_wif())

    def import_account(self, account_type: Optional[str], private_key: str) -> AccountConfig:
        """
        Find the account controlled by a WIF private key.

        Args:
            account_type: Kind of account being imported (informational).
            private_key: WIF private key.

        Raises:
            InvalidKeyError: private_key is not a valid WIF.
            AccountNotFoundError: No account references the key.
        """
        with self.logger.operation("import_account") as op:
            public_key = PrivateKey.from_wif(private_key).public_key.to_string(self.config.address_prefix)
            op.add_detail("public_key", public_key)

            references = self._rpc("get_key_references", [public_key])
            account_ids = list(dict.fromkeys(references[0] if references else []))
            if not account_ids:
                raise self._failed(
                    "get_key_references",
                    AccountNotFoundError(public_key, f"No account references key {public_key}")
                )

            accounts = self._rpc("get_objects", account_ids)
            if not accounts or accounts[0] is None:
                raise self._failed("get_objects", AccountNotFoundError(account_ids[0]))

            account_name = accounts[0]["name"]
            op.set_account(account_name)
            return AccountConfig(account_name=account_name, private_key=private_key)

    # =========================================================================
    # Signing
    # =========================================================================

    def get_sign(self, body: str = "", account_type: Optional[str] = None) -> str:
        """
        Sign a string with the key for an account type.

        Merchant requests use the merchant key; all other account types
        use the data-source key.

        Returns:
            Hex compact signature.

        Raises:
            SignatureError: No key configured, or signing failed.
        """
        self._emit(EventType.BEFORE_SIGN, account_type=account_type)
        try:
            signature = self.key_store.get(account_type).sign(body)
        except Exception as e:
            error = SignatureError(
                f"Signing failed: {e}",
                {"account_type": account_type}
            )
            raise self._failed("sign", error) from e
        self._emit(EventType.AFTER_SIGN, account_type=account_type, signature=signature)
        return signature

    def sign_payload(self, body: Dict[str, Any], account_type: Optional[str]) -> Dict[str, Any]:
        """Sort body, sign its canonical JSON and attach the signature."""
        sorted_body = sort_json(body)
        signature = self.get_sign(canonical_json(sorted_body), account_type)
        return attach_signature(sorted_body, signature)

    def _signed_account_payload(
        self,
        body: Dict[str, Any],
        account_name: str,
        account_type: Optional[str]
    ) -> Dict[str, Any]:
        account = self.resolve_account(account_name)
        return self.sign_payload(dict(body, account_id=account.id), account_type)

    # =========================================================================
    # Certification
    # =========================================================================

    def fetch_merchant(
        self,
        env: Optional[str],
        account_name: str,
        account_type: Optional[str],
        protocol: Optional[str] = None
    ) -> Any:
        """
        Get merchant info for an account.

        The query is ``{account_id, signature}`` signed with the key for
        account_type.
        """
        with self.logger.operation("fetch_merchant") as op:
            op.set_account(account_name)
            params = self._signed_account_payload({}, account_name, account_type)
            return self._request(env, protocol, "merchant_info", params)

    def apply_merchant(
        self,
        env: Optional[str],
        body: Dict[str, Any],
        account_name: str,
        account_type: Optional[str],
        protocol: Optional[str] = None
    ) -> Any:
        """
        Apply for merchant certification.

        Args:
            body: Application fields; account_id and signature are added.
                The caller's dict is left untouched.
        """
        with self.logger.operation("apply_merchant") as op:
            op.set_account(account_name)
            payload = self._signed_account_payload(body, account_name, account_type)
            return self._request(env, protocol, "create_merchant", payload)

    def apply_datasource(
        self,
        env: Optional[str],
        body: Dict[str, Any],
        account_name: str,
        account_type: Optional[str],
        protocol: Optional[str] = None
    ) -> Any:
        """Apply for data-source certification. Same flow as apply_merchant."""
        with self.logger.operation("apply_datasource") as op:
            op.set_account(account_name)
            payload = self._signed_account_payload(body, account_name, account_type)
            return self._request(env, protocol, "create_data_source", payload)

    def is_applying(self, env: Optional[str], account_name: str, protocol: Optional[str] = None) -> Any:
        """Certification application status for an account (unsigned)."""
        with self.logger.operation("is_applying") as op:
            op.set_account(account_name)
            account = self.resolve_account(account_name)
            return self._request(env, protocol, "apply_status", account.id)

    def fetch_league_members(self, env: Optional[str], league_id: Any, protocol: Optional[str] = None) -> Any:
        """Member data sources of a league (unsigned, no account lookup)."""
        with self.logger.operation("fetch_league_members") as op:
            op.add_detail("league_id", league_id)
            return self._request(env, protocol, "league_members", league_id)

    def _request(self, env: Optional[str], protocol: Optional[str], call: str, arg: Any) -> Any:
        faucet = self.faucet(env, protocol)
        self._emit(EventType.BEFORE_REQUEST, call=call, base_url=faucet.base_url)
        try:
            response = getattr(faucet, call)(arg)
        except GXAccountError as e:
            self._failed(call, e)
            raise
        self._emit(EventType.AFTER_REQUEST, call=call, response=response)
        return response
