"""
GXAccount SDK - Key Management

Graphene-style key handling: brain keys, WIF import/export, public key
strings and compact recoverable signatures.

SECURITY NOTE: PrivateKey intentionally does NOT expose the raw secret
through properties, repr or pickling. Use to_wif() when the caller must
receive the key.
"""

import hashlib
import re
import secrets
from typing import List, Optional, Sequence, Union

from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.rfc6979 import generate_k
from ecdsa.util import sigdecode_string, sigencode_string_canonize
from embit import base58, ec, hashes
from embit.wordlists.bip39 import WORDLIST

from ..constants import (
    BRAIN_KEY_WORD_COUNT,
    COMPACT_SIGNATURE_OFFSET,
    DEFAULT_ADDRESS_PREFIX,
    WIF_VERSION,
)
from ..errors import InvalidKeyError, SignatureError
from ..models import KeyPair


_WHITESPACE = re.compile(r"[\t\n\v\f\r ]+")

# Give up on canonical signature search after this many nonces
MAX_SIGNING_ATTEMPTS = 1000


# =============================================================================
# Brain Keys
# =============================================================================

def normalize_brain_key(brain_key: str) -> str:
    """
    Normalize a brain key phrase.

    Leading/trailing whitespace is removed and every whitespace run
    collapses to a single space, so differently spaced copies of the
    same phrase derive the same key.
    """
    if not isinstance(brain_key, str):
        raise InvalidKeyError("Brain key must be a string")
    return " ".join(_WHITESPACE.split(brain_key.strip()))


def suggest_brain_key(
    dictionary: Optional[Union[str, Sequence[str]]] = None,
    word_count: int = BRAIN_KEY_WORD_COUNT
) -> str:
    """
    Suggest a new random brain key.

    Args:
        dictionary: Word list, or comma-separated words. Defaults to the
            BIP-39 English list.
        word_count: Number of words in the phrase.

    Returns:
        Normalized brain key phrase.
    """
    words = _load_dictionary(dictionary)
    if not words:
        raise InvalidKeyError("Brain key dictionary is empty")

    entropy = secrets.token_bytes(word_count * 2)
    phrase = []
    for i in range(0, word_count * 2, 2):
        num = (entropy[i] << 8) + entropy[i + 1]
        phrase.append(words[len(words) * num // 2 ** 16])

    return normalize_brain_key(" ".join(phrase))


def _load_dictionary(dictionary: Optional[Union[str, Sequence[str]]]) -> List[str]:
    if dictionary is None:
        return list(WORDLIST)
    if isinstance(dictionary, str):
        return [w.strip() for w in dictionary.split(",") if w.strip()]
    return list(dictionary)


# =============================================================================
# Keys
# =============================================================================

class PublicKey:
    """Compressed secp256k1 public key with Graphene string encoding."""

    __slots__ = ("_sec",)

    def __init__(self, sec: bytes):
        if len(sec) != 33 or sec[0] not in (2, 3):
            raise InvalidKeyError("Public key must be 33 bytes compressed SEC")
        self._sec = bytes(sec)

    @classmethod
    def from_string(cls, value: str, prefix: str = DEFAULT_ADDRESS_PREFIX) -> "PublicKey":
        """
        Parse a public key string such as ``GXC6MRyAjQ...``.

        Raises:
            InvalidKeyError: Wrong prefix, bad base58 or checksum mismatch.
        """
        if not value.startswith(prefix):
            raise InvalidKeyError(
                f"Public key must start with {prefix}",
                {"prefix": prefix}
            )
        try:
            raw = base58.decode(value[len(prefix):])
        except Exception as e:
            raise InvalidKeyError(f"Public key is not valid base58: {e}") from e

        sec, checksum = raw[:-4], raw[-4:]
        if hashes.ripemd160(sec)[:4] != checksum:
            raise InvalidKeyError("Public key checksum mismatch")
        return cls(sec)

    def sec(self) -> bytes:
        """33-byte compressed encoding."""
        return self._sec

    def to_string(self, prefix: str = DEFAULT_ADDRESS_PREFIX) -> str:
        checksum = hashes.ripemd160(self._sec)[:4]
        return prefix + base58.encode(self._sec + checksum)

    def __eq__(self, other):
        return isinstance(other, PublicKey) and other._sec == self._sec

    def __hash__(self):
        return hash(self._sec)

    def __repr__(self) -> str:
        return f"PublicKey({self.to_string()})"

    def __str__(self) -> str:
        return self.to_string()


class PrivateKey:
    """
    secp256k1 private key.

    SECURITY: The secret is never exposed through properties,
    serialization, or string representation.
    """

    __slots__ = ("_secret", "_public_key")  # Prevent __dict__ access

    def __init__(self, secret: bytes):
        """
        Args:
            secret: 32-byte private key.
        """
        if len(secret) != 32:
            raise InvalidKeyError("Private key must be 32 bytes")
        if not 0 < int.from_bytes(secret, "big") < SECP256k1.order:
            raise InvalidKeyError("Private key is out of range")

        self._secret = bytes(secret)
        self._public_key = PublicKey(ec.PrivateKey(self._secret).get_public_key().sec())

    @classmethod
    def from_brain_key(cls, brain_key: str, sequence: int = 0) -> "PrivateKey":
        """
        Derive the key for a brain key phrase.

        secret = sha256(sha512(normalized_phrase + " " + sequence))
        """
        if sequence < 0:
            raise InvalidKeyError("Brain key sequence must be non-negative")
        seed = f"{normalize_brain_key(brain_key)} {sequence}".encode("utf-8")
        return cls(hashes.sha256(hashlib.sha512(seed).digest()))

    @classmethod
    def from_wif(cls, wif: str) -> "PrivateKey":
        """
        Import a wallet-import-format key.

        Raises:
            InvalidKeyError: Bad checksum, version byte or length.
        """
        if not isinstance(wif, str) or not wif:
            raise InvalidKeyError("WIF must be a non-empty string")
        try:
            raw = base58.decode_check(wif)
        except Exception as e:
            raise InvalidKeyError(f"Invalid WIF: {e}") from e

        if raw[0] != WIF_VERSION:
            raise InvalidKeyError(
                "Invalid WIF version byte",
                {"version": raw[0]}
            )
        secret = raw[1:]
        # Compressed-key marker appended by some wallets
        if len(secret) == 33 and secret[-1] == 0x01:
            secret = secret[:-1]
        return cls(secret)

    def to_wif(self) -> str:
        return base58.encode_check(bytes([WIF_VERSION]) + self._secret)

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    def sign(self, message: Union[str, bytes]) -> "Signature":
        """Sign a message. Shortcut for Signature.sign(message, self)."""
        return Signature.sign(message, self)

    def _signing_key(self) -> SigningKey:
        return SigningKey.from_string(self._secret, curve=SECP256k1)

    def __eq__(self, other):
        return isinstance(other, PrivateKey) and other._secret == self._secret

    def __hash__(self):
        return hash(self._public_key)

    def __repr__(self) -> str:
        """Safe representation that doesn't leak the secret."""
        return f"PrivateKey(public_key={self._public_key.to_string()[:16]}...)"

    def __str__(self) -> str:
        return self.__repr__()

    def __getstate__(self):
        """Prevent pickling to avoid accidental key serialization."""
        raise TypeError("PrivateKey cannot be pickled (contains secret material)")

    def __reduce__(self):
        raise TypeError("PrivateKey cannot be pickled (contains secret material)")


# =============================================================================
# Signatures
# =============================================================================

def is_canonical(rs: bytes) -> bool:
    """
    Check that r and s both DER-encode to exactly 32 bytes.

    Graphene nodes reject signatures where either half needs a padding
    byte or can be shortened.
    """
    r, s = rs[:32], rs[32:]
    return not (
        r[0] & 0x80
        or (r[0] == 0 and not r[1] & 0x80)
        or s[0] & 0x80
        or (s[0] == 0 and not s[1] & 0x80)
    )


def _to_bytes(message: Union[str, bytes]) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


class Signature:
    """65-byte compact recoverable signature (header || r || s)."""

    __slots__ = ("recovery_id", "r", "s")

    def __init__(self, recovery_id: int, r: bytes, s: bytes):
        if recovery_id not in range(4):
            raise SignatureError("Recovery id must be in 0..3")
        if len(r) != 32 or len(s) != 32:
            raise SignatureError("r and s must be 32 bytes each")
        self.recovery_id = recovery_id
        self.r = bytes(r)
        self.s = bytes(s)

    @classmethod
    def sign(cls, message: Union[str, bytes], private_key: PrivateKey) -> "Signature":
        """
        Sign sha256(message) deterministically.

        The first attempt uses the plain RFC 6979 nonce for the digest.
        While the result is not canonical, attempt n derives its nonce
        from sha256(digest || n zero bytes) and still signs the original
        digest, so a given (message, key) pair always produces the same
        signature as other Graphene clients.
        """
        digest = hashes.sha256(_to_bytes(message))
        signing_key = private_key._signing_key()
        expected = private_key.public_key.sec()

        for attempt in range(MAX_SIGNING_ATTEMPTS):
            rs = _sign_attempt(signing_key, digest, attempt)
            if not is_canonical(rs):
                continue

            for recovery_id, candidate in enumerate(_recover(rs, digest)):
                if candidate.to_string("compressed") == expected:
                    return cls(recovery_id, rs[:32], rs[32:])
            raise SignatureError("Could not compute public key recovery id")

        raise SignatureError(
            f"No canonical signature after {MAX_SIGNING_ATTEMPTS} attempts"
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "Signature":
        if len(data) != 65:
            raise SignatureError("Compact signature must be 65 bytes")
        header = data[0] - 27
        if header not in range(8):
            raise SignatureError("Invalid compact signature header")
        return cls(header & 3, data[1:33], data[33:])

    @classmethod
    def from_hex(cls, value: str) -> "Signature":
        try:
            data = bytes.fromhex(value)
        except ValueError as e:
            raise SignatureError(f"Signature is not hex: {e}") from e
        return cls.from_bytes(data)

    def to_bytes(self) -> bytes:
        return bytes([COMPACT_SIGNATURE_OFFSET + self.recovery_id]) + self.r + self.s

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def recover_public_key(self, message: Union[str, bytes]) -> PublicKey:
        """Recover the signer's public key from the signed message."""
        digest = hashes.sha256(_to_bytes(message))
        try:
            candidates = _recover(self.r + self.s, digest)
        except Exception as e:
            raise SignatureError(f"Public key recovery failed: {e}") from e
        if self.recovery_id >= len(candidates):
            raise SignatureError("Recovery id does not match any public key")
        return PublicKey(candidates[self.recovery_id].to_string("compressed"))

    def verify(self, message: Union[str, bytes], public_key: PublicKey) -> bool:
        """
        Verify the signature against a public key.

        Returns:
            True if valid, False otherwise.
        """
        try:
            return self.recover_public_key(message) == public_key
        except SignatureError:
            return False

    def __eq__(self, other):
        return isinstance(other, Signature) and other.to_bytes() == self.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"Signature({self.to_hex()[:18]}...)"


def _sign_attempt(signing_key: SigningKey, digest: bytes, attempt: int) -> bytes:
    """Low-S r || s for one nonce attempt over digest."""
    if not attempt:
        return signing_key.sign_digest_deterministic(
            digest,
            hashfunc=hashlib.sha256,
            sigencode=sigencode_string_canonize,
        )
    k = generate_k(
        SECP256k1.order,
        signing_key.privkey.secret_multiplier,
        hashlib.sha256,
        hashes.sha256(digest + bytes(attempt)),
    )
    return signing_key.sign_digest(digest, k=k, sigencode=sigencode_string_canonize)


def _recover(rs: bytes, digest: bytes) -> List[VerifyingKey]:
    # Candidates come back ordered by the parity of R's y coordinate
    return VerifyingKey.from_public_key_recovery_with_digest(
        rs,
        digest,
        SECP256k1,
        hashfunc=hashlib.sha256,
        sigdecode=sigdecode_string,
    )


# =============================================================================
# Convenience
# =============================================================================

def generate_key_pair(
    dictionary: Optional[Union[str, Sequence[str]]] = None,
    prefix: str = DEFAULT_ADDRESS_PREFIX
) -> KeyPair:
    """
    Generate a fresh brain key and the key pair it derives.

    Returns:
        KeyPair with brain key, WIF and public key string.
    """
    brain_key = suggest_brain_key(dictionary)
    private_key = PrivateKey.from_brain_key(brain_key)
    return KeyPair(
        brain_key=brain_key,
        private_key=private_key.to_wif(),
        public_key=private_key.public_key.to_string(prefix),
    )


def public_key_from_wif(wif: str, prefix: str = DEFAULT_ADDRESS_PREFIX) -> str:
    """Public key string for a WIF private key."""
    return PrivateKey.from_wif(wif).public_key.to_string(prefix)
