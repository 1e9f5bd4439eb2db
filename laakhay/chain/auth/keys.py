"""EOSIO K1 key and signature text formats, and public-key recovery.

Formats:
    - Legacy public key: ``EOS`` + base58(pubkey33 + ripemd160(pubkey33)[:4])
    - Public key: ``PUB_K1_`` + base58(pubkey33 + ripemd160(pubkey33 + b"K1")[:4])
    - Signature: ``SIG_K1_`` + base58(sig65 + ripemd160(sig65 + b"K1")[:4]),
      where sig65 = recovery byte (27 + 4 + i) || r || s

Messages are hashed with SHA-256 before signing, as eosjs-ecc does.
"""

from __future__ import annotations

import hashlib

import base58
from Crypto.Hash import RIPEMD160
from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError

from ..core.exceptions import SignatureError

LEGACY_KEY_PREFIX = "EOS"
K1_KEY_PREFIX = "PUB_K1_"
K1_SIG_PREFIX = "SIG_K1_"

_K1_SUFFIX = b"K1"
_RECOVERY_OFFSET = 27 + 4  # compressed-key recovery ids


def _ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


def _checksum(data: bytes, suffix: bytes = b"") -> bytes:
    return _ripemd160(data + suffix)[:4]


def _decode_checked(payload: str, size: int, suffix: bytes, what: str) -> bytes:
    try:
        raw = base58.b58decode(payload)
    except ValueError as e:
        raise SignatureError(f"Invalid base58 in {what}") from e
    if len(raw) != size + 4:
        raise SignatureError(f"Invalid {what} length: {len(raw)}")
    data, check = raw[:size], raw[size:]
    if _checksum(data, suffix) != check:
        raise SignatureError(f"Checksum mismatch in {what}")
    return data


def message_digest(message: str | bytes) -> bytes:
    """SHA-256 of the message (UTF-8 encoded when given as text)."""
    data = message.encode("utf-8") if isinstance(message, str) else message
    return hashlib.sha256(data).digest()


def encode_public_key(public_key: bytes | keys.PublicKey, *, legacy: bool = True) -> str:
    """Encode a secp256k1 public key in EOSIO text form.

    Args:
        public_key: 33-byte compressed key or an eth_keys PublicKey
        legacy: ``EOS...`` form when True, ``PUB_K1_...`` otherwise
    """
    if isinstance(public_key, keys.PublicKey):
        public_key = public_key.to_compressed_bytes()
    if len(public_key) != 33:
        raise SignatureError(f"Compressed public key must be 33 bytes, got {len(public_key)}")
    if legacy:
        return LEGACY_KEY_PREFIX + base58.b58encode(public_key + _checksum(public_key)).decode()
    check = _checksum(public_key, _K1_SUFFIX)
    return K1_KEY_PREFIX + base58.b58encode(public_key + check).decode()


def decode_public_key(text: str) -> bytes:
    """Return the 33-byte compressed key of an ``EOS...`` or ``PUB_K1_...`` string."""
    if text.startswith(K1_KEY_PREFIX):
        return _decode_checked(text[len(K1_KEY_PREFIX):], 33, _K1_SUFFIX, "public key")
    if text.startswith(LEGACY_KEY_PREFIX):
        return _decode_checked(text[len(LEGACY_KEY_PREFIX):], 33, b"", "public key")
    raise SignatureError(f"Unsupported public key format: {text[:8]}...")


def normalize_public_key(text: str) -> str:
    """Legacy ``EOS...`` form of any supported public key string."""
    return encode_public_key(decode_public_key(text))


def encode_signature(signature: keys.Signature) -> str:
    """Encode an eth_keys signature as ``SIG_K1_...``."""
    data = (
        bytes([_RECOVERY_OFFSET + signature.v])
        + signature.r.to_bytes(32, "big")
        + signature.s.to_bytes(32, "big")
    )
    return K1_SIG_PREFIX + base58.b58encode(data + _checksum(data, _K1_SUFFIX)).decode()


def decode_signature(text: str) -> keys.Signature:
    """Parse a ``SIG_K1_...`` string into an eth_keys signature."""
    if not text.startswith(K1_SIG_PREFIX):
        raise SignatureError(f"Unsupported signature format: {text[:8]}...")
    data = _decode_checked(text[len(K1_SIG_PREFIX):], 65, _K1_SUFFIX, "signature")

    recovery = data[0] - 27
    if recovery >= 4:
        recovery -= 4
    if recovery not in (0, 1):
        raise SignatureError(f"Invalid recovery id in signature: {data[0]}")
    try:
        return keys.Signature(
            vrs=(recovery, int.from_bytes(data[1:33], "big"), int.from_bytes(data[33:65], "big"))
        )
    except ValidationError as e:
        raise SignatureError(f"Invalid signature values: {e}") from e


def recover_public_key(signature: str, message: str | bytes) -> str:
    """Recover the signer's public key.

    Args:
        signature: ``SIG_K1_...`` signature
        message: Signed message (text is UTF-8 encoded)

    Returns:
        Public key in legacy ``EOS...`` form

    Raises:
        SignatureError: If the signature is malformed or no key can be recovered
    """
    sig = decode_signature(signature)
    try:
        public_key = sig.recover_public_key_from_msg_hash(message_digest(message))
    except (BadSignature, ValidationError) as e:
        raise SignatureError(f"Cannot recover public key: {e}") from e
    return encode_public_key(public_key)


def sign_message(private_key: bytes, message: str | bytes) -> str:
    """Sign ``message`` with a raw 32-byte private key, returning ``SIG_K1_...``."""
    signature = keys.PrivateKey(private_key).sign_msg_hash(message_digest(message))
    return encode_signature(signature)
