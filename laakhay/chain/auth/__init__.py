"""Signature recovery and authorization."""

from .authorizer import SignatureAuthorizer, SignPlugin, Validator
from .keys import (
    decode_public_key,
    decode_signature,
    encode_public_key,
    encode_signature,
    normalize_public_key,
    recover_public_key,
    sign_message,
)

__all__ = [
    "SignatureAuthorizer",
    "SignPlugin",
    "Validator",
    "recover_public_key",
    "sign_message",
    "encode_public_key",
    "decode_public_key",
    "normalize_public_key",
    "encode_signature",
    "decode_signature",
]
