"""Unit tests for key and signature text formats."""

from __future__ import annotations

import base58
import pytest
from eth_keys import keys

from laakhay.chain.auth import (
    decode_public_key,
    decode_signature,
    encode_public_key,
    normalize_public_key,
    recover_public_key,
    sign_message,
)
from laakhay.chain.core.exceptions import SignatureError

DEV_WIF = "5KQwrPbwdL6PhXujxW37FSSQZ1JiwsST4cqQzDeyXtP79zkvFD3"
DEV_PUBLIC_KEY = "EOS6MRyAjQq8ud7hVNYcfnVPJqcVpscN5So8BhtHuGYqET5GDW5CV"


@pytest.fixture
def dev_private_key() -> bytes:
    # WIF: version byte, 32-byte key, 4-byte checksum
    return base58.b58decode(DEV_WIF)[1:33]


def test_legacy_public_key_encoding(dev_private_key):
    public_key = keys.PrivateKey(dev_private_key).public_key
    assert encode_public_key(public_key) == DEV_PUBLIC_KEY


def test_k1_form_normalizes_to_legacy(dev_private_key):
    public_key = keys.PrivateKey(dev_private_key).public_key
    k1 = encode_public_key(public_key, legacy=False)

    assert k1.startswith("PUB_K1_")
    assert decode_public_key(k1) == public_key.to_compressed_bytes()
    assert normalize_public_key(k1) == DEV_PUBLIC_KEY


def test_sign_then_recover(dev_private_key):
    signature = sign_message(dev_private_key, "hello ledger")

    assert signature.startswith("SIG_K1_")
    assert recover_public_key(signature, "hello ledger") == DEV_PUBLIC_KEY
    assert recover_public_key(signature, b"hello ledger") == DEV_PUBLIC_KEY


def test_other_message_recovers_other_key(dev_private_key):
    signature = sign_message(dev_private_key, "hello ledger")
    assert recover_public_key(signature, "goodbye ledger") != DEV_PUBLIC_KEY


def test_corrupted_checksum_rejected(dev_private_key):
    signature = sign_message(dev_private_key, "hello")
    raw = bytearray(base58.b58decode(signature[len("SIG_K1_"):]))
    raw[-1] ^= 0xFF
    corrupted = "SIG_K1_" + base58.b58encode(bytes(raw)).decode()

    with pytest.raises(SignatureError, match="Checksum"):
        decode_signature(corrupted)


@pytest.mark.parametrize("text", ["SIG_R1_abc", "not a signature"])
def test_unsupported_signature_formats(text):
    with pytest.raises(SignatureError):
        decode_signature(text)


def test_unsupported_key_format():
    with pytest.raises(SignatureError):
        decode_public_key("PUB_R1_abc")
