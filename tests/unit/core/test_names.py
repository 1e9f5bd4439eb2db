"""Unit tests for account name encoding."""

import pytest

from laakhay.chain.core import decode_name, encode_name


@pytest.mark.parametrize(
    "name,value",
    [
        ("eosio", 6138663577826885632),
        ("eosio.token", 6138663591592764928),
        ("", 0),
    ],
)
def test_encode_known_names(name, value):
    assert encode_name(name) == value


@pytest.mark.parametrize("name", ["alice", "eosio.token", "a1b2c3d4e5", "zzzzzzzzzzzzj"])
def test_decode_inverts_encode(name):
    assert decode_name(encode_name(name)) == name


def test_encoding_preserves_order():
    assert encode_name("alice") < encode_name("bob") < encode_name("carol")


@pytest.mark.parametrize("name", ["Alice", "toolongname123", "has space", "zzzzzzzzzzzzz"])
def test_invalid_names_rejected(name):
    with pytest.raises(ValueError):
        encode_name(name)


def test_decode_out_of_range():
    with pytest.raises(ValueError):
        decode_name(1 << 64)
