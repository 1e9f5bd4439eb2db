"""EOSIO account name <-> uint64 conversion.

Table keys indexed by account name are stored as the uint64 encoding of the
name, so numeric range arithmetic over such tables (``scan_range`` with a name
as its start) needs the encoded value.
"""

from __future__ import annotations

_CHARMAP = ".12345abcdefghijklmnopqrstuvwxyz"


def _char_to_symbol(c: str) -> int:
    if "a" <= c <= "z":
        return ord(c) - ord("a") + 6
    if "1" <= c <= "5":
        return ord(c) - ord("1") + 1
    if c == ".":
        return 0
    raise ValueError(f"Invalid character {c!r} in account name")


def encode_name(name: str) -> int:
    """Encode an account name as its uint64 value.

    Args:
        name: Account name (up to 13 characters, ``.12345a-z``; the 13th
            character is limited to ``.1-5a-j``)

    Returns:
        Encoded name as an int

    Raises:
        ValueError: If the name is too long or contains invalid characters

    Examples:
        >>> encode_name("eosio")
        6138663577826885632
        >>> encode_name("")
        0
    """
    if len(name) > 13:
        raise ValueError(f"Account name {name!r} is longer than 13 characters")

    value = 0
    for i, c in enumerate(name):
        symbol = _char_to_symbol(c)
        if i < 12:
            value |= (symbol & 0x1F) << (64 - 5 * (i + 1))
        else:
            if symbol > 0x0F:
                raise ValueError(f"Invalid 13th character {c!r} in account name")
            value |= symbol & 0x0F
    return value


def decode_name(value: int) -> str:
    """Decode a uint64 value back into an account name.

    Examples:
        >>> decode_name(6138663577826885632)
        'eosio'
    """
    if value < 0 or value >= 1 << 64:
        raise ValueError(f"Name value {value} is out of uint64 range")

    chars = []
    tmp = value
    for i in range(13):
        if i == 0:
            chars.append(_CHARMAP[tmp & 0x0F])
            tmp >>= 4
        else:
            chars.append(_CHARMAP[tmp & 0x1F])
            tmp >>= 5
    return "".join(reversed(chars)).rstrip(".")
