"""Bech32 account addresses and module account derivation."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable

DEFAULT_PREFIX = "cosmos"

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_DECODE_LIMIT = 1023
_MAX_ADDRESS_LENGTH = 255


def _polymod(values: Iterable[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ value
        for i, gen in enumerate(_GENERATOR):
            if (top >> i) & 1:
                chk ^= gen
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _create_checksum(hrp: str, data: list[int]) -> list[int]:
    pm = _polymod(_hrp_expand(hrp) + data + [0] * 6) ^ 1
    return [(pm >> 5 * (5 - i)) & 31 for i in range(6)]


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    maxv = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value >> from_bits:
            raise ValueError("invalid data range")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & maxv)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or (acc << (to_bits - bits)) & maxv:
        raise ValueError("invalid padding in bech32 data")
    return out


def _decode(text: str) -> tuple[str, list[int]]:
    if len(text) < 8 or len(text) > _DECODE_LIMIT:
        raise ValueError(f"invalid bech32 string length {len(text)}")
    if any(not 33 <= ord(c) <= 126 for c in text):
        raise ValueError("invalid character in bech32 string")
    lower = text.lower()
    if text != lower and text != text.upper():
        raise ValueError("bech32 string is not all lowercase or all uppercase")
    text = lower
    sep = text.rfind("1")
    if sep < 1 or sep + 7 > len(text):
        raise ValueError("invalid bech32 separator position")
    hrp = text[:sep]
    data = [_CHARSET.find(c) for c in text[sep + 1 :]]
    if -1 in data:
        raise ValueError("invalid character in bech32 data")
    if _polymod(_hrp_expand(hrp) + data) != 1:
        raise ValueError("invalid bech32 checksum")
    return hrp, data[:-6]


def _encode(hrp: str, data: list[int]) -> str:
    combined = data + _create_checksum(hrp, data)
    return hrp + "1" + "".join(_CHARSET[d] for d in combined)


def _verify_address_format(data: bytes) -> None:
    if not data:
        raise ValueError("addresses cannot be empty")
    if len(data) > _MAX_ADDRESS_LENGTH:
        raise ValueError(f"address max length is {_MAX_ADDRESS_LENGTH}, got {len(data)}")


class Bech32Codec:
    """Converts between raw address bytes and bech32 strings with one prefix."""

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self.prefix = prefix

    def string_to_bytes(self, text: str) -> bytes:
        """Decode a bech32 address; raise ValueError if it is malformed."""
        if not text.strip():
            raise ValueError("empty address string is not allowed")
        hrp, data = _decode(text)
        raw = bytes(_convert_bits(data, 5, 8, False))
        if hrp != self.prefix:
            raise ValueError(
                f"hrp does not match bech32 prefix: expected '{self.prefix}' got '{hrp}'"
            )
        _verify_address_format(raw)
        return raw

    def bytes_to_string(self, data: bytes) -> str:
        """Encode raw bytes; empty input gives an empty string."""
        if not data:
            return ""
        return _encode(self.prefix, _convert_bits(data, 8, 5, True))


def module_address(name: str) -> bytes:
    """Return the 20-byte account address of a named module."""
    return hashlib.sha256(name.encode()).digest()[:20]


def module_address_or_bech32(value: str) -> bytes:
    """Decode a bech32 address, or derive a module address from the name."""
    try:
        return Bech32Codec(DEFAULT_PREFIX).string_to_bytes(value)
    except ValueError:
        return module_address(value)