"""
aecli.encoding
==============

Tagged identifier codec for æternity API strings.

Format
------
Every API string is ``<prefix>_<body>``. The body is either base58 or base64
over ``payload || checksum`` where::

    checksum = sha256(sha256(payload))[:4]

Base58 tags name things on chain (accounts, oracles, queries, hashes); base64
tags carry opaque byte arrays (query/response payloads, contract bytearrays,
serialized transactions).

This module provides:
- encode(prefix, payload) -> str
- decode(value, expected_prefix=None) -> bytes
- is_valid(value, prefix) -> bool
- assert_tagged(value, prefix, label) -> str   (raises InvalidIdentifier)
- decode_text(value) -> str                     (ov_/or_ payloads as text)
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from typing import Dict, Optional, Tuple

from .errors import InvalidIdentifier

__all__ = [
    "BASE58_PREFIXES",
    "BASE64_PREFIXES",
    "EncodingError",
    "encode",
    "decode",
    "split",
    "is_valid",
    "assert_tagged",
    "decode_text",
]

# prefix -> fixed payload size (None: any size)
BASE58_PREFIXES: Dict[str, Optional[int]] = {
    "ak": 32,  # account pubkey
    "ok": 32,  # oracle pubkey
    "oq": 32,  # oracle query id
    "ct": 32,  # contract pubkey
    "th": 32,  # transaction hash
    "kh": 32,  # key block hash
    "mh": 32,  # micro block hash
    "nm": 32,  # name id
    "bf": 32,
    "bs": 32,
    "bx": 32,
    "ch": 32,
    "cm": 32,
    "sg": None,
}
BASE64_PREFIXES: Dict[str, Optional[int]] = {
    "ov": None,  # oracle query payload
    "or": None,  # oracle response payload
    "cb": None,  # contract bytearray
    "tx": None,  # serialized transaction
    "ba": None,
    "st": None,
    "pi": None,
    "ss": None,
    "cs": None,
    "ck": None,
}

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {c: i for i, c in enumerate(_B58_ALPHABET)}


class EncodingError(ValueError):
    """Raised for malformed or invalid tagged strings."""


# ---- Checksum -----------------------------------------------------------------


def _checksum(payload: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:4]


def _with_checksum(payload: bytes) -> bytes:
    return payload + _checksum(payload)


def _strip_checksum(raw: bytes) -> bytes:
    if len(raw) < 4:
        raise EncodingError("encoded data too short for checksum")
    payload, check = raw[:-4], raw[-4:]
    if _checksum(payload) != check:
        raise EncodingError("invalid checksum")
    return payload


# ---- Base58 -------------------------------------------------------------------


def _b58encode(data: bytes) -> str:
    n = int.from_bytes(data, "big")
    out = []
    while n:
        n, r = divmod(n, 58)
        out.append(_B58_ALPHABET[r])
    pad = len(data) - len(data.lstrip(b"\0"))
    return "1" * pad + "".join(reversed(out))


def _b58decode(s: str) -> bytes:
    if not s:
        raise EncodingError("empty base58 string")
    n = 0
    for ch in s:
        idx = _B58_INDEX.get(ch)
        if idx is None:
            raise EncodingError(f"invalid base58 character {ch!r}")
        n = n * 58 + idx
    pad = len(s) - len(s.lstrip("1"))
    body = n.to_bytes((n.bit_length() + 7) // 8, "big") if n else b""
    return b"\0" * pad + body


# ---- Public API ---------------------------------------------------------------


def split(value: str) -> Tuple[str, str]:
    """Split ``<prefix>_<body>`` into its two parts."""
    if not isinstance(value, str) or "_" not in value:
        raise EncodingError(f"not a tagged string: {value!r}")
    prefix, body = value.split("_", 1)
    if not body:
        raise EncodingError(f"empty body in {value!r}")
    return prefix, body


def encode(prefix: str, payload: bytes) -> str:
    if prefix in BASE58_PREFIXES:
        return f"{prefix}_{_b58encode(_with_checksum(bytes(payload)))}"
    if prefix in BASE64_PREFIXES:
        body = base64.b64encode(_with_checksum(bytes(payload))).decode("ascii")
        return f"{prefix}_{body}"
    raise EncodingError(f"unknown prefix {prefix!r}")


def decode(value: str, expected_prefix: Optional[str] = None) -> bytes:
    prefix, body = split(value)
    if expected_prefix is not None and prefix != expected_prefix:
        raise EncodingError(f"expected prefix {expected_prefix!r}, got {prefix!r}")

    if prefix in BASE58_PREFIXES:
        payload = _strip_checksum(_b58decode(body))
        size = BASE58_PREFIXES[prefix]
    elif prefix in BASE64_PREFIXES:
        try:
            raw = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise EncodingError(f"invalid base64 body: {e}") from e
        payload = _strip_checksum(raw)
        size = BASE64_PREFIXES[prefix]
    else:
        raise EncodingError(f"unknown prefix {prefix!r}")

    if size is not None and len(payload) != size:
        raise EncodingError(f"{prefix}_ payload must be {size} bytes, got {len(payload)}")
    return payload


def is_valid(value: str, prefix: str) -> bool:
    try:
        decode(value, expected_prefix=prefix)
    except EncodingError:
        return False
    return True


def assert_tagged(value: str, prefix: str, label: str) -> str:
    """Return `value` if it is a valid `prefix_` id, else raise InvalidIdentifier."""
    if not is_valid(value, prefix):
        raise InvalidIdentifier(f"Invalid {label}", value=value, expected_prefix=prefix)
    return value


def decode_text(value: str) -> str:
    """Decode a base64check payload (``ov_``/``or_``) into text."""
    return decode(value).decode("utf-8", errors="replace")
