"""
Request signing for the Baidu translation backend.

The Baidu API authenticates each call with
``md5(appid + q + salt + secret_key)``.  This module carries its own MD5
(RFC 1321) so the signing path has no dependency on the platform's
``hashlib`` build; the digest is the standard one and is checked against
the RFC test suite in ``tests/test_signature.py``.

MD5 is used here purely as a request checksum.  It is not a security
primitive.

Public symbols
--------------
* :class:`MD5`            — incremental hasher with a ``hashlib``-style API.
* :func:`md5_hexdigest`   — one-shot digest of a ``bytes`` value.
* :func:`sign_request`    — the Baidu request signature.

Example
-------
>>> from src.utils.signature import md5_hexdigest, sign_request
>>> md5_hexdigest(b"abc")
'900150983cd24fb0d6963f7d28e17f72'
>>> len(sign_request("2015063000000001", "apple", "1435660288", "12345678"))
32
"""

import math
import struct
from typing import List

_MASK = 0xFFFFFFFF

# Per-step left-rotation amounts, four per round.
_SHIFTS: List[int] = (
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)

# K[i] = floor(abs(sin(i + 1)) * 2**32)
_CONSTANTS: List[int] = [
    int(abs(math.sin(i + 1)) * 2 ** 32) & _MASK for i in range(64)
]

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


def _rotate_left(value: int, amount: int) -> int:
    value &= _MASK
    return ((value << amount) | (value >> (32 - amount))) & _MASK


def _compress(state: List[int], block: bytes) -> None:
    """Fold one 64-byte block into *state* in place."""
    words = struct.unpack("<16I", block)
    a, b, c, d = state

    for i in range(64):
        if i < 16:
            f = (b & c) | (~b & d)
            g = i
        elif i < 32:
            f = (d & b) | (~d & c)
            g = (5 * i + 1) % 16
        elif i < 48:
            f = b ^ c ^ d
            g = (3 * i + 5) % 16
        else:
            f = c ^ (b | (~d & _MASK))
            g = (7 * i) % 16

        f = (f + a + _CONSTANTS[i] + words[g]) & _MASK
        a, d, c = d, c, b
        b = (b + _rotate_left(f, _SHIFTS[i])) & _MASK

    state[0] = (state[0] + a) & _MASK
    state[1] = (state[1] + b) & _MASK
    state[2] = (state[2] + c) & _MASK
    state[3] = (state[3] + d) & _MASK


class MD5:
    """
    Incremental MD5 hasher.

    Mirrors the small part of the ``hashlib`` interface the signer needs:
    :meth:`update`, :meth:`digest`, :meth:`hexdigest` and :meth:`copy`.
    Finalising does not consume the object, so ``update`` may be called
    again after ``hexdigest``.

    Example:
        >>> h = MD5()
        >>> h.update(b"a")
        >>> h.update(b"bc")
        >>> h.hexdigest()
        '900150983cd24fb0d6963f7d28e17f72'
    """

    digest_size = 16
    block_size = 64

    def __init__(self, data: bytes = b""):
        self._state = list(_INITIAL_STATE)
        self._buffer = b""
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        """Feed *data* into the hash."""
        if isinstance(data, str):
            raise TypeError("Strings must be encoded before hashing")

        data = bytes(data)
        self._length += len(data)
        buffer = self._buffer + data

        offset = 0
        while offset + 64 <= len(buffer):
            _compress(self._state, buffer[offset:offset + 64])
            offset += 64

        self._buffer = buffer[offset:]

    def digest(self) -> bytes:
        """Return the 16-byte digest of everything fed so far."""
        state = list(self._state)
        bit_length = (self._length * 8) & 0xFFFFFFFFFFFFFFFF

        # 0x80, zero fill to 56 mod 64, then the 64-bit little-endian length
        padding = b"\x80" + b"\x00" * ((55 - self._length) % 64)
        tail = self._buffer + padding + struct.pack("<Q", bit_length)

        for offset in range(0, len(tail), 64):
            _compress(state, tail[offset:offset + 64])

        return struct.pack("<4I", *state)

    def hexdigest(self) -> str:
        """Return the digest as 32 lowercase hex characters."""
        return self.digest().hex()

    def copy(self) -> "MD5":
        """Return an independent hasher with the same internal state."""
        clone = MD5()
        clone._state = list(self._state)
        clone._buffer = self._buffer
        clone._length = self._length
        return clone


def md5_hexdigest(data: bytes) -> str:
    """
    Compute the MD5 digest of *data* as a lowercase hex string.

    Args:
        data: Bytes to hash.

    Returns:
        32-character lowercase hexadecimal digest.
    """
    return MD5(data).hexdigest()


def sign_request(app_id: str, text: str, salt: str, secret_key: str) -> str:
    """
    Build the Baidu request signature.

    Args:
        app_id: Baidu application id.
        text: The query text exactly as sent in the ``q`` parameter.
        salt: Per-request salt (millisecond timestamp as a decimal string).
        secret_key: Baidu secret key.

    Returns:
        ``md5(app_id + text + salt + secret_key)`` over the UTF-8 encoding.
    """
    return md5_hexdigest(f"{app_id}{text}{salt}{secret_key}".encode("utf-8"))
