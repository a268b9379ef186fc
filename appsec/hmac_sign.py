"""
HMAC Signatures
===============
HMAC-SHA256 / HMAC-SHA512 over a message and shared secret, returned as
standard base64 text. Matching recomputes the signature and compares in
constant time.
"""

import base64
import hashlib
import hmac
from enum import Enum
from typing import Union

Text = Union[str, bytes]


class MACAlgo(str, Enum):
    HMAC256 = "HMAC256"
    HMAC512 = "HMAC512"


_DIGESTS = {
    MACAlgo.HMAC256: hashlib.sha256,
    MACAlgo.HMAC512: hashlib.sha512,
}


def _b(value: Text) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def compute_hmac(algo: MACAlgo, message: Text, secret: Text) -> str:
    digest = hmac.new(_b(secret), _b(message), _DIGESTS[MACAlgo(algo)]).digest()
    return base64.b64encode(digest).decode("ascii")


def is_matched_hmac(algo: MACAlgo, signature: Text, message: Text, secret: Text) -> bool:
    expected = compute_hmac(algo, message, secret).encode("ascii")
    return hmac.compare_digest(expected, _b(signature))


def compute_hmac256(message: Text, secret: Text) -> str:
    """Base64 HMAC-SHA256 signature of message under secret."""
    return compute_hmac(MACAlgo.HMAC256, message, secret)


def compute_hmac512(message: Text, secret: Text) -> str:
    """Base64 HMAC-SHA512 signature of message under secret."""
    return compute_hmac(MACAlgo.HMAC512, message, secret)


def is_matched_hmac256(signature: Text, message: Text, secret: Text) -> bool:
    return is_matched_hmac(MACAlgo.HMAC256, signature, message, secret)


def is_matched_hmac512(signature: Text, message: Text, secret: Text) -> bool:
    return is_matched_hmac(MACAlgo.HMAC512, signature, message, secret)
