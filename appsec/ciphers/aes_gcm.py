"""
AES-256-GCM Engine
==================
Authenticated encryption under the key held by a SymmetricKeyStore.

GCM produces a 128-bit authentication tag alongside the ciphertext. Any
change to the nonce, ciphertext or tag is detected when opening, and
nothing is returned unless the tag verifies.

Key:    256 bits (32 bytes), read from the store on every call.
Nonce:   96 bits (12 bytes), fresh from os.urandom per message.
Tag:    128 bits (16 bytes).
AAD:    none.

Sealed format: nonce(12) || ciphertext || tag(16)

Dependencies: cryptography >= 41.0
"""

import logging
import os
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..errors import (
    AuthenticationFailed,
    InputTooShort,
    InvalidKeyLength,
    RandomnessUnavailable,
)
from ..keystore import SymmetricKeyStore

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class AESGCMEngine:
    """AES-256-GCM seal/open over a SymmetricKeyStore."""

    KEY_SIZE   = 32   # 256-bit key
    NONCE_SIZE = 12   # 96-bit nonce (GCM standard)
    TAG_SIZE   = 16

    def __init__(self, store: SymmetricKeyStore):
        self._store = store

    def _cipher(self) -> AESGCM:
        key = self._store.snapshot()
        if len(key) != self.KEY_SIZE:
            raise InvalidKeyLength(len(key))
        return AESGCM(key)

    def _nonce(self) -> bytes:
        try:
            return os.urandom(self.NONCE_SIZE)
        except (OSError, NotImplementedError) as e:
            raise RandomnessUnavailable("system entropy source failed") from e

    def encrypt(self, plaintext: Union[BytesLike, str]) -> bytes:
        """
        Encrypt and authenticate. str input is encoded as UTF-8.
        Returns: nonce || ciphertext || tag
        """
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")
        if not isinstance(plaintext, (bytes, bytearray, memoryview)):
            raise TypeError("plaintext must be bytes or str")
        aesgcm = self._cipher()
        nonce  = self._nonce()
        ct     = aesgcm.encrypt(nonce, bytes(plaintext), None)
        logger.debug(f"AES-GCM sealed {len(plaintext)}B -> {len(ct) + self.NONCE_SIZE}B")
        return nonce + ct

    def decrypt(self, sealed: BytesLike) -> bytes:
        """
        Verify the tag and decrypt.
        Raises InputTooShort if there is no room for a nonce and
        AuthenticationFailed for every other rejection.
        """
        if not isinstance(sealed, (bytes, bytearray, memoryview)):
            raise TypeError("sealed message must be bytes")
        sealed = bytes(sealed)
        aesgcm = self._cipher()
        if len(sealed) < self.NONCE_SIZE:
            raise InputTooShort(len(sealed), self.NONCE_SIZE)
        nonce = sealed[:self.NONCE_SIZE]
        ct    = sealed[self.NONCE_SIZE:]
        try:
            plaintext = aesgcm.decrypt(nonce, ct, None)
        except InvalidTag:
            raise AuthenticationFailed() from None
        logger.debug(f"AES-GCM opened {len(sealed)}B -> {len(plaintext)}B")
        return plaintext
