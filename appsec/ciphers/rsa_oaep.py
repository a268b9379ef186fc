"""
RSA-OAEP Engine
===============
RSA public-key encryption with OAEP padding over an AsymmetricKeyStore.

OAEP uses SHA-256 as both the hash and the MGF1 mask hash. The label is an
application string agreed out of band; decrypting with a different label
fails exactly like decrypting corrupt ciphertext, so a caller learns only
that decryption failed.

Plaintext limit: modulus bytes - 2 * 32 - 2
    (190 bytes for RSA-2048, 446 bytes for RSA-4096)

Wire format: standard base64 of the raw OAEP ciphertext.

Dependencies: cryptography >= 41.0
"""

import base64
import binascii
import logging
from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from ..errors import DecryptionFailed, InvalidEncoding, KeyNotLoaded, MessageTooLong
from ..keystore import AsymmetricKeyStore

logger = logging.getLogger(__name__)


class RSAOAEPEngine:
    """RSA-OAEP (SHA-256) encryption / decryption."""

    HASH_SIZE = 32

    def __init__(self, store: AsymmetricKeyStore):
        self._store = store

    def _oaep(self, label: str):
        return padding.OAEP(
            mgf=padding.MGF1(algorithm=hashes.SHA256()),
            algorithm=hashes.SHA256(),
            label=label.encode("utf-8") or None,
        )

    def _public_key(self):
        _, public_key = self._store.snapshot()
        if public_key is None:
            raise KeyNotLoaded("public")
        return public_key

    def max_plaintext_size(self) -> int:
        modulus_bytes = (self._public_key().key_size + 7) // 8
        return modulus_bytes - 2 * self.HASH_SIZE - 2

    def encrypt(self, plaintext: Union[bytes, str], label: str = "") -> str:
        """Encrypt with the loaded public key. Returns base64 text."""
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")
        if not isinstance(plaintext, (bytes, bytearray, memoryview)):
            raise TypeError("plaintext must be bytes or str")
        public_key = self._public_key()
        limit = (public_key.key_size + 7) // 8 - 2 * self.HASH_SIZE - 2
        if len(plaintext) > limit:
            raise MessageTooLong(len(plaintext), limit)
        ct = public_key.encrypt(bytes(plaintext), self._oaep(label))
        logger.debug(f"RSA-OAEP encrypted {len(plaintext)}B under RSA-{public_key.key_size}")
        return base64.b64encode(ct).decode("ascii")

    def decrypt(self, ciphertext: str, label: str = "") -> bytes:
        """
        Decrypt base64 text with the loaded private key.
        The label must match the one given when encrypting.
        """
        private_key, _ = self._store.snapshot()
        if private_key is None:
            raise KeyNotLoaded("private")
        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidEncoding("ciphertext is not valid base64") from e
        try:
            return private_key.decrypt(raw, self._oaep(label))
        except ValueError:
            raise DecryptionFailed() from None

    def decrypt_text(self, ciphertext: str, label: str = "") -> str:
        """
        decrypt() as str. Bytes that are not valid UTF-8 become lone
        surrogates; encode with errors="surrogateescape" to get them back.
        """
        return self.decrypt(ciphertext, label).decode("utf-8", errors="surrogateescape")
