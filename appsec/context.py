"""
CryptoContext
=============
One object owning all secret state: the AES key store, the RSA key store
and the engines bound to them. Create one per application (or per test);
default_context() returns a lazily built process-wide instance for code
that uses the module-level functions in appsec.api.
"""

import threading
from typing import Optional

from .ciphers import AESGCMEngine, RSAOAEPEngine
from .keystore import AsymmetricKeyStore, SymmetricKeyStore


class CryptoContext:
    """Key stores plus the AES-GCM and RSA-OAEP engines that read them."""

    def __init__(self):
        self.symmetric  = SymmetricKeyStore()
        self.asymmetric = AsymmetricKeyStore()
        self.aes = AESGCMEngine(self.symmetric)
        self.rsa = RSAOAEPEngine(self.asymmetric)

    # -- key configuration --

    def initialize_symmetric_key(self, key: bytes) -> None:
        self.symmetric.initialize(key)

    def load_private_key(self, path: str) -> None:
        self.asymmetric.load_private_key(path)

    def load_public_key(self, path: str) -> None:
        self.asymmetric.load_public_key(path)

    # -- operations --

    def encrypt_aes_gcm(self, plaintext) -> bytes:
        return self.aes.encrypt(plaintext)

    def decrypt_aes_gcm(self, sealed) -> bytes:
        return self.aes.decrypt(sealed)

    def encrypt_oaep(self, plaintext, label: str = "") -> str:
        return self.rsa.encrypt(plaintext, label)

    def decrypt_oaep(self, ciphertext: str, label: str = "") -> bytes:
        return self.rsa.decrypt(ciphertext, label)

    def __repr__(self):
        return (
            f"CryptoContext(aes_key={'set' if self.symmetric.is_initialized else 'unset'}, "
            f"private_key={self.asymmetric.has_private_key}, "
            f"public_key={self.asymmetric.has_public_key})"
        )


_default: Optional[CryptoContext] = None
_default_lock = threading.Lock()


def default_context() -> CryptoContext:
    global _default
    with _default_lock:
        if _default is None:
            _default = CryptoContext()
        return _default


def reset_default_context() -> CryptoContext:
    """Replace the process-wide context with a fresh, empty one."""
    global _default
    with _default_lock:
        _default = CryptoContext()
        return _default
