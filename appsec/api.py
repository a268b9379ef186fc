"""
Module-level API over the process-wide CryptoContext.

    init_aes(key)                    install the 32-byte AES key
    encrypt_aes_gcm(secret)          -> nonce || ciphertext || tag
    decrypt_aes_gcm(sealed)          -> plaintext bytes
    load_private_key(path="")        PKCS#8 PEM, default <program dir>/app.key
    load_public_key(path="")         X.509 PEM, default <program dir>/app.crt
    encrypt_oaep(secret, label)      -> base64 text
    decrypt_oaep(cipher, label)      -> plaintext str

Call the init/load functions once at startup, before concurrent use.
"""

from .config import resolve_certificate_path, resolve_private_key_path
from .context import default_context


def init_aes(key: bytes) -> None:
    default_context().initialize_symmetric_key(key)


def encrypt_aes_gcm(secret) -> bytes:
    return default_context().encrypt_aes_gcm(secret)


def decrypt_aes_gcm(sealed: bytes) -> bytes:
    return default_context().decrypt_aes_gcm(sealed)


def load_private_key(path: str = "") -> None:
    """
    Load the RSA private key (and its public half) from a PKCS#8 PEM file.
    An empty path means app.key in the program's directory.
    """
    default_context().load_private_key(resolve_private_key_path(path))


def load_public_key(path: str = "") -> None:
    """
    Load the RSA public key from a PEM X.509 certificate.
    An empty path means app.crt in the program's directory.
    """
    default_context().load_public_key(resolve_certificate_path(path))


def encrypt_oaep(secret, label: str = "") -> str:
    return default_context().encrypt_oaep(secret, label)


def decrypt_oaep(cipher: str, label: str = "") -> str:
    """The label must match the value given when encrypting."""
    return default_context().rsa.decrypt_text(cipher, label)
