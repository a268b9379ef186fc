"""
appsec — Application Security Utilities
=======================================
Authenticated encryption, key loading, message authentication and
checksums for application code.

Components:
    SYMMETRIC   — AES-256-GCM under a process-wide 32-byte key
    ASYMMETRIC  — RSA-OAEP (SHA-256) with keys loaded from PEM files
                  (PKCS#8 private key, X.509 certificate public key)
    MAC         — HMAC-SHA256 / HMAC-SHA512, base64 signatures
    CHECKSUM    — CRC-32 (IEEE, Castagnoli, Koopman), Adler-32,
                  CRC-64 (ISO, ECMA)

Quick start:
    import appsec
    appsec.init_aes(key32)
    sealed = appsec.encrypt_aes_gcm(b"secret")
    appsec.load_private_key()          # app.key next to the program
    token  = appsec.encrypt_oaep("card-number", "payments")
"""

__version__ = "1.0.0"

from .api      import (
    init_aes,
    encrypt_aes_gcm,
    decrypt_aes_gcm,
    load_private_key,
    load_public_key,
    encrypt_oaep,
    decrypt_oaep,
)
from .context  import CryptoContext, default_context, reset_default_context
from .keystore import SymmetricKeyStore, AsymmetricKeyStore
from .ciphers  import AESGCMEngine, RSAOAEPEngine
from .hmac_sign import (
    MACAlgo,
    compute_hmac,
    compute_hmac256,
    compute_hmac512,
    is_matched_hmac,
    is_matched_hmac256,
    is_matched_hmac512,
)
from .checksum import (
    crc32_ieee,
    crc32_castagnoli,
    crc32_koopman,
    adler32,
    crc64_iso,
    crc64_ecma,
)
from .errors   import (
    AppSecError,
    InvalidKeyLength,
    KeyNotLoaded,
    UnsupportedKeyType,
    InvalidKeyMaterial,
    MalformedPEM,
    InputTooShort,
    MessageTooLong,
    InvalidEncoding,
    AuthenticationFailed,
    DecryptionFailed,
    RandomnessUnavailable,
)

__all__ = [
    "init_aes",
    "encrypt_aes_gcm",
    "decrypt_aes_gcm",
    "load_private_key",
    "load_public_key",
    "encrypt_oaep",
    "decrypt_oaep",
    "CryptoContext",
    "default_context",
    "reset_default_context",
    "SymmetricKeyStore",
    "AsymmetricKeyStore",
    "AESGCMEngine",
    "RSAOAEPEngine",
    "MACAlgo",
    "compute_hmac",
    "compute_hmac256",
    "compute_hmac512",
    "is_matched_hmac",
    "is_matched_hmac256",
    "is_matched_hmac512",
    "crc32_ieee",
    "crc32_castagnoli",
    "crc32_koopman",
    "adler32",
    "crc64_iso",
    "crc64_ecma",
    "AppSecError",
    "InvalidKeyLength",
    "KeyNotLoaded",
    "UnsupportedKeyType",
    "InvalidKeyMaterial",
    "MalformedPEM",
    "InputTooShort",
    "MessageTooLong",
    "InvalidEncoding",
    "AuthenticationFailed",
    "DecryptionFailed",
    "RandomnessUnavailable",
]
