"""
Key Stores
==========
Holders for the secret state the cipher engines read at call time.

SymmetricKeyStore   : one AES-256 key (32 bytes). Empty means unset.
AsymmetricKeyStore  : optional RSA private key + public key, loaded from PEM:
                        private key: PKCS#8 "PRIVATE KEY" block
                        public key:  X.509 "CERTIFICATE" block

Both stores replace whole values under a lock and hand out snapshots, so a
reload racing an encrypt/decrypt call is seen either entirely before or
entirely after. A failed load never changes what is stored.

Paths given here are used as-is; default locations (app.key / app.crt next
to the program) are resolved in appsec.config.

Dependencies: cryptography >= 41.0
"""

import logging
import re
import threading
from typing import Optional, Tuple

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import (
    InvalidKeyLength,
    InvalidKeyMaterial,
    MalformedPEM,
    UnsupportedKeyType,
)

logger = logging.getLogger(__name__)

_PEM_BLOCK = re.compile(
    rb"-----BEGIN ([A-Z0-9 ]+)-----.*?-----END \1-----",
    re.DOTALL,
)

PRIVATE_KEY_LABEL = "PRIVATE KEY"
CERTIFICATE_LABEL = "CERTIFICATE"


# ── Symmetric ─────────────────────────────────────────────────────────────────

class SymmetricKeyStore:
    """Process-wide AES-256 key."""

    KEY_SIZE = 32

    def __init__(self):
        self._lock = threading.RLock()
        self._key  = b""

    def initialize(self, key) -> None:
        """
        Install a 32-byte key, replacing any previous one.
        Raises InvalidKeyLength for any other length; the store is unchanged.
        """
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise TypeError("AES key must be bytes")
        key = bytes(key)
        if len(key) != self.KEY_SIZE:
            logger.warning(f"Rejected AES key of {len(key)} bytes")
            raise InvalidKeyLength(len(key))
        with self._lock:
            replaced  = bool(self._key)
            self._key = key
        logger.info("AES key replaced" if replaced else "AES key initialized")

    def clear(self) -> None:
        with self._lock:
            self._key = b""

    @property
    def is_initialized(self) -> bool:
        with self._lock:
            return len(self._key) == self.KEY_SIZE

    def snapshot(self) -> bytes:
        """Current key for the AES-GCM engine. Empty when unset."""
        with self._lock:
            return self._key


# ── Asymmetric ────────────────────────────────────────────────────────────────

def _first_pem_block(data: bytes, expected_label: str) -> bytes:
    """Return the first PEM block in data, which must carry expected_label."""
    if isinstance(data, str):
        data = data.encode("ascii", errors="replace")
    match = _PEM_BLOCK.search(data)
    if match is None:
        raise MalformedPEM("no PEM block found")
    label = match.group(1).decode("ascii")
    if label != expected_label:
        raise MalformedPEM(f"expected a {expected_label} PEM block, found {label}")
    return match.group(0)


def validate_rsa_private_numbers(numbers: rsa.RSAPrivateNumbers) -> None:
    """
    Structural consistency of an RSA private key: the primes multiply to the
    modulus, the exponents invert each other modulo p-1 and q-1, and the CRT
    values match. Raises InvalidKeyMaterial on the first mismatch.
    """
    pub = numbers.public_numbers
    n, e = pub.n, pub.e
    p, q, d = numbers.p, numbers.q, numbers.d

    if e < 2:
        raise InvalidKeyMaterial("public exponent too small")
    if e > (1 << 31) - 1:
        raise InvalidKeyMaterial("public exponent too large")
    if p <= 1 or q <= 1:
        raise InvalidKeyMaterial("invalid prime value")
    if p * q != n:
        raise InvalidKeyMaterial("invalid modulus")
    for prime in (p, q):
        if (d * e) % (prime - 1) != 1:
            raise InvalidKeyMaterial("invalid exponents")
    if numbers.dmp1 != d % (p - 1) or numbers.dmq1 != d % (q - 1):
        raise InvalidKeyMaterial("invalid CRT exponents")
    if (numbers.iqmp * q) % p != 1:
        raise InvalidKeyMaterial("invalid CRT coefficient")


def parse_private_key_pem(data: bytes) -> rsa.RSAPrivateKey:
    block = _first_pem_block(data, PRIVATE_KEY_LABEL)
    try:
        # validated below so a bad key reports InvalidKeyMaterial, not MalformedPEM
        key = serialization.load_pem_private_key(
            block, password=None, unsafe_skip_rsa_key_validation=True
        )
    except UnsupportedAlgorithm as e:
        raise UnsupportedKeyType("unsupported key algorithm") from e
    except (ValueError, TypeError) as e:
        raise MalformedPEM("PEM block is not a parsable PKCS#8 private key") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise UnsupportedKeyType(type(key).__name__)
    try:
        validate_rsa_private_numbers(key.private_numbers())
    except InvalidKeyMaterial as e:
        logger.warning(f"Rejected RSA private key: {e}")
        raise
    return key


def parse_certificate_public_key(data: bytes) -> rsa.RSAPublicKey:
    block = _first_pem_block(data, CERTIFICATE_LABEL)
    try:
        cert = x509.load_pem_x509_certificate(block)
    except ValueError as e:
        raise MalformedPEM("PEM block is not a parsable X.509 certificate") from e

    try:
        public_key = cert.public_key()
    except (UnsupportedAlgorithm, ValueError) as e:
        raise UnsupportedKeyType("unsupported certificate key algorithm") from e
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise UnsupportedKeyType(type(public_key).__name__)
    return public_key


def _read_file(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


class AsymmetricKeyStore:
    """Process-wide RSA key pair; either half may be absent."""

    def __init__(self):
        self._lock        = threading.RLock()
        self._private_key: Optional[rsa.RSAPrivateKey] = None
        self._public_key:  Optional[rsa.RSAPublicKey]  = None

    def load_private_key(self, path: str) -> None:
        """
        Load a PKCS#8 PEM private key file and store it with its public key.
        OSError from reading the file propagates unchanged.
        """
        key = parse_private_key_pem(_read_file(path))
        self._set_pair(key)
        logger.info(f"Loaded RSA-{key.key_size} private key from {path}")

    def load_public_key(self, path: str) -> None:
        """Load the RSA public key of a PEM X.509 certificate file."""
        public_key = parse_certificate_public_key(_read_file(path))
        self._set_public(public_key)
        logger.info(f"Loaded RSA-{public_key.key_size} public key from certificate {path}")

    def load_private_key_pem(self, data: bytes) -> None:
        key = parse_private_key_pem(data)
        self._set_pair(key)
        logger.info(f"Loaded RSA-{key.key_size} private key from PEM data")

    def load_public_key_pem(self, data: bytes) -> None:
        public_key = parse_certificate_public_key(data)
        self._set_public(public_key)
        logger.info(f"Loaded RSA-{public_key.key_size} public key from certificate data")

    def _set_pair(self, private_key: rsa.RSAPrivateKey) -> None:
        public_key = private_key.public_key()
        with self._lock:
            self._private_key = private_key
            self._public_key  = public_key

    def _set_public(self, public_key: rsa.RSAPublicKey) -> None:
        with self._lock:
            self._public_key = public_key

    def clear(self) -> None:
        with self._lock:
            self._private_key = None
            self._public_key  = None

    @property
    def has_private_key(self) -> bool:
        with self._lock:
            return self._private_key is not None

    @property
    def has_public_key(self) -> bool:
        with self._lock:
            return self._public_key is not None

    def snapshot(self) -> Tuple[Optional[rsa.RSAPrivateKey], Optional[rsa.RSAPublicKey]]:
        """(private_key, public_key) as one consistent pair for the engines."""
        with self._lock:
            return self._private_key, self._public_key
