"""
Shared fixtures: throwaway RSA / EC keys and self-signed certificates
written as PEM files under tmp_path.
"""

import os
import sys
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from appsec.context import CryptoContext, reset_default_context


def _pkcs8(key) -> bytes:
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )


def _self_signed(key, common_name: str = "appsec test") -> bytes:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now  = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=1))
        .not_valid_after(now + timedelta(days=1))
        .sign(private_key=key, algorithm=hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM)


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def key_dir(tmp_path, rsa_key, ec_key):
    """
    tmp_path populated with:
        app.key / app.crt      RSA PKCS#8 key and matching certificate
        ec.key  / ec.crt       EC key and certificate
        rsa_pkcs1.key          RSA key in "RSA PRIVATE KEY" form
        junk.txt               not PEM at all
    """
    (tmp_path / "app.key").write_bytes(_pkcs8(rsa_key))
    (tmp_path / "app.crt").write_bytes(_self_signed(rsa_key))
    (tmp_path / "ec.key").write_bytes(_pkcs8(ec_key))
    (tmp_path / "ec.crt").write_bytes(_self_signed(ec_key))
    (tmp_path / "rsa_pkcs1.key").write_bytes(
        rsa_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.TraditionalOpenSSL,
            serialization.NoEncryption(),
        )
    )
    (tmp_path / "junk.txt").write_text("this is not a key\n")
    return tmp_path


@pytest.fixture
def ctx():
    return CryptoContext()


@pytest.fixture
def aes_ctx(ctx):
    ctx.initialize_symmetric_key(os.urandom(32))
    return ctx


@pytest.fixture
def rsa_ctx(ctx, key_dir):
    ctx.load_private_key(str(key_dir / "app.key"))
    return ctx


@pytest.fixture(autouse=True)
def _fresh_default_context():
    reset_default_context()
    yield
    reset_default_context()
