"""
appsec — Live Demo
==================
Run:  python examples/demo.py

Walks through every component with a throwaway RSA key and certificate
written to a temporary directory, printing sizes and timings.
"""

import sys, os, time, tempfile, logging
from datetime import datetime, timedelta, timezone
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

import appsec
from appsec.errors import AuthenticationFailed, DecryptionFailed

LINE = "═" * 70
MSG  = b"Settlement batch 2023-09-05 / merchant 00417"


def header(name):
    print(f"\n{LINE}")
    print(f"  {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")


def write_demo_keys(directory):
    key  = rsa.generate_private_key(public_exponent=65537, key_size=3072)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "appsec demo")])
    now  = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    with open(os.path.join(directory, "app.key"), "wb") as f:
        f.write(key.private_bytes(serialization.Encoding.PEM,
                                  serialization.PrivateFormat.PKCS8,
                                  serialization.NoEncryption()))
    with open(os.path.join(directory, "app.crt"), "wb") as f:
        f.write(cert.public_bytes(serialization.Encoding.PEM))


def main():
    logging.basicConfig(level=logging.INFO, format=" %(name)s: %(message)s")

    print(f"\n{LINE}")
    print("  appsec — Demo")
    print(LINE)
    print(f"  Message: {MSG.decode()}\n")

    # ── AES-256-GCM ──────────────────────────────────────────────────────────
    header("SYMMETRIC — AES-256-GCM")
    appsec.init_aes(os.urandom(32))
    t0     = time.perf_counter()
    sealed = appsec.encrypt_aes_gcm(MSG)
    pt     = appsec.decrypt_aes_gcm(sealed)
    elapsed = time.perf_counter() - t0
    ok("Sealed size", f"{len(sealed)} bytes (nonce=12 + data + tag=16)")
    ok("Round-trip",  f"{elapsed*1000:.2f} ms")
    ok("Decrypted",   pt.decode())
    tampered = bytearray(sealed)
    tampered[-1] ^= 0x01
    try:
        appsec.decrypt_aes_gcm(bytes(tampered))
    except AuthenticationFailed as e:
        ok("Tamper detected", str(e))

    # ── RSA-OAEP ─────────────────────────────────────────────────────────────
    header("ASYMMETRIC — RSA-OAEP (SHA-256)")
    with tempfile.TemporaryDirectory() as key_dir:
        print("  (Generating 3072-bit keypair — takes a moment...)")
        write_demo_keys(key_dir)
        appsec.load_private_key(os.path.join(key_dir, "app.key"))
        appsec.load_public_key(os.path.join(key_dir, "app.crt"))

    t0 = time.perf_counter()
    ct = appsec.encrypt_oaep(MSG, "settlement")
    pt = appsec.decrypt_oaep(ct, "settlement")
    elapsed = time.perf_counter() - t0
    ok("Ciphertext",  ct[:40] + "...")
    ok("Max payload", f"{appsec.default_context().rsa.max_plaintext_size()} bytes")
    ok("Round-trip",  f"{elapsed*1000:.2f} ms")
    ok("Decrypted",   pt)
    try:
        appsec.decrypt_oaep(ct, "refund")
    except DecryptionFailed as e:
        ok("Wrong label rejected", str(e))

    # ── HMAC ─────────────────────────────────────────────────────────────────
    header("MAC — HMAC-SHA256 / HMAC-SHA512")
    sig256 = appsec.compute_hmac256(MSG, "shared-secret")
    sig512 = appsec.compute_hmac512(MSG, "shared-secret")
    ok("HMAC256", sig256)
    ok("HMAC512", sig512[:40] + "...")
    ok("Verified", str(appsec.is_matched_hmac256(sig256, MSG, "shared-secret")))

    # ── Checksums ────────────────────────────────────────────────────────────
    header("CHECKSUM")
    for fn in (appsec.crc32_ieee, appsec.crc32_castagnoli, appsec.crc32_koopman,
               appsec.adler32, appsec.crc64_iso, appsec.crc64_ecma):
        ok(f"{fn.__name__:<17}", f"0x{fn(MSG):X}")

    print(f"\n{LINE}\n")


if __name__ == "__main__":
    main()
