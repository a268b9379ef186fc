"""
AES-256-GCM engine and symmetric key store.
Run with:  python -m pytest tests/ -v
"""

import os
import threading

import pytest

from appsec.context import CryptoContext
from appsec.errors import (
    AuthenticationFailed,
    InputTooShort,
    InvalidKeyLength,
    RandomnessUnavailable,
)

MSG = b"Settlement batch 2023-09-05 / merchant 00417"


# ── Key store ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("length", [0, 16, 24, 31, 33])
def test_initialize_rejects_wrong_length(ctx, length):
    with pytest.raises(InvalidKeyLength) as exc:
        ctx.initialize_symmetric_key(os.urandom(length))
    assert exc.value.length == length
    assert not ctx.symmetric.is_initialized


def test_initialize_accepts_32_bytes(ctx):
    ctx.initialize_symmetric_key(os.urandom(32))
    assert ctx.symmetric.is_initialized


def test_invalid_key_length_is_value_error(ctx):
    with pytest.raises(ValueError):
        ctx.initialize_symmetric_key(b"short")


def test_initialize_rejects_text_key(ctx):
    with pytest.raises(TypeError):
        ctx.initialize_symmetric_key("k" * 32)


def test_failed_initialize_keeps_previous_key(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm(MSG)
    with pytest.raises(InvalidKeyLength):
        aes_ctx.initialize_symmetric_key(os.urandom(16))
    assert aes_ctx.decrypt_aes_gcm(sealed) == MSG


def test_reinitialize_replaces_key(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm(MSG)
    aes_ctx.initialize_symmetric_key(os.urandom(32))
    with pytest.raises(AuthenticationFailed):
        aes_ctx.decrypt_aes_gcm(sealed)


def test_key_is_copied_on_initialize(ctx):
    key = bytearray(os.urandom(32))
    ctx.initialize_symmetric_key(key)
    sealed = ctx.encrypt_aes_gcm(MSG)
    key[0] ^= 0xFF
    assert ctx.decrypt_aes_gcm(sealed) == MSG


# ── Encrypt / decrypt ─────────────────────────────────────────────────────────

def test_roundtrip(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm(MSG)
    assert aes_ctx.decrypt_aes_gcm(sealed) == MSG


def test_roundtrip_empty_plaintext(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm(b"")
    assert len(sealed) == 12 + 16
    assert aes_ctx.decrypt_aes_gcm(sealed) == b""


def test_text_plaintext_is_utf8(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm("café")
    assert aes_ctx.decrypt_aes_gcm(sealed) == "café".encode("utf-8")


def test_sealed_layout(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm(MSG)
    assert len(sealed) == 12 + len(MSG) + 16


def test_nonces_differ_per_call(aes_ctx):
    a = aes_ctx.encrypt_aes_gcm(MSG)
    b = aes_ctx.encrypt_aes_gcm(MSG)
    assert a[:12] != b[:12]
    assert a != b
    assert aes_ctx.decrypt_aes_gcm(a) == MSG
    assert aes_ctx.decrypt_aes_gcm(b) == MSG


def test_nonce_uniqueness_over_many_calls(aes_ctx):
    nonces = {aes_ctx.encrypt_aes_gcm(b"x")[:12] for _ in range(500)}
    assert len(nonces) == 500


def test_encrypt_without_key(ctx):
    with pytest.raises(InvalidKeyLength) as exc:
        ctx.encrypt_aes_gcm(MSG)
    assert exc.value.length == 0


def test_decrypt_without_key(ctx):
    with pytest.raises(InvalidKeyLength):
        ctx.decrypt_aes_gcm(os.urandom(40))


def test_cleared_store_refuses(aes_ctx):
    aes_ctx.symmetric.clear()
    with pytest.raises(InvalidKeyLength):
        aes_ctx.encrypt_aes_gcm(MSG)


@pytest.mark.parametrize("value", [5, None, [1, 2, 3]])
def test_encrypt_rejects_non_bytes(aes_ctx, value):
    with pytest.raises(TypeError):
        aes_ctx.encrypt_aes_gcm(value)


@pytest.mark.parametrize("value", [40, "sealed text"])
def test_decrypt_rejects_non_bytes(aes_ctx, value):
    with pytest.raises(TypeError):
        aes_ctx.decrypt_aes_gcm(value)


# ── Tamper / malformed input ──────────────────────────────────────────────────

def test_every_single_bit_flip_detected(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm(b"bit flip")
    for pos in range(len(sealed)):
        for bit in range(8):
            bad = bytearray(sealed)
            bad[pos] ^= 1 << bit
            with pytest.raises(AuthenticationFailed):
                aes_ctx.decrypt_aes_gcm(bytes(bad))


def test_wrong_key_fails(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm(MSG)
    other = CryptoContext()
    other.initialize_symmetric_key(os.urandom(32))
    with pytest.raises(AuthenticationFailed):
        other.decrypt_aes_gcm(sealed)


def test_truncated_tag_fails(aes_ctx):
    sealed = aes_ctx.encrypt_aes_gcm(MSG)
    with pytest.raises(AuthenticationFailed):
        aes_ctx.decrypt_aes_gcm(sealed[:-1])


@pytest.mark.parametrize("length", [0, 1, 11])
def test_shorter_than_nonce(aes_ctx, length):
    with pytest.raises(InputTooShort):
        aes_ctx.decrypt_aes_gcm(os.urandom(length))


@pytest.mark.parametrize("length", [12, 20, 27])
def test_nonce_but_no_room_for_tag(aes_ctx, length):
    with pytest.raises(AuthenticationFailed):
        aes_ctx.decrypt_aes_gcm(os.urandom(length))


def test_authentication_failure_hides_cause(aes_ctx):
    sealed = bytearray(aes_ctx.encrypt_aes_gcm(MSG))
    sealed[-1] ^= 0x01
    with pytest.raises(AuthenticationFailed) as exc:
        aes_ctx.decrypt_aes_gcm(bytes(sealed))
    assert str(exc.value) == "message authentication failed"
    assert exc.value.__cause__ is None
    assert exc.value.__suppress_context__


def test_entropy_failure(aes_ctx, monkeypatch):
    def broken(n):
        raise OSError("no entropy")
    monkeypatch.setattr("appsec.ciphers.aes_gcm.os.urandom", broken)
    with pytest.raises(RandomnessUnavailable):
        aes_ctx.encrypt_aes_gcm(MSG)


# ── Concurrency ───────────────────────────────────────────────────────────────

def test_concurrent_encrypt_decrypt(aes_ctx):
    errors = []

    def worker(i):
        try:
            msg = f"message {i}".encode()
            for _ in range(50):
                assert aes_ctx.decrypt_aes_gcm(aes_ctx.encrypt_aes_gcm(msg)) == msg
        except Exception as e:  # collected for the main thread
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


def test_reinitialize_during_encrypt_decrypt(aes_ctx):
    errors = []
    done   = threading.Event()

    def rotate():
        while not done.is_set():
            aes_ctx.initialize_symmetric_key(os.urandom(32))

    def worker(i):
        try:
            msg = f"message {i}".encode()
            for _ in range(50):
                sealed = aes_ctx.encrypt_aes_gcm(msg)
                try:
                    assert aes_ctx.decrypt_aes_gcm(sealed) == msg
                except AuthenticationFailed:
                    pass  # key rotated between the two calls
        except Exception as e:  # collected for the main thread
            errors.append(e)

    rotator = threading.Thread(target=rotate)
    workers = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    rotator.start()
    for t in workers:
        t.start()
    for t in workers:
        t.join()
    done.set()
    rotator.join()
    assert errors == []
    assert aes_ctx.symmetric.is_initialized
