"""
Checksums
=========
Non-cryptographic integrity checks. Detect accidental corruption only;
use HMAC or AES-GCM where tampering matters.

CRC-32 variants and CRC-64 variants are the reflected (LSB-first) forms,
register preset to all ones and inverted on output:

    crc32_ieee        poly 0xEDB88320           "123456789" -> 0xCBF43926
    crc32_castagnoli  poly 0x82F63B78           "123456789" -> 0xE3069283
    crc32_koopman     poly 0xEB31D82E           "123456789" -> 0x2D3DD0AE
    crc64_iso         poly 0xD800000000000000   "123456789" -> 0xB90956C775A41001
    crc64_ecma        poly 0xC96C5795D7870F42   "123456789" -> 0x995DC9BBDF1939FA
    adler32                                     "123456789" -> 0x091E01DE

IEEE CRC-32 and Adler-32 come from zlib; the others are table-driven.
"""

import zlib
from typing import List, Union

BytesLike = Union[bytes, bytearray, memoryview]

# -- Reflected polynomials ----------------------------------------------------

CRC32_CASTAGNOLI = 0x82F63B78
CRC32_KOOPMAN    = 0xEB31D82E
CRC64_ISO        = 0xD800000000000000
CRC64_ECMA       = 0xC96C5795D7870F42

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _make_table(poly: int) -> List[int]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ poly if crc & 1 else crc >> 1
        table.append(crc)
    return table


_TABLES = {poly: _make_table(poly)
           for poly in (CRC32_CASTAGNOLI, CRC32_KOOPMAN, CRC64_ISO, CRC64_ECMA)}


def _reflected_crc(data: BytesLike, poly: int, mask: int) -> int:
    table = _TABLES[poly]
    crc = mask
    for byte in bytes(data):
        crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ mask


# -- CRC-32 --------------------------------------------------------------------

def crc32_ieee(data: BytesLike) -> int:
    return zlib.crc32(data) & _MASK32


def crc32_castagnoli(data: BytesLike) -> int:
    return _reflected_crc(data, CRC32_CASTAGNOLI, _MASK32)


def crc32_koopman(data: BytesLike) -> int:
    return _reflected_crc(data, CRC32_KOOPMAN, _MASK32)


# -- Adler-32 ------------------------------------------------------------------

def adler32(data: BytesLike) -> int:
    return zlib.adler32(data) & _MASK32


# -- CRC-64 --------------------------------------------------------------------

def crc64_iso(data: BytesLike) -> int:
    return _reflected_crc(data, CRC64_ISO, _MASK64)


def crc64_ecma(data: BytesLike) -> int:
    return _reflected_crc(data, CRC64_ECMA, _MASK64)
