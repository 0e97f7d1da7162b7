"""Adler-32 and CRC-32 checksums used by the zlib and gzip containers."""

from __future__ import annotations

_ADLER_BASE = 65521
# Largest run of bytes that cannot overflow the 32-bit sums before reduction.
_ADLER_NMAX = 5552

_CRC32_NIBBLE_TABLE = (
    0x00000000, 0x1DB71064, 0x3B6E20C8, 0x26D930AC,
    0x76DC4190, 0x6B6B51F4, 0x4DB26158, 0x5005713C,
    0xEDB88320, 0xF00F9344, 0xD6D6A3E8, 0xCB61B38C,
    0x9B64C2B0, 0x86D3D2D4, 0xA00AE278, 0xBDBDF21C,
)


def adler32(data: bytes | bytearray | memoryview) -> int:
    """Return the Adler-32 checksum of ``data``."""
    buf = bytes(data)
    s1, s2 = 1, 0
    for start in range(0, len(buf), _ADLER_NMAX):
        for byte in buf[start:start + _ADLER_NMAX]:
            s1 += byte
            s2 += s1
        s1 %= _ADLER_BASE
        s2 %= _ADLER_BASE
    return (s2 << 16) | s1


def crc32(data: bytes | bytearray | memoryview) -> int:
    """Return the CRC-32 checksum of ``data``; an empty input gives 0."""
    buf = bytes(data)
    if not buf:
        return 0
    crc = 0xFFFFFFFF
    table = _CRC32_NIBBLE_TABLE
    for byte in buf:
        crc ^= byte
        crc = table[crc & 0x0F] ^ (crc >> 4)
        crc = table[crc & 0x0F] ^ (crc >> 4)
    return crc ^ 0xFFFFFFFF