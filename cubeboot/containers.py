"""Gzip and zlib container decoding on top of raw deflate."""

from __future__ import annotations

import enum

from .checksums import adler32, crc32
from .inflate import DataError, InflateError, uncompress

_GZIP_MIN_SIZE = 18  # 10 byte header and 8 byte trailer
_ZLIB_MIN_SIZE = 6  # 2 byte header and 4 byte trailer


class _GzipFlag(enum.IntFlag):
    TEXT = 1
    HCRC = 2
    EXTRA = 4
    NAME = 8
    COMMENT = 16


_GZIP_RESERVED = 0xE0


def _skip_zero_terminated(src: bytes, start: int) -> int:
    end = src.find(b"\x00", start)
    if end < 0:
        raise DataError("unterminated gzip header string")
    return end + 1


def _inflate_payload(payload: bytes, max_size: int | None) -> bytes:
    try:
        return uncompress(payload, max_size)
    except InflateError as exc:
        raise DataError(f"deflate stream failed: {exc}") from exc


def gzip_uncompress(source: bytes | bytearray | memoryview, max_size: int | None = None) -> bytes:
    """Decompress a gzip member, checking its length and CRC-32 trailer.

    Any failure, including lack of output space, raises DataError.
    """
    src = bytes(source)
    if len(src) < _GZIP_MIN_SIZE:
        raise DataError("gzip data too short")
    if src[0] != 0x1F or src[1] != 0x8B:
        raise DataError("not gzip data")
    if src[2] != 8:
        raise DataError("gzip method is not deflate")
    flags = src[3]
    if flags & _GZIP_RESERVED:
        raise DataError("reserved gzip flags set")
    flags = _GzipFlag(flags)

    start = 10
    if flags & _GzipFlag.EXTRA:
        extra_len = int.from_bytes(src[start:start + 2], "little")
        if extra_len > len(src) - 12:
            raise DataError("gzip extra field too long")
        start += extra_len + 2
    if flags & _GzipFlag.NAME:
        start = _skip_zero_terminated(src, start)
    if flags & _GzipFlag.COMMENT:
        start = _skip_zero_terminated(src, start)
    if flags & _GzipFlag.HCRC:
        if start > len(src) - 2:
            raise DataError("gzip header CRC missing")
        header_crc = int.from_bytes(src[start:start + 2], "little")
        if header_crc != crc32(src[:start]) & 0xFFFF:
            raise DataError("gzip header CRC mismatch")
        start += 2

    expected_len = int.from_bytes(src[-4:], "little")
    expected_crc = int.from_bytes(src[-8:-4], "little")

    if len(src) - start < 8:
        raise DataError("gzip data truncated")

    out = _inflate_payload(src[start:len(src) - 8], max_size)
    if len(out) != expected_len:
        raise DataError("gzip length mismatch")
    if crc32(out) != expected_crc:
        raise DataError("gzip CRC mismatch")
    return out


def zlib_uncompress(source: bytes | bytearray | memoryview, max_size: int | None = None) -> bytes:
    """Decompress a zlib stream, checking its header and Adler-32 trailer.

    Any failure, including lack of output space, raises DataError.
    """
    src = bytes(source)
    if len(src) < _ZLIB_MIN_SIZE:
        raise DataError("zlib data too short")
    cmf, flg = src[0], src[1]
    if (256 * cmf + flg) % 31:
        raise DataError("zlib header check failed")
    if cmf & 0x0F != 8:
        raise DataError("zlib method is not deflate")
    if cmf >> 4 > 7:
        raise DataError("zlib window size invalid")
    if flg & 0x20:
        raise DataError("zlib preset dictionary not supported")

    expected = int.from_bytes(src[-4:], "big")
    out = _inflate_payload(src[2:len(src) - 4], max_size)
    if adler32(out) != expected:
        raise DataError("zlib Adler-32 mismatch")
    return out