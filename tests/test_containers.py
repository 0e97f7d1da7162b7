import gzip
import zlib

import pytest
from hypothesis import given, strategies as st

from cubeboot.containers import gzip_uncompress, zlib_uncompress
from cubeboot.inflate import DataError


def _raw_deflate(data: bytes) -> bytes:
    comp = zlib.compressobj(9, zlib.DEFLATED, -15)
    return comp.compress(data) + comp.flush()


def _trailer(data: bytes) -> bytes:
    return zlib.crc32(data).to_bytes(4, "little") + len(data).to_bytes(4, "little")


SAMPLE = b"The quick brown fox jumps over the lazy dog. " * 20


def test_gzip_round_trip():
    assert gzip_uncompress(gzip.compress(SAMPLE, mtime=0)) == SAMPLE


def test_gzip_empty_payload():
    assert gzip_uncompress(gzip.compress(b"", mtime=0)) == b""


@given(st.binary(max_size=2000))
def test_gzip_round_trip_property(data):
    assert gzip_uncompress(gzip.compress(data, mtime=0)) == data


def test_gzip_with_name_comment_extra_and_header_crc():
    flags = 0x02 | 0x04 | 0x08 | 0x10
    header = bytes([0x1F, 0x8B, 8, flags]) + b"\x00" * 6
    header += (3).to_bytes(2, "little") + b"abc"
    header += b"file.dol\x00" + b"a comment\x00"
    header += (zlib.crc32(header) & 0xFFFF).to_bytes(2, "little")
    stream = header + _raw_deflate(SAMPLE) + _trailer(SAMPLE)
    assert gzip_uncompress(stream) == SAMPLE


def test_gzip_bad_header_crc():
    header = bytes([0x1F, 0x8B, 8, 0x02]) + b"\x00" * 6
    header += ((zlib.crc32(header) + 1) & 0xFFFF).to_bytes(2, "little")
    stream = header + _raw_deflate(SAMPLE) + _trailer(SAMPLE)
    with pytest.raises(DataError):
        gzip_uncompress(stream)


def test_gzip_too_short():
    with pytest.raises(DataError):
        gzip_uncompress(b"\x1f\x8b\x08\x00" + b"\x00" * 13)


def test_gzip_bad_magic():
    stream = bytearray(gzip.compress(SAMPLE, mtime=0))
    stream[1] = 0x8C
    with pytest.raises(DataError):
        gzip_uncompress(stream)


def test_gzip_bad_method():
    stream = bytearray(gzip.compress(SAMPLE, mtime=0))
    stream[2] = 7
    with pytest.raises(DataError):
        gzip_uncompress(stream)


def test_gzip_reserved_flags():
    stream = bytearray(gzip.compress(SAMPLE, mtime=0))
    stream[3] = 0x20
    with pytest.raises(DataError):
        gzip_uncompress(stream)


def test_gzip_unterminated_name():
    stream = bytes([0x1F, 0x8B, 8, 0x08]) + b"\x00" * 6 + b"a" * 10
    with pytest.raises(DataError):
        gzip_uncompress(stream)


def test_gzip_extra_field_too_long():
    stream = bytes([0x1F, 0x8B, 8, 0x04]) + b"\x00" * 6 + b"\xff\xff" + b"\x00" * 10
    with pytest.raises(DataError):
        gzip_uncompress(stream)


def test_gzip_crc_mismatch():
    stream = bytearray(gzip.compress(SAMPLE, mtime=0))
    stream[-8] ^= 0xFF
    with pytest.raises(DataError):
        gzip_uncompress(stream)


def test_gzip_length_mismatch():
    stream = bytearray(gzip.compress(SAMPLE, mtime=0))
    stream[-4] ^= 0x01
    with pytest.raises(DataError):
        gzip_uncompress(stream)


def test_gzip_output_limit_is_data_error():
    stream = gzip.compress(SAMPLE, mtime=0)
    with pytest.raises(DataError):
        gzip_uncompress(stream, len(SAMPLE) - 1)
    assert gzip_uncompress(stream, len(SAMPLE)) == SAMPLE


def test_zlib_round_trip():
    assert zlib_uncompress(zlib.compress(SAMPLE)) == SAMPLE


@given(st.binary(max_size=2000), st.integers(min_value=0, max_value=9))
def test_zlib_round_trip_property(data, level):
    assert zlib_uncompress(zlib.compress(data, level)) == data


def test_zlib_too_short():
    with pytest.raises(DataError):
        zlib_uncompress(b"\x78\x9c\x03\x00\x00")


def test_zlib_header_check():
    stream = bytearray(zlib.compress(SAMPLE))
    stream[1] ^= 0x01
    with pytest.raises(DataError):
        zlib_uncompress(stream)


def test_zlib_bad_method():
    # 0x77 has method 7; 0x77 * 256 + 0x01 is a multiple of 31 plus a fixup below
    cmf = 0x77
    flg = (31 - (cmf * 256) % 31) % 31
    stream = bytes([cmf, flg]) + _raw_deflate(SAMPLE) + zlib.adler32(SAMPLE).to_bytes(4, "big")
    with pytest.raises(DataError):
        zlib_uncompress(stream)


def test_zlib_window_too_large():
    cmf = 0x88
    flg = (31 - (cmf * 256) % 31) % 31
    stream = bytes([cmf, flg]) + _raw_deflate(SAMPLE) + zlib.adler32(SAMPLE).to_bytes(4, "big")
    with pytest.raises(DataError):
        zlib_uncompress(stream)


def test_zlib_preset_dictionary_rejected():
    cmf = 0x78
    flg = 0x20
    flg += (31 - (cmf * 256 + flg) % 31) % 31
    assert flg & 0x20
    stream = bytes([cmf, flg]) + _raw_deflate(SAMPLE) + zlib.adler32(SAMPLE).to_bytes(4, "big")
    with pytest.raises(DataError):
        zlib_uncompress(stream)


def test_zlib_adler_mismatch():
    stream = bytearray(zlib.compress(SAMPLE))
    stream[-1] ^= 0xFF
    with pytest.raises(DataError):
        zlib_uncompress(stream)


def test_zlib_output_limit_is_data_error():
    stream = zlib.compress(SAMPLE)
    with pytest.raises(DataError):
        zlib_uncompress(stream, 10)