import zlib

import pytest
from hypothesis import given, strategies as st

from cubeboot.inflate import DataError, InflateError, OutputSpaceError, uncompress


def raw_deflate(data, level=6, strategy=zlib.Z_DEFAULT_STRATEGY):
    compressor = zlib.compressobj(level, zlib.DEFLATED, -15, 8, strategy)
    return compressor.compress(data) + compressor.flush()


SAMPLE = b"".join(b"line %d of the boot loader sample text\n" % i for i in range(400))


def test_empty_fixed_block():
    assert uncompress(b"\x03\x00") == b""


def test_stored_block_by_hand():
    assert uncompress(b"\x01\x03\x00\xfc\xffabc") == b"abc"


def test_dynamic_round_trip():
    assert uncompress(raw_deflate(SAMPLE, level=9)) == SAMPLE


def test_fixed_round_trip():
    assert uncompress(raw_deflate(SAMPLE, strategy=zlib.Z_FIXED)) == SAMPLE


def test_stored_round_trip():
    assert uncompress(raw_deflate(SAMPLE, level=0)) == SAMPLE


def test_multiple_blocks_with_flush():
    compressor = zlib.compressobj(6, zlib.DEFLATED, -15)
    stream = compressor.compress(SAMPLE[:5000]) + compressor.flush(zlib.Z_FULL_FLUSH)
    stream += compressor.compress(SAMPLE[5000:]) + compressor.flush()
    assert uncompress(stream) == SAMPLE


def test_exact_max_size_is_enough():
    assert uncompress(raw_deflate(SAMPLE), max_size=len(SAMPLE)) == SAMPLE


def test_output_space_error_for_compressed_block():
    with pytest.raises(OutputSpaceError):
        uncompress(raw_deflate(SAMPLE), max_size=10)


def test_output_space_error_for_stored_block():
    with pytest.raises(OutputSpaceError):
        uncompress(b"\x01\x03\x00\xfc\xffabc", max_size=2)


def test_invalid_block_type():
    with pytest.raises(DataError):
        uncompress(b"\x07")


def test_empty_input_is_data_error():
    with pytest.raises(DataError):
        uncompress(b"")


def test_stored_length_complement_mismatch():
    with pytest.raises(DataError):
        uncompress(b"\x01\x05\x00\x00\x00hello")


def test_truncated_stored_block():
    with pytest.raises(DataError):
        uncompress(b"\x01\x05\x00\xfa\xffhel")


def test_distance_before_start_of_output():
    with pytest.raises(DataError):
        uncompress(b"\x03\x02\x00")


def test_too_many_literal_codes():
    with pytest.raises(DataError):
        uncompress(b"\xf5\x00\x00")


def test_truncated_stream():
    stream = raw_deflate(SAMPLE, level=9)
    with pytest.raises(DataError):
        uncompress(stream[: len(stream) // 2])


def test_errors_share_base_class():
    with pytest.raises(InflateError):
        uncompress(b"\x07")
    with pytest.raises(InflateError):
        uncompress(raw_deflate(SAMPLE), max_size=1)


def test_negative_max_size_rejected():
    with pytest.raises(ValueError):
        uncompress(b"\x03\x00", max_size=-1)


@given(st.binary(max_size=2000), st.sampled_from([0, 1, 6, 9]))
def test_round_trip_any_level(data, level):
    assert uncompress(raw_deflate(data, level=level)) == data


@given(st.binary(min_size=1, max_size=500))
def test_one_byte_short_raises(data):
    with pytest.raises(OutputSpaceError):
        uncompress(raw_deflate(data), max_size=len(data) - 1)


@given(st.lists(st.sampled_from([b"ab", b"cube", b"\x00\x00\x00", b"xyz"]), max_size=300))
def test_repetitive_round_trip(parts):
    data = b"".join(parts)
    assert uncompress(raw_deflate(data, strategy=zlib.Z_FIXED)) == data