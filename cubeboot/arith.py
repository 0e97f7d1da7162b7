"""64-bit integer helpers with the wrap-around rules of fixed-width machine words.

Signed results are returned as Python ints in the range of a signed 64-bit
word; unsigned results in the range of an unsigned one.  Inputs of any size
are first reduced to the relevant width, as a cast would do.
"""

from __future__ import annotations

_U32_MASK = 0xFFFFFFFF
_U64_MASK = 0xFFFFFFFFFFFFFFFF
_S64_SIGN = 1 << 63
_U64_RANGE = 1 << 64


def _u32(value: int) -> int:
    return value & _U32_MASK


def _u64(value: int) -> int:
    return value & _U64_MASK


def _s64(value: int) -> int:
    raw = value & _U64_MASK
    return raw - _U64_RANGE if raw & _S64_SIGN else raw


def _abs_u64(value: int) -> int:
    """Magnitude of a signed 64-bit value as an unsigned 64-bit value."""
    return _u64(-_s64(value)) if _s64(value) < 0 else _u64(value)


def abs64(a: int) -> int:
    """Absolute value of a signed 64-bit integer; the minimum value stays negative."""
    return _s64(_abs_u64(a))


def shift_left64(a: int, b: int) -> int:
    """Shift ``a`` left by ``b`` bits (taken modulo 64), as a signed 64-bit result."""
    return _s64(_u64(a) << (b & 63))


def shift_right_arith64(a: int, b: int) -> int:
    """Arithmetic right shift of a signed 64-bit ``a`` by ``b`` bits (modulo 64)."""
    return _s64(a) >> (b & 63)


def shift_right_logical64(a: int, b: int) -> int:
    """Logical right shift of an unsigned 64-bit ``a`` by ``b`` bits (modulo 64)."""
    return _u64(a) >> (b & 63)


def _require_nonzero(value: int, what: str) -> int:
    if value == 0:
        raise ValueError(f"{what} is undefined for zero")
    return value


def count_leading_zeros32(a: int) -> int:
    """Number of leading zero bits in a non-zero 32-bit value."""
    value = _require_nonzero(_u32(a), "count_leading_zeros32")
    return 32 - value.bit_length()


def count_leading_zeros64(a: int) -> int:
    """Number of leading zero bits in a non-zero 64-bit value."""
    value = _require_nonzero(_u64(a), "count_leading_zeros64")
    return 64 - value.bit_length()


def count_trailing_zeros32(a: int) -> int:
    """Number of trailing zero bits in a non-zero 32-bit value."""
    value = _require_nonzero(_u32(a), "count_trailing_zeros32")
    return (value & -value).bit_length() - 1


def count_trailing_zeros64(a: int) -> int:
    """Number of trailing zero bits in a non-zero 64-bit value."""
    value = _require_nonzero(_u64(a), "count_trailing_zeros64")
    return (value & -value).bit_length() - 1


def divmod_unsigned64(a: int, b: int) -> tuple[int, int]:
    """Unsigned 64-bit quotient and remainder; raises ZeroDivisionError for ``b == 0``."""
    numerator = _u64(a)
    divisor = _u64(b)
    if divisor == 0:
        raise ZeroDivisionError("64-bit division by zero")
    return divmod(numerator, divisor)


def div_signed64(a: int, b: int) -> int:
    """Signed 64-bit quotient, truncated toward zero and wrapped to 64 bits."""
    quotient, _ = divmod_unsigned64(_abs_u64(a), _abs_u64(b))
    if (_s64(a) < 0) != (_s64(b) < 0):
        quotient = -quotient
    return _s64(quotient)


def mod_signed64(a: int, b: int) -> int:
    """Signed 64-bit remainder, carrying the sign of the numerator."""
    _, remainder = divmod_unsigned64(_abs_u64(a), _abs_u64(b))
    if _s64(a) < 0:
        remainder = -remainder
    return _s64(remainder)


def div_unsigned64(a: int, b: int) -> int:
    """Unsigned 64-bit quotient."""
    return divmod_unsigned64(a, b)[0]


def mod_unsigned64(a: int, b: int) -> int:
    """Unsigned 64-bit remainder."""
    return divmod_unsigned64(a, b)[1]


def find_first_set64(a: int) -> int:
    """One-based index of the lowest set bit of a 64-bit value, or 0 if none is set."""
    value = _u64(a)
    return count_trailing_zeros64(value) + 1 if value else 0


def popcount32(a: int) -> int:
    """Number of set bits in a 32-bit value."""
    return bin(_u32(a)).count("1")


def popcount64(a: int) -> int:
    """Number of set bits in a 64-bit value."""
    return bin(_u64(a)).count("1")