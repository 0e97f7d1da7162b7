"""A small printf-style formatter with a fixed set of conversions.

Supported conversions are ``c d i o p u s x X`` and ``%%``.  Flags ``-``,
``0`` and ``#`` and a field width are honoured.  A precision is accepted
but only switches on zero padding to the field width.  The ``l`` and ``z``
length modifiers are accepted and ignored.  Integers use the 32-bit target
sizes: unsigned conversions wrap modulo 2**32 and ``%d`` takes the low 32
bits as a signed value.
"""

from __future__ import annotations

import operator
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

_UINT_MASK = 0xFFFFFFFF
_INT_SIGN = 0x80000000
_UINT_RANGE = 1 << 32


@dataclass
class _Field:
    zero_pad: bool = False
    alternate: bool = False
    left: bool = False
    width: int = 0
    sign: str = ""


def _digit_value(ch: str) -> int:
    """Value of a hexadecimal digit character, or -1."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "a" <= ch <= "f":
        return ord(ch) - ord("a") + 10
    if "A" <= ch <= "F":
        return ord(ch) - ord("A") + 10
    return -1


def _as_int(value: Any) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"integer argument expected, got {type(value).__name__}") from None


def _unsigned(value: Any) -> int:
    return _as_int(value) & _UINT_MASK


def _signed(value: Any) -> int:
    raw = _as_int(value) & _UINT_MASK
    return raw - _UINT_RANGE if raw & _INT_SIGN else raw


def _digits(value: int, base: int, upper: bool) -> str:
    if base == 16:
        return format(value, "X" if upper else "x")
    if base == 8:
        return format(value, "o")
    return str(value)


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value).decode("latin-1")
    if not isinstance(value, str):
        raise TypeError(f"string argument expected, got {type(value).__name__}")
    return value.split("\0", 1)[0]


def _pad(fld: _Field, body: str, base: int, upper: bool) -> str:
    fill = fld.width
    if fill > 0:
        fill = max(fill - len(body), 0)
    if fld.sign:
        fill -= 1
    prefix = ""
    if fld.alternate and base == 16:
        prefix = "0X" if upper else "0x"
    elif fld.alternate and base == 8:
        prefix = "0"
    fill = max(fill - len(prefix), 0)

    parts = []
    if not fld.zero_pad and not fld.left:
        parts.append(" " * fill)
    parts.append(fld.sign)
    parts.append(prefix)
    if fld.zero_pad:
        parts.append("0" * fill)
    parts.append(body)
    if not fld.zero_pad and fld.left:
        parts.append(" " * fill)
    return "".join(parts)


def _render(fmt: str, args: tuple[Any, ...]) -> Iterator[str]:
    chars = iter(fmt.split("\0", 1)[0])
    values = iter(args)

    def next_value() -> Any:
        try:
            return next(values)
        except StopIteration:
            raise ValueError("not enough arguments for format string") from None

    # Base and case carry over between conversions, as ``%s`` does not set them.
    base = 0
    upper = False

    for ch in chars:
        if ch != "%":
            yield ch
            continue

        fld = _Field()
        ch = next(chars, "")
        while ch in ("-", "0", "#") and ch:
            if ch == "-":
                fld.left = True
            elif ch == "0":
                fld.zero_pad = True
            else:
                fld.alternate = True
            ch = next(chars, "")

        if ch and "0" <= ch <= "9":
            width = 0
            while True:
                digit = _digit_value(ch) if ch else -1
                if digit < 0 or digit > 10:
                    break
                width = (width * 10 + digit) & _UINT_MASK
                ch = next(chars, "")
            fld.width = width - _UINT_RANGE if width & _INT_SIGN else width

        if ch == ".":
            fld.zero_pad = True
            ch = next(chars, "")
            while ch and "0" <= ch <= "9":
                ch = next(chars, "")

        if ch in ("z", "l") and ch:
            ch = next(chars, "")

        if not ch:
            return

        if ch == "u":
            base = 10
            yield _pad(fld, _digits(_unsigned(next_value()), base, upper), base, upper)
        elif ch in ("d", "i"):
            base = 10
            number = _signed(next_value())
            if number < 0:
                fld.sign = "-"
            yield _pad(fld, _digits(abs(number), base, upper), base, upper)
        elif ch in ("p", "x", "X"):
            if ch == "p":
                fld.alternate = True
            base = 16
            upper = ch == "X"
            yield _pad(fld, _digits(_unsigned(next_value()), base, upper), base, upper)
        elif ch == "o":
            base = 8
            yield _pad(fld, _digits(_unsigned(next_value()), base, upper), base, upper)
        elif ch == "c":
            value = next_value()
            if isinstance(value, str) and len(value) == 1:
                yield chr(ord(value) & 0xFF)
            else:
                yield chr(_as_int(value) & 0xFF)
        elif ch == "s":
            yield _pad(fld, _as_text(next_value()), base, upper)
        elif ch == "%":
            yield "%"
        # Unknown conversions produce nothing and consume no argument.


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the result."""
    return "".join(_render(fmt, args))


def snprintf(size: int, fmt: str, *args: Any) -> tuple[str, int]:
    """Format into a buffer of ``size`` characters including the terminator.

    Returns the text that fits (at most ``size - 1`` characters) and the
    length the full output would have had.  A size of 0 formats nothing.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    if size < 1:
        return "", 0
    text = sprintf(fmt, *args)
    return text[:size - 1], len(text)