"""Raw deflate decompression with a bounded output size."""

from __future__ import annotations

from dataclasses import dataclass


class InflateError(ValueError):
    """Base class for decompression failures."""


class DataError(InflateError):
    """The compressed input is malformed or truncated."""


class OutputSpaceError(InflateError):
    """The output would exceed the allowed size."""


@dataclass(frozen=True)
class _Tree:
    counts: tuple[int, ...]
    symbols: tuple[int, ...]
    max_sym: int


_LENGTH_BITS = (
    0, 0, 0, 0, 0, 0, 0, 0, 1, 1,
    1, 1, 2, 2, 2, 2, 3, 3, 3, 3,
    4, 4, 4, 4, 5, 5, 5, 5, 0, 127,
)
_LENGTH_BASE = (
    3, 4, 5, 6, 7, 8, 9, 10, 11, 13,
    15, 17, 19, 23, 27, 31, 35, 43, 51, 59,
    67, 83, 99, 115, 131, 163, 195, 227, 258, 0,
)
_DIST_BITS = (
    0, 0, 0, 0, 1, 1, 2, 2, 3, 3,
    4, 4, 5, 5, 6, 6, 7, 7, 8, 8,
    9, 9, 10, 10, 11, 11, 12, 12, 13, 13,
)
_DIST_BASE = (
    1, 2, 3, 4, 5, 7, 9, 13, 17, 25,
    33, 49, 65, 97, 129, 193, 257, 385, 513, 769,
    1025, 1537, 2049, 3073, 4097, 6145, 8193, 12289, 16385, 24577,
)
# Order in which code length code lengths are stored.
_CLC_ORDER = (16, 17, 18, 0, 8, 7, 9, 6, 10, 5, 11, 4, 12, 3, 13, 2, 14, 1, 15)


def _fixed_trees() -> tuple[_Tree, _Tree]:
    lit_counts = [0] * 16
    lit_counts[7], lit_counts[8], lit_counts[9] = 24, 152, 112
    lit_symbols = (
        list(range(256, 280))
        + list(range(0, 144))
        + list(range(280, 288))
        + list(range(144, 256))
    )
    dist_counts = [0] * 16
    dist_counts[5] = 32
    return (
        _Tree(tuple(lit_counts), tuple(lit_symbols), 285),
        _Tree(tuple(dist_counts), tuple(range(32)), 29),
    )


_FIXED_LITERAL_TREE, _FIXED_DISTANCE_TREE = _fixed_trees()


def _build_tree(lengths: list[int] | tuple[int, ...]) -> _Tree:
    """Build a canonical Huffman tree from code lengths."""
    counts = [0] * 16
    max_sym = -1
    for symbol, length in enumerate(lengths):
        if length:
            max_sym = symbol
            counts[length] += 1

    offsets = [0] * 16
    available = 1
    num_codes = 0
    for length, used in enumerate(counts):
        if used > available:
            raise DataError("over-subscribed code lengths")
        available = 2 * (available - used)
        offsets[length] = num_codes
        num_codes += used

    if (num_codes > 1 and available > 0) or (num_codes == 1 and counts[1] != 1):
        raise DataError("incomplete code lengths")

    symbols = [0] * max(num_codes, 2)
    for symbol, length in enumerate(lengths):
        if length:
            symbols[offsets[length]] = symbol
            offsets[length] += 1

    if num_codes == 1:
        # Give the unused second code of length 1 a symbol that is out of range.
        counts[1] = 2
        symbols[1] = max_sym + 1

    return _Tree(tuple(counts), tuple(symbols), max_sym)


class _BitReader:
    """Least-significant-bit-first reader that yields zeros past the end."""

    def __init__(self, source: bytes) -> None:
        self.source = source
        self.pos = 0
        self.tag = 0
        self.bitcount = 0
        self.overflow = False

    def bits(self, num: int) -> int:
        while self.bitcount < num:
            if self.pos < len(self.source):
                self.tag |= self.source[self.pos] << self.bitcount
                self.pos += 1
            else:
                self.overflow = True
            self.bitcount += 8
        value = self.tag & ((1 << num) - 1)
        self.tag >>= num
        self.bitcount -= num
        return value

    def bits_base(self, num: int, base: int) -> int:
        return base + (self.bits(num) if num else 0)

    def symbol(self, tree: _Tree) -> int:
        base = 0
        offs = 0
        for length in range(1, 16):
            offs = 2 * offs + self.bits(1)
            count = tree.counts[length]
            if offs < count:
                return tree.symbols[base + offs]
            base += count
            offs -= count
        raise DataError("invalid Huffman code")


class _Inflater:
    def __init__(self, source: bytes, max_size: int | None) -> None:
        self.reader = _BitReader(source)
        self.out = bytearray()
        self.max_size = max_size

    def _room(self) -> int | None:
        if self.max_size is None:
            return None
        return self.max_size - len(self.out)

    def run(self) -> bytes:
        reader = self.reader
        while True:
            final = reader.bits(1)
            block_type = reader.bits(2)
            if block_type == 0:
                self._stored_block()
            elif block_type == 1:
                self._huffman_block(_FIXED_LITERAL_TREE, _FIXED_DISTANCE_TREE)
            elif block_type == 2:
                self._huffman_block(*self._decode_trees())
            else:
                raise DataError("invalid block type")
            if final:
                break
        if reader.overflow:
            raise DataError("unexpected end of input")
        return bytes(self.out)

    def _stored_block(self) -> None:
        reader = self.reader
        source = reader.source
        if len(source) - reader.pos < 4:
            raise DataError("truncated stored block header")
        length = int.from_bytes(source[reader.pos:reader.pos + 2], "little")
        inverse = int.from_bytes(source[reader.pos + 2:reader.pos + 4], "little")
        if length != (~inverse & 0xFFFF):
            raise DataError("stored block length check failed")
        reader.pos += 4
        if len(source) - reader.pos < length:
            raise DataError("truncated stored block")
        room = self._room()
        if room is not None and room < length:
            raise OutputSpaceError("output buffer too small")
        self.out += source[reader.pos:reader.pos + length]
        reader.pos += length
        reader.tag = 0
        reader.bitcount = 0

    def _decode_trees(self) -> tuple[_Tree, _Tree]:
        reader = self.reader
        hlit = reader.bits_base(5, 257)
        hdist = reader.bits_base(5, 1)
        hclen = reader.bits_base(4, 4)
        if hlit > 286 or hdist > 30:
            raise DataError("too many length or distance codes")

        code_lengths = [0] * 19
        for index in _CLC_ORDER[:hclen]:
            code_lengths[index] = reader.bits(3)
        length_tree = _build_tree(code_lengths)
        if length_tree.max_sym == -1:
            raise DataError("empty code length tree")

        total = hlit + hdist
        lengths: list[int] = []
        while len(lengths) < total:
            sym = reader.symbol(length_tree)
            if sym > length_tree.max_sym:
                raise DataError("invalid code length symbol")
            if sym == 16:
                if not lengths:
                    raise DataError("repeat with no previous length")
                value = lengths[-1]
                repeat = reader.bits_base(2, 3)
            elif sym == 17:
                value = 0
                repeat = reader.bits_base(3, 3)
            elif sym == 18:
                value = 0
                repeat = reader.bits_base(7, 11)
            else:
                value = sym
                repeat = 1
            if repeat > total - len(lengths):
                raise DataError("code lengths overrun")
            lengths.extend([value] * repeat)

        if lengths[256] == 0:
            raise DataError("missing end-of-block code")
        return _build_tree(lengths[:hlit]), _build_tree(lengths[hlit:])

    def _huffman_block(self, lit_tree: _Tree, dist_tree: _Tree) -> None:
        reader = self.reader
        out = self.out
        while True:
            sym = reader.symbol(lit_tree)
            if reader.overflow:
                raise DataError("unexpected end of input")
            if sym < 256:
                if self.max_size is not None and len(out) >= self.max_size:
                    raise OutputSpaceError("output buffer too small")
                out.append(sym)
                continue
            if sym == 256:
                return
            if sym > lit_tree.max_sym or sym - 257 > 28 or dist_tree.max_sym == -1:
                raise DataError("invalid length symbol")
            sym -= 257
            length = reader.bits_base(_LENGTH_BITS[sym], _LENGTH_BASE[sym])
            dist = reader.symbol(dist_tree)
            if dist > dist_tree.max_sym or dist > 29:
                raise DataError("invalid distance symbol")
            offset = reader.bits_base(_DIST_BITS[dist], _DIST_BASE[dist])
            if offset > len(out):
                raise DataError("distance reaches before start of output")
            room = self._room()
            if room is not None and room < length:
                raise OutputSpaceError("output buffer too small")
            start = len(out) - offset
            if offset >= length:
                out += out[start:start + length]
            else:
                pattern = out[start:]
                out += (pattern * (length // offset + 1))[:length]


def uncompress(source: bytes | bytearray | memoryview, max_size: int | None = None) -> bytes:
    """Inflate raw deflate data, producing at most ``max_size`` bytes.

    Raises DataError for malformed input and OutputSpaceError when the
    output would not fit in ``max_size`` bytes.
    """
    if max_size is not None and max_size < 0:
        raise ValueError("max_size must not be negative")
    return _Inflater(bytes(source), max_size).run()