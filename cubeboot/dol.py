"""DOL executable headers and loading them into a memory image."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass, field

from .containers import gzip_uncompress
from .inflate import InflateError

DOL_HEADER_SIZE = 256
MAX_TEXT_SECTIONS = 7
MAX_DATA_SECTIONS = 11
# Lowest end address reported for the loaded text, below which nothing is flushed.
MIN_TEXT_END = 0x80003100

_HEADER_STRUCT = struct.Struct(">64I")
_ADDRESS_LIMIT = 1 << 32
_PAGE_SIZE = 0x1000


class DolLoadError(ValueError):
    """A DOL image could not be unpacked or loaded."""


@dataclass(frozen=True)
class Section:
    """One text or data section: where it lies in the file and in memory."""

    offset: int = 0
    address: int = 0
    length: int = 0

    @property
    def loaded(self) -> bool:
        return bool(self.address and self.length)


def _empty_sections(count: int) -> tuple[Section, ...]:
    return (Section(),) * count


@dataclass
class DolHeader:
    """The fixed 256-byte big-endian header of a DOL executable."""

    text: tuple[Section, ...] = field(default_factory=lambda: _empty_sections(MAX_TEXT_SECTIONS))
    data: tuple[Section, ...] = field(default_factory=lambda: _empty_sections(MAX_DATA_SECTIONS))
    bss_address: int = 0
    bss_length: int = 0
    entry_point: int = 0
    unused: tuple[int, ...] = (0,) * MAX_TEXT_SECTIONS

    def __post_init__(self) -> None:
        self.text = tuple(self.text)
        self.data = tuple(self.data)
        self.unused = tuple(self.unused)
        if len(self.text) != MAX_TEXT_SECTIONS:
            raise ValueError(f"a DOL has exactly {MAX_TEXT_SECTIONS} text sections")
        if len(self.data) != MAX_DATA_SECTIONS:
            raise ValueError(f"a DOL has exactly {MAX_DATA_SECTIONS} data sections")
        if len(self.unused) != MAX_TEXT_SECTIONS:
            raise ValueError(f"a DOL has exactly {MAX_TEXT_SECTIONS} unused words")

    @classmethod
    def parse(cls, data: bytes | bytearray | memoryview) -> DolHeader:
        """Read a header from the first 256 bytes of ``data``."""
        if len(data) < DOL_HEADER_SIZE:
            raise DolLoadError("DOL image shorter than its header")
        words = _HEADER_STRUCT.unpack_from(bytes(data[:DOL_HEADER_SIZE]))
        t, d = MAX_TEXT_SECTIONS, MAX_DATA_SECTIONS
        text_off, rest = words[:t], words[t:]
        data_off, rest = rest[:d], rest[d:]
        text_addr, rest = rest[:t], rest[t:]
        data_addr, rest = rest[:d], rest[d:]
        text_len, rest = rest[:t], rest[t:]
        data_len, rest = rest[:d], rest[d:]
        bss_address, bss_length, entry_point, *unused = rest
        return cls(
            text=tuple(Section(*parts) for parts in zip(text_off, text_addr, text_len)),
            data=tuple(Section(*parts) for parts in zip(data_off, data_addr, data_len)),
            bss_address=bss_address,
            bss_length=bss_length,
            entry_point=entry_point,
            unused=tuple(unused),
        )

    def pack(self) -> bytes:
        """Return the 256-byte encoded header."""
        words = [
            *(s.offset for s in self.text),
            *(s.offset for s in self.data),
            *(s.address for s in self.text),
            *(s.address for s in self.data),
            *(s.length for s in self.text),
            *(s.length for s in self.data),
            self.bss_address,
            self.bss_length,
            self.entry_point,
            *self.unused,
        ]
        try:
            return _HEADER_STRUCT.pack(*words)
        except struct.error as exc:
            raise ValueError(f"header field out of range: {exc}") from exc

    def text_sections(self) -> list[Section]:
        """Text sections that have both an address and a length."""
        return [section for section in self.text if section.loaded]

    def data_sections(self) -> list[Section]:
        """Data sections that have both an address and a length."""
        return [section for section in self.data if section.loaded]


class Memory:
    """Sparse 32-bit address space; bytes never written read as zero."""

    def __init__(self) -> None:
        self._pages: dict[int, bytearray] = {}

    @staticmethod
    def _check(address: int, length: int) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        if address < 0 or address + length > _ADDRESS_LIMIT:
            raise ValueError("access outside the 32-bit address space")

    def _chunks(self, address: int, length: int) -> Iterator[tuple[int, int, int, int]]:
        """Yield (page, page offset, position in request, size) pieces."""
        done = 0
        while done < length:
            page, offset = divmod(address + done, _PAGE_SIZE)
            size = min(_PAGE_SIZE - offset, length - done)
            yield page, offset, done, size
            done += size

    def write(self, address: int, data: bytes | bytearray | memoryview) -> None:
        """Store ``data`` starting at ``address``."""
        payload = bytes(data)
        self._check(address, len(payload))
        for page, offset, pos, size in self._chunks(address, len(payload)):
            buf = self._pages.setdefault(page, bytearray(_PAGE_SIZE))
            buf[offset:offset + size] = payload[pos:pos + size]

    def read(self, address: int, length: int) -> bytes:
        """Return ``length`` bytes starting at ``address``."""
        self._check(address, length)
        out = bytearray(length)
        for page, offset, pos, size in self._chunks(address, length):
            buf = self._pages.get(page)
            if buf is not None:
                out[pos:pos + size] = buf[offset:offset + size]
        return bytes(out)

    def fill(self, address: int, value: int, length: int) -> None:
        """Set ``length`` bytes at ``address`` to the low byte of ``value``."""
        self.write(address, bytes([value & 0xFF]) * length)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a DOL: its header, entry point and text end."""

    header: DolHeader
    entry_point: int
    max_address: int


def load_dol(data: bytes | bytearray | memoryview, memory: Memory) -> LoadResult:
    """Copy text and data sections into ``memory`` and clear the BSS."""
    image = bytes(data)
    header = DolHeader.parse(image)

    def copy(section: Section) -> None:
        chunk = image[section.offset:section.offset + section.length]
        if len(chunk) != section.length:
            raise DolLoadError("section extends past the end of the DOL image")
        memory.write(section.address, chunk)

    max_address = MIN_TEXT_END
    for section in header.text_sections():
        copy(section)
        max_address = max(max_address, section.address + section.length)
    for section in header.data_sections():
        copy(section)

    memory.fill(header.bss_address, 0, header.bss_length)
    return LoadResult(header=header, entry_point=header.entry_point, max_address=max_address)


def boot_compressed(
    gz_data: bytes | bytearray | memoryview, memory: Memory, capacity: int
) -> LoadResult:
    """Decompress a gzipped DOL of at most ``capacity`` bytes and load it."""
    compressed = bytes(gz_data)
    try:
        image = gzip_uncompress(compressed, capacity)
    except InflateError as exc:
        raise DolLoadError(f"decompression failed: {exc}") from exc
    expected = int.from_bytes(compressed[-4:], "little")
    if len(image) != expected:
        raise DolLoadError("decompressed size does not match the gzip trailer")
    return load_dol(image, memory)