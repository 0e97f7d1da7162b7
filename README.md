# cubeboot

A pure-Python toolkit for the pieces of a console boot loader: unpacking a
compressed executable, laying it out in memory, and the small helpers that
go with it.

## What it provides

- **Checksums.** `cubeboot.checksums.adler32` and `crc32`. `crc32` of empty
  input is 0.
- **Raw deflate.** `cubeboot.inflate.uncompress(source, max_size=None)`
  inflates a raw deflate stream. Malformed or truncated input raises
  `DataError`. Output that would exceed `max_size` raises `OutputSpaceError`.
  Both derive from `InflateError`, which is a `ValueError`.
- **Gzip and zlib.** `cubeboot.containers.gzip_uncompress` and
  `zlib_uncompress` check the container header, inflate the payload and
  verify the trailer (length and CRC-32 for gzip, Adler-32 for zlib). Any
  failure raises `DataError`, including running out of the `max_size`
  budget.
- **DOL executables.** `cubeboot.dol` provides the following:
  - `DolHeader.parse` reads the 256-byte big-endian header. `DolHeader.pack`
    writes it back.
  - `DolHeader.text_sections()` and `data_sections()` list the `Section`s
    that have both an address and a length.
  - `Memory` is a sparse 32-bit address space with `write`, `read` and
    `fill`. Bytes never written read as zero.
  - `load_dol(data, memory)` copies the text and data sections into memory
    and zero-fills the BSS. It returns a `LoadResult` holding the header,
    the entry point and the highest text end address. That address is
    never lower than `0x80003100`.
  - `boot_compressed(gz_data, memory, capacity)` gunzips a DOL of at most
    `capacity` bytes and loads it.
  - Both loaders raise `DolLoadError` on failure.
- **Formatting.** `cubeboot.printf.sprintf(fmt, *args)` implements a compact
  printf dialect:
  - Conversions: `%c %d %i %o %p %u %s %x %X %%`.
  - Flags: `-`, `0` and `#`, plus a field width.
  - Integers follow 32-bit sizes.
  - A precision only turns on zero padding.

  `snprintf(size, fmt, *args)` returns a pair: the text that fits in a
  buffer of `size` characters including the terminator, and the length of
  the full output.
- **Colours.** `cubeboot.colors` works on packed `0xRRGGBBAA` values:
  - `rgba_pack` and `rgba_unpack`.
  - `rgb_to_hsl` and `hsl_to_rgb`, with `hue_to_rgb` as their helper.
  - `rgb_to_hsv` and `hsv_to_rgb`.
  - `hsv8_to_rgb` and `rgb_to_hsv8`, which are integer versions on 8-bit
    components.
- **Textures.** `cubeboot.texture` handles tiled GX texture data:
  - `get_pixel_rgba8` and `set_pixel_rgba8` access single pixels of RGBA8
    data.
  - `decode_rgba8` and `encode_rgba8` convert between tiles and row-major
    colours.
  - `encode_i8` writes 8x4-tiled I8 data.
- **64-bit integer maths.** `cubeboot.arith` provides fixed-width helpers:
  - Shifts.
  - Leading and trailing zero counts. These raise `ValueError` for zero.
  - `find_first_set64`.
  - Population counts.
  - Signed and unsigned division and remainder. These raise
    `ZeroDivisionError` for a zero divisor.

## Installing

```
pip install .
pip install ".[test]"   # with the test tools
```

## Example

```python
import gzip
from cubeboot.containers import gzip_uncompress
from cubeboot.dol import DolHeader, Memory, load_dol
from cubeboot.printf import sprintf

payload = gzip.compress(b"hello world")
assert gzip_uncompress(payload, 1024) == b"hello world"

print(sprintf("%08x|%-5d|%s", 0xBEEF, 42, "ok"))  # 0000beef|42   |ok

memory = Memory()
image = DolHeader(entry_point=0x80003100).pack()
result = load_dol(image, memory)
assert result.entry_point == 0x80003100
```

## What it does not do

This is a library only; it has no command-line tool. It does not run loaded
code or talk to any hardware: `Memory` is an in-process model of an address
space. It also has no timer or tick-conversion helpers and no boot-screen
logic such as button tracking, video-mode patching or animation timing.

## Running the tests

```
pytest
```