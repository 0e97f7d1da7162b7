"""Boot-loader building blocks: checksums, inflate/gzip/zlib, DOL loading, printf, colours, textures and 64-bit maths."""

__version__ = "0.1.0"

__all__ = [
    "arith",
    "checksums",
    "colors",
    "containers",
    "dol",
    "inflate",
    "printf",
    "texture",
]