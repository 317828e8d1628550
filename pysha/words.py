# words.py
# Fixed-width unsigned words, see definition in NIST FIPS 180-4, Section 2.2 and 3.2

from __future__ import annotations

import typing as t

from .utils import ReadableBuffer


class Word(object):
    """Width descriptor for unsigned words of `bits` bits.

    Values stay plain ints in `[0, 2**bits)`; every operation wraps modulo
    `2**bits`. Compression and permutation code is written once against
    this interface and instantiated with `U32` or `U64`."""

    __slots__: tuple = ("bits", "size", "mask")

    def __init__(self, bits: int) -> None:
        if bits < 1:
            raise ValueError(f"Word width must be positive, got {bits}")
        object.__setattr__(self, "bits", bits)
        object.__setattr__(self, "size", (bits + 7) // 8)
        object.__setattr__(self, "mask", (1 << bits) - 1)

    def __setattr__(self, key: str, value: t.Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"Word({self.bits})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Word) and other.bits == self.bits

    def __hash__(self) -> int:
        return hash((Word, self.bits))

    def __reduce__(self) -> tuple:
        return (Word, (self.bits,))

    def __copy__(self) -> Word:
        return self

    def __deepcopy__(self, memo: dict) -> Word:
        return self

    # Operations on words
    def rotl(self, x: int, n: int) -> int:
        return ((x << n) | (x >> (self.bits - n))) & self.mask

    def rotr(self, x: int, n: int) -> int:
        return ((x >> n) | (x << (self.bits - n))) & self.mask

    @staticmethod
    def shr(x: int, n: int) -> int:
        return x >> n

    def add(self, *xs: int) -> int:
        """Addition modulo 2**bits"""
        return sum(xs) & self.mask

    def invert(self, x: int) -> int:
        return x ^ self.mask

    # Endian conversions
    def to_be_bytes(self, x: int) -> bytes:
        return (x & self.mask).to_bytes(self.size, "big")

    def from_be_bytes(self, data: ReadableBuffer) -> int:
        return int.from_bytes(data, "big") & self.mask

    def to_le_bytes(self, x: int) -> bytes:
        return (x & self.mask).to_bytes(self.size, "little")

    def from_le_bytes(self, data: ReadableBuffer) -> int:
        return int.from_bytes(data, "little") & self.mask

    def be_words(self, block: ReadableBuffer) -> list[int]:
        size = self.size
        return [
            int.from_bytes(block[i : i + size], "big")
            for i in range(0, len(block) - size + 1, size)
        ]

    def le_words(self, block: ReadableBuffer) -> list[int]:
        size = self.size
        return [
            int.from_bytes(block[i : i + size], "little")
            for i in range(0, len(block) - size + 1, size)
        ]


U32: Word = Word(32)
U64: Word = Word(64)


__all__: list = ["Word", "U32", "U64"]
