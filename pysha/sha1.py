# sha1.py
# SHA-1 compression, see definition in NIST FIPS 180-4, Section 6.1

from __future__ import annotations

import typing as t

from .constants import K1, SHA1_INITIAL_HASH_VALUES
from .functions import choice, parity, majority
from .utils import ReadableBuffer
from .words import U32


# (first round, last round + 1, f, K); rounds 60..79 reuse parity
ROUND_SCHEDULE: tuple = (
    (0, 20, choice, K1[0]),
    (20, 40, parity, K1[1]),
    (40, 60, majority, K1[2]),
    (60, 80, parity, K1[3]),
)


def message_schedule(block: ReadableBuffer) -> list[int]:
    """Expand one 64-byte block into the 80-word schedule W."""
    W: list = U32.be_words(block)
    for t_ in range(16, 80):
        W.append(U32.rotl(W[t_ - 3] ^ W[t_ - 8] ^ W[t_ - 14] ^ W[t_ - 16], 1))
    return W


def round_step(registers: tuple, w: int, f: t.Callable, k: int) -> tuple:
    """One SHA-1 round: `(a, b, c, d, e) <- (T, a, ROTL^30(b), c, d)`."""
    a, b, c, d, e = registers
    temp = U32.add(U32.rotl(a, 5), f(b, c, d), e, k, w)
    return temp, a, U32.rotl(b, 30), c, d


class Sha1State(object):
    """Five 32-bit registers holding the running SHA-1 hash value."""

    __slots__: tuple = ("H",)

    word = U32
    size: int = 5

    def __init__(self, initial_hash_values: t.Sequence[int] = SHA1_INITIAL_HASH_VALUES) -> None:
        if len(initial_hash_values) != self.size:
            raise ValueError(f"SHA-1 state takes {self.size} words")
        self.H: list = [h & U32.mask for h in initial_hash_values]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Sha1State) and self.H == other.H

    def __repr__(self) -> str:
        return f"Sha1State({', '.join(f'0x{h:08X}' for h in self.H)})"

    @property
    def registers(self) -> tuple:
        return tuple(self.H)

    def compress(self, block: ReadableBuffer) -> None:
        W = message_schedule(block)
        registers = tuple(self.H)

        for start, end, f, k in ROUND_SCHEDULE:
            for t_ in range(start, end):
                registers = round_step(registers, W[t_], f, k)

        self.H = [U32.add(x, y) for x, y in zip(self.H, registers)]

    def digest(self, size: int = 20) -> bytes:
        return b"".join(U32.to_be_bytes(h) for h in self.H)[:size]


__all__: list = ["ROUND_SCHEDULE", "message_schedule", "round_step", "Sha1State"]
