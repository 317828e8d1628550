# keccak.py
# Keccak-f permutation and sponge construction, see NIST FIPS 202, Section 3 and 4.

from __future__ import annotations

import typing as t

from .constants import KECCAK_ROUND_CONSTANTS, KECCAK_RHO_OFFSETS
from .utils import ReadableBuffer
from .words import Word, U64

WIDTH: int = 5
HEIGHT: int = 5
LANES: int = WIDTH * HEIGHT


class KeccakState(object):
    """5x5 matrix of lanes, the state of Keccak-f[25 * lane.bits].

    Lanes are stored flat in FIPS 202 order, lane (x, y) at index `x + 5*y`,
    which is also the order rate bytes are absorbed and squeezed in.
    `state[x, y]` reads one lane."""

    __slots__: tuple = ("lanes", "word", "rounds")

    def __init__(self, lanes: t.Optional[t.Iterable[int]] = None, word: Word = U64) -> None:
        l = word.bits.bit_length() - 1
        if word.bits != 1 << l or l > 6:
            raise ValueError(f"Keccak lanes are 1, 2, 4, .. 64 bits wide, got {word.bits}")
        self.word: Word = word
        self.rounds: int = 12 + 2 * l
        self.lanes: list = [0] * LANES if lanes is None else [v & word.mask for v in lanes]
        if len(self.lanes) != LANES:
            raise ValueError(f"Keccak state takes {LANES} lanes, got {len(self.lanes)}")

    @classmethod
    def from_rows(cls, rows: t.Sequence[t.Sequence[int]], word: Word = U64) -> KeccakState:
        """Build a state from `rows[y][x]`."""
        return cls([lane for row in rows for lane in row], word)

    def rows(self) -> list[list[int]]:
        return [self.lanes[WIDTH * y : WIDTH * (y + 1)] for y in range(HEIGHT)]

    def __getitem__(self, xy: t.Tuple[int, int]) -> int:
        x, y = xy
        return self.lanes[x % WIDTH + WIDTH * (y % HEIGHT)]

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, KeccakState)
            and self.word == other.word
            and self.lanes == other.lanes
        )

    def __repr__(self) -> str:
        digits = self.word.size * 2
        return "KeccakState(\n%s\n)" % "\n".join(
            "  " + " ".join(f"{lane:0{digits}X}" for lane in row) for row in self.rows()
        )

    # Step mappings, NIST FIPS 202 Section 3.2
    def theta(self) -> None:
        s, word = self.lanes, self.word
        c = [s[x] ^ s[x + 5] ^ s[x + 10] ^ s[x + 15] ^ s[x + 20] for x in range(WIDTH)]
        d = [c[(x - 1) % WIDTH] ^ word.rotl(c[(x + 1) % WIDTH], 1) for x in range(WIDTH)]
        for i in range(LANES):
            s[i] ^= d[i % WIDTH]

    def rho(self) -> None:
        s, word = self.lanes, self.word
        for y in range(HEIGHT):
            for x in range(WIDTH):
                s[x + WIDTH * y] = word.rotl(s[x + WIDTH * y], KECCAK_RHO_OFFSETS[x][y] % word.bits)

    def pi(self) -> None:
        s = self.lanes
        b = [0] * LANES
        for y in range(HEIGHT):
            for x in range(WIDTH):
                # (x, y) -> (y, 2x + 3y mod 5)
                b[y + WIDTH * ((2 * x + 3 * y) % HEIGHT)] = s[x + WIDTH * y]
        self.lanes = b

    def chi(self) -> None:
        s, mask = self.lanes, self.word.mask
        for y in range(HEIGHT):
            row = s[WIDTH * y : WIDTH * (y + 1)]
            for x in range(WIDTH):
                s[x + WIDTH * y] = row[x] ^ (~row[(x + 1) % WIDTH] & row[(x + 2) % WIDTH] & mask)

    def iota(self, round_index: int) -> None:
        self.lanes[0] ^= KECCAK_ROUND_CONSTANTS[round_index] & self.word.mask

    def round(self, round_index: int) -> None:
        self.theta()
        self.rho()
        self.pi()
        self.chi()
        self.iota(round_index)

    def permute(self) -> None:
        """Keccak-f: `12 + 2*log2(lane bits)` rounds, 24 for 64-bit lanes."""
        for i in range(self.rounds):
            self.round(i)


class KeccakSponge(object):
    """Sponge over Keccak-f with `rate` bytes absorbed and squeezed per
    permutation and `output_size` bytes of output."""

    __slots__: tuple = ("state", "rate", "output_size")

    def __init__(self, rate: int, output_size: int, word: Word = U64) -> None:
        # Lanes are read from whole bytes
        if word.bits < 8:
            raise ValueError(f"Sponge lanes must be at least 8 bits wide, got {word.bits}")
        if rate <= 0 or rate % word.size or rate > LANES * word.size:
            raise ValueError(f"Invalid rate {rate} for {LANES} lanes of {word.bits} bits")
        self.state: KeccakState = KeccakState(word=word)
        self.rate: int = rate
        self.output_size: int = output_size

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, KeccakSponge)
            and (self.rate, self.output_size) == (other.rate, other.output_size)
            and self.state == other.state
        )

    @property
    def capacity(self) -> int:
        return LANES * self.state.word.size - self.rate

    @property
    def registers(self) -> tuple:
        return tuple(self.state.lanes)

    def absorb(self, block: ReadableBuffer) -> None:
        """Xor one rate-sized block into the first lanes, then permute."""
        lanes = self.state.lanes
        for i, lane in enumerate(self.state.word.le_words(block[: self.rate])):
            lanes[i] ^= lane
        self.state.permute()

    def squeeze(self, size: t.Optional[int] = None) -> bytes:
        size = self.output_size if size is None else size
        word = self.state.word
        lanes_per_block = self.rate // word.size
        output = bytearray()

        while True:
            output += b"".join(word.to_le_bytes(lane) for lane in self.state.lanes[:lanes_per_block])
            if len(output) >= size:
                break
            self.state.permute()

        return bytes(output[:size])

    def digest(self, size: t.Optional[int] = None) -> bytes:
        return self.squeeze(size)


__all__: list = ["WIDTH", "HEIGHT", "LANES", "KeccakState", "KeccakSponge"]
