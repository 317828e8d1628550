# sha2.py
# SHA-224, SHA-256, SHA-384, SHA-512 and SHA-512/t compression.
# See definition in NIST FIPS 180-4, Section 6.2 to 6.7.

from __future__ import annotations

import logging
import typing as t

from .constants import K256, K512, SHA512_INITIAL_HASH_VALUES, SHA512_T_IV_MASK
from .functions import choice, majority, big_sigma, small_sigma
from .preprocessing import MerkleDamgardHasher
from .utils import ReadableBuffer
from .words import Word, U32, U64

logger = logging.getLogger(__name__)


class Sha2Parameters(t.NamedTuple):
    word: Word
    rounds: int
    K: tuple
    Sigma0: tuple
    Sigma1: tuple
    sigma0: tuple
    sigma1: tuple


# Rotation and shift amounts, FIPS 180-4 Section 4.1.2 and 4.1.3
SHA256_PARAMETERS = Sha2Parameters(
    word=U32, rounds=64, K=K256,
    Sigma0=(2, 13, 22), Sigma1=(6, 11, 25), sigma0=(7, 18, 3), sigma1=(17, 19, 10),
)
SHA512_PARAMETERS = Sha2Parameters(
    word=U64, rounds=80, K=K512,
    Sigma0=(28, 34, 39), Sigma1=(14, 18, 41), sigma0=(1, 8, 7), sigma1=(19, 61, 6),
)

PARAMETERS_BY_WORD: dict = {
    U32: SHA256_PARAMETERS,
    U64: SHA512_PARAMETERS,
}


def message_schedule(block: ReadableBuffer, params: Sha2Parameters) -> list[int]:
    """Expand one block into the `params.rounds`-word schedule W."""
    word = params.word
    W: list = word.be_words(block)
    for t_ in range(16, params.rounds):
        s0 = small_sigma(word, W[t_ - 15], *params.sigma0)
        s1 = small_sigma(word, W[t_ - 2], *params.sigma1)
        W.append(word.add(s1, W[t_ - 7], s0, W[t_ - 16]))
    return W


class Sha2State(object):
    """Eight registers of the running SHA-2 hash value.

    The same compression routine serves the 32-bit (SHA-224/256) and 64-bit
    (SHA-384/512, SHA-512/t) variants; only the parameters differ. Variants
    of the same width differ only in their initial values and in how many
    bytes of the final state are kept."""

    __slots__: tuple = ("H", "params")

    size: int = 8

    def __init__(self, initial_hash_values: t.Sequence[int], word: Word = U32) -> None:
        if len(initial_hash_values) != self.size:
            raise ValueError(f"SHA-2 state takes {self.size} words")
        self.params: Sha2Parameters = PARAMETERS_BY_WORD[word]
        self.H: list = [h & word.mask for h in initial_hash_values]

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Sha2State)
            and self.params.word == other.params.word
            and self.H == other.H
        )

    def __repr__(self) -> str:
        digits = self.params.word.size * 2
        return f"Sha2State({', '.join(f'0x{h:0{digits}X}' for h in self.H)})"

    @property
    def word(self) -> Word:
        return self.params.word

    @property
    def registers(self) -> tuple:
        return tuple(self.H)

    def compress(self, block: ReadableBuffer) -> None:
        params = self.params
        word, K = params.word, params.K
        W = message_schedule(block, params)

        a, b, c, d, e, f, g, h = self.H

        for t_ in range(params.rounds):
            s1 = big_sigma(word, e, *params.Sigma1)
            s0 = big_sigma(word, a, *params.Sigma0)
            t1 = word.add(h, s1, choice(e, f, g), K[t_], W[t_])
            t2 = word.add(s0, majority(a, b, c))

            h, g, f = g, f, e
            e = word.add(d, t1)
            d, c, b = c, b, a
            a = word.add(t1, t2)

        self.H = [word.add(x, y) for x, y in zip(self.H, (a, b, c, d, e, f, g, h))]

    def digest(self, size: int) -> bytes:
        """Big-endian register bytes, truncated to *size*."""
        return b"".join(self.word.to_be_bytes(h) for h in self.H)[:size]


def sha512_t_initial_hash_values(bits: int) -> tuple:
    """SHA-512/t IV generation function, FIPS 180-4 Section 5.3.6.

    SHA-512 with every initial word xored with `0xa5a5a5a5a5a5a5a5`, applied
    to the ASCII string `"SHA-512/t"`; the eight output words are the IV."""
    state = Sha2State([h ^ SHA512_T_IV_MASK for h in SHA512_INITIAL_HASH_VALUES], U64)
    hasher = MerkleDamgardHasher(state, 128)
    hasher.write(f"SHA-512/{bits}".encode("ascii"))
    logger.debug("Generated SHA-512/%d initial hash values", bits)
    return hasher.finish().registers


__all__: list = [
    "Sha2Parameters",
    "SHA256_PARAMETERS",
    "SHA512_PARAMETERS",
    "message_schedule",
    "Sha2State",
    "sha512_t_initial_hash_values",
]
