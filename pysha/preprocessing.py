# preprocessing.py
# Incremental message preprocessing: buffering, parsing into blocks and padding.
# See NIST FIPS 180-4, Section 5 and NIST FIPS 202, Section 5.1.

from __future__ import annotations

import copy
import logging
import typing as t

from .constants import LENGTH_FIELD_SIZE, PAD_OFFSET
from .utils import HashFinalizedError, ReadableBuffer

logger = logging.getLogger(__name__)


def zeros_pad_length(size: int, block_size: int) -> int:
    """Length of the `0x80 00 .. 00` run appended before the length field.

    Always in `1..block_size`, and leaves exactly `LENGTH_FIELD_SIZE[block_size]`
    bytes free at the end of the last block."""
    last_index = block_size - 1
    return 1 + (last_index & (PAD_OFFSET[block_size] - (size & last_index)))


def multirate_padding(used_bytes: int, rate: int, suffix: int) -> bytes:
    """`suffix || 10*1` padding up to the next multiple of *rate* bytes.

    The suffix carries the domain separation bits and the first `1` of the
    pad; see NIST FIPS 202, Section 5.1 and Appendix B.2."""
    padlen = rate - (used_bytes % rate)
    if padlen == 1:
        return bytes((suffix | 0x80,))
    return bytes((suffix,)) + bytes(padlen - 2) + b"\x80"


def _as_view(data: ReadableBuffer) -> memoryview:
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


class BlockHasher(object):
    """Streaming front end shared by every algorithm.

    Owns the byte counter, a pad buffer of one block and the compression
    state. Input may arrive in any number of writes of any length; full
    blocks are handed to `_process` as soon as they are available and the
    partial tail waits in the pad buffer. Subclasses supply the padding rule
    and how a block reaches the state."""

    __slots__: tuple = ("state", "block_size", "_counter", "_pad", "_finalized")

    def __init__(
        self, state: t.Any, block_size: int, counter: int = 0, pending: bytes = b""
    ) -> None:
        if len(pending) != counter % block_size:
            raise ValueError(
                f"Pending bytes ({len(pending)}) do not match counter {counter} "
                f"for block size {block_size}"
            )
        self.state = state
        self.block_size: int = block_size
        self._counter: int = counter
        self._pad: bytearray = bytearray(block_size)
        self._pad[: len(pending)] = pending
        self._finalized: bool = False

    @property
    def counter(self) -> int:
        """Total bytes written so far"""
        return self._counter

    @property
    def pending(self) -> bytes:
        """Buffered bytes not yet forming a complete block"""
        return bytes(self._pad[: self._counter % self.block_size])

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_open(self) -> None:
        if self._finalized:
            raise HashFinalizedError("hash object already finalized")

    def _limit(self) -> t.Optional[int]:
        return None

    def write(self, data: ReadableBuffer) -> None:
        self._check_open()
        view = _as_view(data)
        limit = self._limit()
        if limit is not None and self._counter + len(view) > limit:
            raise OverflowError(
                f"message exceeds the maximum length of {limit * 8} bits"
            )
        self._absorb(view)

    def _absorb(self, view: memoryview) -> None:
        block_size = self.block_size
        mark = self._counter % block_size
        self._counter += len(view)

        if mark:
            left = min(block_size - mark, len(view))
            self._pad[mark : mark + left] = view[:left]
            if mark + left < block_size:
                return
            self._process(self._pad)
            view = view[left:]

        while len(view) >= block_size:
            self._process(view[:block_size])
            view = view[block_size:]

        if view:
            self._pad[: len(view)] = view

    def _process(self, block: t.Union[bytearray, memoryview]) -> None:
        raise NotImplementedError

    def _pad_message(self) -> None:
        raise NotImplementedError

    def finish(self) -> t.Any:
        """Pad, drain the buffered blocks and return the final state.

        The hasher is unusable afterwards."""
        self._check_open()
        total = self._counter
        self._pad_message()
        self._finalized = True
        logger.debug("%s finalized after %d bytes", type(self).__name__, total)
        return self.state

    def copy(self) -> BlockHasher:
        self._check_open()
        return copy.deepcopy(self)


class MerkleDamgardHasher(BlockHasher):
    """Length padding: `0x80`, zeros, then the message length in bits,
    big-endian, in 8 (64-byte blocks) or 16 (128-byte blocks) bytes."""

    __slots__: tuple = ()

    @property
    def length_field_size(self) -> int:
        return LENGTH_FIELD_SIZE[self.block_size]

    def _limit(self) -> int:
        # Largest byte count whose bit length still fits the length field
        return ((1 << (8 * self.length_field_size)) - 1) // 8

    def _process(self, block: t.Union[bytearray, memoryview]) -> None:
        self.state.compress(block)

    def _pad_message(self) -> None:
        bit_length = self._counter * 8
        offset_pad = bytearray(self.block_size)
        offset_pad[0] = 0x80

        self._absorb(memoryview(offset_pad)[: zeros_pad_length(self._counter, self.block_size)])
        self._absorb(memoryview(bit_length.to_bytes(self.length_field_size, "big")))


class SpongeHasher(BlockHasher):
    """Multi-rate padding with a domain suffix; blocks are `rate` bytes."""

    __slots__: tuple = ("suffix",)

    def __init__(
        self,
        state: t.Any,
        block_size: int,
        suffix: int,
        counter: int = 0,
        pending: bytes = b"",
    ) -> None:
        super().__init__(state, block_size, counter, pending)
        self.suffix: int = suffix

    def _process(self, block: t.Union[bytearray, memoryview]) -> None:
        self.state.absorb(block)

    def _pad_message(self) -> None:
        self._absorb(memoryview(multirate_padding(self._counter, self.block_size, self.suffix)))


__all__: list = [
    "zeros_pad_length",
    "multirate_padding",
    "BlockHasher",
    "MerkleDamgardHasher",
    "SpongeHasher",
]
