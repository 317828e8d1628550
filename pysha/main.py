# main.py
# A naive Python implementation of the secure hash standard (NIST FIPS 180-4)
# and of the SHA-3 fixed-length hash functions (NIST FIPS 202).

from __future__ import annotations

import copy
import dataclasses
import functools
import hmac
import logging
import re
import typing as t
import warnings

from functools import wraps

from typing_extensions import Self

from .constants import (
    SHA1_INITIAL_HASH_VALUES,
    SHA224_INITIAL_HASH_VALUES,
    SHA256_INITIAL_HASH_VALUES,
    SHA384_INITIAL_HASH_VALUES,
    SHA512_INITIAL_HASH_VALUES,
    SHA512_224_INITIAL_HASH_VALUES,
    SHA512_256_INITIAL_HASH_VALUES,
    SHA3_SUFFIX,
)
from .keccak import KeccakSponge, KeccakState
from .preprocessing import BlockHasher, MerkleDamgardHasher, SpongeHasher
from .sha1 import Sha1State
from .sha2 import Sha2State, sha512_t_initial_hash_values
from .utils import HashFinalizedError, HashMismatchError, ReadableBuffer
from .words import Word, U32, U64

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class HashSnapshot:
    """Value copy of an in-flight hash: enough to resume it later.

    Holds no reference to the live object, so the hash it was taken from
    and every hash restored from it evolve independently."""

    name: str
    registers: tuple
    counter: int
    pending: bytes


class HASH(object):

    __slots__: tuple = (
        "_hasher",
        "digest_size",
        "block_size",
        "word",
        "family",
        "name",
        "usedforsecurity",
    )

    def __new__(cls, **kwds) -> HASH:
        if (kwds.get("name") or "").lower() == "sha1" and kwds.get(
            "usedforsecurity", False
        ):
            warnings.warn(
                "SHA-1 is not considered secure for cryptographic purposes.",
                UserWarning,
                stacklevel=3,
            )
        return super().__new__(cls)

    @t.overload
    def __init__(
        self,
        *,
        name: str,
        family: str,
        digest_size: int,
        block_size: int,
        word: Word,
        initial_hash_values: tuple = (),
        usedforsecurity: bool = True,
        counter: int = 0,
        pending: bytes = b"",
    ) -> None: ...
    def __init__(self, **kwds: t.Any) -> None:
        registers: tuple = kwds.pop("initial_hash_values", ())
        counter: int = kwds.pop("counter", 0)
        pending: bytes = kwds.pop("pending", b"")

        for key, value in kwds.items():
            object.__setattr__(self, key, value)

        self._hasher: BlockHasher = self._build(registers, counter, pending)
        logger.debug("Created %s hash object", self.name)

    def _build(self, registers: tuple, counter: int, pending: bytes) -> BlockHasher:
        if self.family == "sha1":
            return MerkleDamgardHasher(Sha1State(registers), self.block_size, counter, pending)

        if self.family == "sha2":
            return MerkleDamgardHasher(
                Sha2State(registers, self.word), self.block_size, counter, pending
            )

        if self.family == "sha3":
            sponge = KeccakSponge(self.block_size, self.digest_size, self.word)
            if registers:
                sponge.state = KeccakState(registers, self.word)
            return SpongeHasher(sponge, self.block_size, SHA3_SUFFIX, counter, pending)

        raise ValueError(f"Unsupported algorithm family: {self.family!r}")

    def __repr__(self) -> str:
        status = "finalized" if self._hasher.finalized else f"{self._hasher.counter} bytes"
        return f"<{self.name} HASH object ({status})>"

    @property
    def state(self) -> tuple:
        """Current register (or lane) values of the compression state"""
        return self._hasher.state.registers

    @property
    def finalized(self) -> bool:
        return self._hasher.finalized

    def copy(self) -> Self:
        clone = copy.copy(self)
        clone._hasher = self._hasher.copy()
        return clone

    def update(self, obj: ReadableBuffer, /) -> None:
        self._hasher.write(obj)

    write = update

    def finish(self) -> bytes:
        """Pad, compress what is left and return the digest.

        Consumes the object: any further use raises `HashFinalizedError`."""
        return self._hasher.finish().digest(self.digest_size)

    def digest(self) -> bytes:
        """Digest of the data so far; the object stays usable."""
        return self.copy().finish()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def verify(self, expected: t.Union[bytes, str]) -> None:
        if isinstance(expected, str):
            expected = bytes.fromhex(expected)
        actual = self.digest()
        if not compare_digest(actual, expected):
            raise HashMismatchError(self.name, bytes(expected), actual)

    def snapshot(self) -> HashSnapshot:
        if self.finalized:
            raise HashFinalizedError("hash object already finalized")
        logger.debug("Snapshot of %s after %d bytes", self.name, self._hasher.counter)
        return HashSnapshot(
            name=self.name,
            registers=self.state,
            counter=self._hasher.counter,
            pending=self._hasher.pending,
        )


"""
NOTE: The `usedforsecurity` parameter in the following functions is primarily advisory.
In most cases, it has no effect.  However,  for insecure algorithms like SHA-1, setting
`usedforsecurity=True` may raise a warning in security-sensitive environments.
"""

_REGISTRY: dict = {}


def _hash_factory(
    name: str,
    family: str,
    digest_size: int,
    block_size: int,
    word: Word,
    initial_hash_values: tuple = (),
) -> t.Callable[..., HASH]:

    def factory(
        string: ReadableBuffer = b"",
        *,
        usedforsecurity: bool = True,
        snapshot: t.Optional[HashSnapshot] = None,
    ) -> HASH:

        if not isinstance(string, (bytes, bytearray, memoryview)):
            raise TypeError("Strings must be encoded before hashing")

        start: dict = dict(initial_hash_values=initial_hash_values)
        if snapshot is not None:
            if snapshot.name != name:
                raise ValueError(
                    f"Cannot restore a {snapshot.name!r} snapshot as {name!r}"
                )
            start.update(
                initial_hash_values=snapshot.registers,
                counter=snapshot.counter,
                pending=snapshot.pending,
            )
            logger.debug("Restoring %s after %d bytes", name, snapshot.counter)

        h = HASH(
            name=name,
            family=family,
            digest_size=digest_size,
            block_size=block_size,
            word=word,
            usedforsecurity=usedforsecurity,
            **start,
        )

        if string:
            h.update(string)
        return h

    factory.digest_size = digest_size
    factory.block_size = block_size
    factory.name = name
    return factory


def _shadef(
    family: str,
    digest_size: int,
    block_size: int,
    word: Word,
    initial_hash_values: tuple = (),
) -> t.Callable[[t.Callable[..., HASH]], t.Callable[..., HASH]]:

    def decorator(func: t.Callable[..., HASH]) -> t.Callable[..., HASH]:
        factory = _hash_factory(
            func.__name__, family, digest_size, block_size, word, initial_hash_values
        )
        wrapper = wraps(func)(factory)
        _REGISTRY[func.__name__] = wrapper
        return wrapper

    return decorator


@_shadef("sha1", digest_size=20, block_size=64, word=U32, initial_hash_values=SHA1_INITIAL_HASH_VALUES)
def sha1(string: ReadableBuffer = b"", *, usedforsecurity: bool = True) -> HASH: ...


@_shadef("sha2", digest_size=28, block_size=64, word=U32, initial_hash_values=SHA224_INITIAL_HASH_VALUES)
def sha224(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


@_shadef("sha2", digest_size=32, block_size=64, word=U32, initial_hash_values=SHA256_INITIAL_HASH_VALUES)
def sha256(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


@_shadef("sha2", digest_size=48, block_size=128, word=U64, initial_hash_values=SHA384_INITIAL_HASH_VALUES)
def sha384(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


@_shadef("sha2", digest_size=64, block_size=128, word=U64, initial_hash_values=SHA512_INITIAL_HASH_VALUES)
def sha512(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


@_shadef("sha2", digest_size=28, block_size=128, word=U64, initial_hash_values=SHA512_224_INITIAL_HASH_VALUES)
def sha512_224(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


@_shadef("sha2", digest_size=32, block_size=128, word=U64, initial_hash_values=SHA512_256_INITIAL_HASH_VALUES)
def sha512_256(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


# SHA-3 rate is 200 - 2 * digest_size bytes, see NIST FIPS 202, Section 6.1
@_shadef("sha3", digest_size=28, block_size=144, word=U64)
def sha3_224(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


@_shadef("sha3", digest_size=32, block_size=136, word=U64)
def sha3_256(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


@_shadef("sha3", digest_size=48, block_size=104, word=U64)
def sha3_384(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


@_shadef("sha3", digest_size=64, block_size=72, word=U64)
def sha3_512(
    string: ReadableBuffer = b"", *, usedforsecurity: bool = True
) -> HASH: ...


_FIXED_T_INITIAL_HASH_VALUES: dict = {
    224: SHA512_224_INITIAL_HASH_VALUES,
    256: SHA512_256_INITIAL_HASH_VALUES,
}


@functools.lru_cache(maxsize=None)
def _sha512_t_factory(bits: int) -> t.Callable[..., HASH]:
    initial_hash_values = _FIXED_T_INITIAL_HASH_VALUES.get(bits) or sha512_t_initial_hash_values(bits)
    return _hash_factory(
        f"sha512_{bits}", "sha2", bits // 8, 128, U64, initial_hash_values
    )


def sha512_t(
    bits: int,
    string: ReadableBuffer = b"",
    *,
    usedforsecurity: bool = True,
    snapshot: t.Optional[HashSnapshot] = None,
) -> HASH:
    """SHA-512/t, FIPS 180-4 Section 6.7, for any whole-byte t below 512 except 384."""
    if not isinstance(bits, int) or bits % 8 or not 0 < bits < 512 or bits == 384:
        raise ValueError(f"SHA-512/t requires 0 < t < 512, t % 8 == 0 and t != 384, got {bits!r}")
    return _sha512_t_factory(bits)(string, usedforsecurity=usedforsecurity, snapshot=snapshot)


_SHA512_T_NAME = re.compile(r"sha512_(\d+)")


def _canonical_name(name: str) -> str:
    name = re.sub(r"^sha-", "sha", name.lower())
    return name.replace("-", "_").replace("/", "_")


def new(
    name: str,
    string: ReadableBuffer = b"",
    *,
    usedforsecurity: bool = True,
    snapshot: t.Optional[HashSnapshot] = None,
) -> HASH:
    """Return a new hash object by algorithm name, e.g. `"sha256"`,
    `"SHA-512/256"` or `"sha3-384"`."""
    algo = _canonical_name(name)

    if algo in _REGISTRY:
        return _REGISTRY[algo](string, usedforsecurity=usedforsecurity, snapshot=snapshot)

    match = _SHA512_T_NAME.fullmatch(algo)
    if match:
        return sha512_t(
            int(match.group(1)), string, usedforsecurity=usedforsecurity, snapshot=snapshot
        )

    raise ValueError(f"Unsupported algorithm: {name!r}")


def restore(snapshot: HashSnapshot) -> HASH:
    """Resume a hash computation from a `HashSnapshot`."""
    return new(snapshot.name, snapshot=snapshot, usedforsecurity=False)


def compare_digest(a: ReadableBuffer, b: ReadableBuffer, /) -> bool:
    return hmac.compare_digest(bytes(a), bytes(b))


algorithms_guaranteed: frozenset = frozenset(_REGISTRY)
algorithms_available: frozenset = algorithms_guaranteed


__all__: list = [
    "HashSnapshot",
    "HASH",
    "sha1",
    "sha224",
    "sha256",
    "sha384",
    "sha512",
    "sha512_224",
    "sha512_256",
    "sha512_t",
    "sha3_224",
    "sha3_256",
    "sha3_384",
    "sha3_512",
    "new",
    "restore",
    "compare_digest",
    "algorithms_guaranteed",
    "algorithms_available",
]
