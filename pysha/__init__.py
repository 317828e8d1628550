# pysha
# Pure-Python SHA-1, SHA-2 (FIPS 180-4) and SHA-3 (FIPS 202) hash functions.

import logging

from .main import (
    HASH,
    HashSnapshot,
    sha1,
    sha224,
    sha256,
    sha384,
    sha512,
    sha512_224,
    sha512_256,
    sha512_t,
    sha3_224,
    sha3_256,
    sha3_384,
    sha3_512,
    new,
    restore,
    compare_digest,
    algorithms_guaranteed,
    algorithms_available,
)
from .utils import HashFinalizedError, HashMismatchError
from .words import Word, U32, U64

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.2.0"

__all__: list = [
    "HASH",
    "HashSnapshot",
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
    "HashFinalizedError",
    "HashMismatchError",
    "Word",
    "U32",
    "U64",
]
