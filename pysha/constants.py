# constants.py
# Process-wide constant tables. Nothing here is mutated after import.

from __future__ import annotations

import math

from .utils import nprimes, cbrt_frac, compute_constants


# SHA-1 constants, floor(2**30 * sqrt(n)).
# See definition in NIST FIPS 180-4, Section 4.2.1
K1: tuple = tuple(math.isqrt(n << 60) for n in (2, 3, 5, 10))

# See definition in NIST FIPS 180-4, Section 4.2.2
K224: tuple = compute_constants(cbrt_frac, 32, nprimes(64))

K256: tuple = K224

# See definition in NIST FIPS 180-4, Section 4.2.3
K384: tuple = compute_constants(cbrt_frac, 64, nprimes(80))

K512 = K512_224 = K512_256 = K384


# Initial Hash Values
# See definition in NIST FIPS 180-4, Section 5.3.
SHA1_INITIAL_HASH_VALUES: tuple = (
    0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0,
)
SHA224_INITIAL_HASH_VALUES: tuple = (
    0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939,
    0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4,
)
SHA256_INITIAL_HASH_VALUES: tuple = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)
SHA384_INITIAL_HASH_VALUES: tuple = (
    0xCBBB9D5DC1059ED8, 0x629A292A367CD507, 0x9159015A3070DD17, 0x152FECD8F70E5939,
    0x67332667FFC00B31, 0x8EB44A8768581511, 0xDB0C2E0D64F98FA7, 0x47B5481DBEFA4FA4,
)
SHA512_INITIAL_HASH_VALUES: tuple = (
    0x6A09E667F3BCC908, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
    0x510E527FADE682D1, 0x9B05688C2B3E6C1F, 0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
)
SHA512_224_INITIAL_HASH_VALUES: tuple = (
    0x8C3D37C819544DA2, 0x73E1996689DCD4D6, 0x1DFAB7AE32FF9C82, 0x679DD514582F9FCF,
    0x0F6D2B697BD44DA8, 0x77E36F7304C48942, 0x3F9D85A86A1D36C8, 0x1112E6AD91D692A1,
)
SHA512_256_INITIAL_HASH_VALUES: tuple = (
    0x22312194FC2BF72C, 0x9F555FA3C84C64C2, 0x2393B86B6F53B151, 0x963877195940EABD,
    0x96283EE2A88EFFE3, 0xBE5E1E2553863992, 0x2B0199FC2C85B8AA, 0x0EB72DDC81C52CA2,
)

# FIPS 180-4, Section 5.3.6: SHA-512/t IV generation xors this into H(0)
SHA512_T_IV_MASK: int = 0xA5A5A5A5A5A5A5A5


# Merkle-Damgard padding, see NIST FIPS 180-4, Section 5.1.
# Length field size (bytes) per block size (bytes)
LENGTH_FIELD_SIZE: dict = {64: 8, 128: 16}

# Offset F in `1 + (block_size - 1) & (F - (size mod block_size))`
PAD_OFFSET: dict = {
    block_size: block_size - 1 - length_field
    for block_size, length_field in LENGTH_FIELD_SIZE.items()
}


# Keccak-f[1600] round constants, see NIST FIPS 202, Section 3.2.5
KECCAK_ROUND_CONSTANTS: tuple = (
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
    0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
    0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
    0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
    0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
)

# Rotation offsets r[x][y], see NIST FIPS 202, Section 3.2.2
KECCAK_RHO_OFFSETS: tuple = (
    (0, 36, 3, 41, 18),
    (1, 44, 10, 45, 2),
    (62, 6, 43, 15, 61),
    (28, 55, 25, 21, 56),
    (27, 20, 39, 8, 14),
)

# SHA-3 domain separation suffix, see NIST FIPS 202, Section 6.1
SHA3_SUFFIX: int = 0x06


__all__: list = [
    var for var in globals().keys() if var.isupper()
]
