# utils.py
# Exceptions, buffer protocol and the arithmetic behind the constant tables

from __future__ import annotations

import typing as t
import math


@t.runtime_checkable
class ReadableBuffer(t.Protocol):
    def __len__(self) -> int: ...
    def __getitem__(self, index: int) -> int: ...
    def __iter__(self): ...


class HashFinalizedError(ValueError):
    """Raised when a hash object is used after `finish()`."""


class HashMismatchError(Exception):
    """Raised by `HASH.verify` when the computed digest differs from the
    expected one."""

    def __init__(self, name: str, expected: bytes, actual: bytes) -> None:
        super().__init__(
            f"{name} digest mismatch: expected {expected.hex()}, got {actual.hex()}"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


def nprimes(n: int) -> list[int]:
    """Returns the first n prime numbers"""
    primes: list = []

    def is_prime(number: int) -> bool:
        if number < 2: return False
        if number == 2: return True
        if number % 2 == 0: return False

        for i in range(3, int(math.isqrt(number)) + 1, 2):
            if number % i == 0: return False
        return True

    found, candidate = 0, 2

    while found < n:
        if is_prime(candidate):
            primes.append(candidate); found += 1
        candidate += 1

    return primes


def icbrt(n: int) -> int:
    """Returns floor(cbrt(n)) for a non-negative integer n"""
    if n < 2:
        return n
    x = 1 << -(-n.bit_length() // 3)
    while True:
        y = (2 * x + n // (x * x)) // 3
        if y >= x:
            return x
        x = y


def sqrt_frac(number: int, bits: int) -> int:
    """First `bits` bits of the fractional part of sqrt(number)"""
    return math.isqrt(number << (2 * bits)) & ((1 << bits) - 1)


def cbrt_frac(number: int, bits: int) -> int:
    """First `bits` bits of the fractional part of cbrt(number)"""
    return icbrt(number << (3 * bits)) & ((1 << bits) - 1)


def compute_constants(fn: t.Callable[[int, int], int], bits: int, primes: t.Iterable[int]) -> tuple:
    """Return `⌊frac(fn(p))·2ᵇⁱᵗˢ⌋` for each prime in *primes*."""
    return tuple(fn(prime, bits) for prime in primes)


__all__: list = [
    "ReadableBuffer",
    "HashFinalizedError",
    "HashMismatchError",
    "nprimes",
    "icbrt",
    "sqrt_frac",
    "cbrt_frac",
    "compute_constants",
]
