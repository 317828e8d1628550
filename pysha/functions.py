from __future__ import annotations

from typing_extensions import deprecated

from .words import Word


def choice(x: int, y: int, z: int) -> int:
    '''Choice
    _
    SHA-1 -> 0 <= t <= 19, SHA-2 -> Ch(e, f, g)'''
    return (x & y) ^ (~x & z)

def parity(x: int, y: int, z: int) -> int:
    '''Parity
    _
    SHA-1 -> 20 <= t <= 39 and 60 <= t <= 79'''
    return x ^ y ^ z

def majority(x: int, y: int, z: int) -> int:
    '''Majority
    _
    SHA-1 -> 40 <= t <= 59, SHA-2 -> Maj(a, b, c)'''
    return (x & y) ^ (x & z) ^ (y & z)


def big_sigma(word: Word, x: int, s1: int, s2: int, s3: int) -> int:
    '''`ROTR^s1(x) ^ ROTR^s2(x) ^ ROTR^s3(x)`, FIPS 180-4 Σ0/Σ1'''
    return word.rotr(x, s1) ^ word.rotr(x, s2) ^ word.rotr(x, s3)

def small_sigma(word: Word, x: int, s1: int, s2: int, s3: int) -> int:
    '''`ROTR^s1(x) ^ ROTR^s2(x) ^ SHR^s3(x)`, FIPS 180-4 σ0/σ1'''
    return word.rotr(x, s1) ^ word.rotr(x, s2) ^ (x >> s3)


@deprecated('Use `Word(w).rotr(x, n)` instead')
def rotr(x: int, n: int, w: int) -> int:
    '''Rotate Right (circular right shift) operation'''
    return Word(w).rotr(x, n)

@deprecated('Use `Word(w).rotl(x, n)` instead')
def rotl(x: int, n: int, w: int) -> int:
    '''Rotate Left (circular left shift) operation'''
    return Word(w).rotl(x, n)

@deprecated('Use `Word.shr(x, n)` instead')
def shr(x: int, n: int) -> int:
    '''Right Shift operation'''
    return x >> n


__all__: list = [
    'choice', 'parity', 'majority', 'big_sigma', 'small_sigma', 'rotr', 'rotl', 'shr',
]
