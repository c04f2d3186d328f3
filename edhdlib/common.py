"""
Common Classes and Utilities
****************************

Network configuration and the hash functions used by key derivation, fingerprinting, and the extended key checksum.
"""

import hashlib
import hmac

from enum import Enum

from typing import Callable

from Crypto.Hash import RIPEMD160

from .errors import BadArgumentError


class Network(Enum):
    """
    The version prefixes to use when serializing extended keys.

    Each member holds the ``(public_prefix, private_prefix)`` pair of 32 bit version numbers.
    """
    MAIN = (0x0488B21E, 0x0488ADE4) #: Main network, ``xpub``/``xprv``
    TEST = (0x043587CF, 0x04358394) #: Test network, ``tpub``/``tprv``

    @property
    def public_prefix(self) -> int:
        return self.value[0]

    @property
    def private_prefix(self) -> int:
        return self.value[1]

    def __str__(self) -> str:
        return str(self.name).lower()

    def __repr__(self) -> str:
        return str(self)


def hmac_sha512(key: bytes, msg: bytes) -> bytes:
    """
    Compute HMAC-SHA512.

    :param key: The HMAC key
    :param msg: The message to authenticate
    :return: The 64 byte MAC
    """
    return hmac.new(key, msg, hashlib.sha512).digest()


def sha256(s: bytes) -> bytes:
    """
    Perform a single SHA256 hash.

    :param s: Bytes to hash
    :return: The hash
    """
    return hashlib.new('sha256', s).digest()


def sha3_256(s: bytes) -> bytes:
    """
    Perform a single SHA3-256 hash.

    :param s: Bytes to hash
    :return: The hash
    """
    return hashlib.sha3_256(s).digest()


def sha3_512(s: bytes) -> bytes:
    return hashlib.sha3_512(s).digest()


def sha512(s: bytes) -> bytes:
    return hashlib.sha512(s).digest()


def sha3_hasher(length: int = 64) -> Callable[[bytes], bytes]:
    """
    Get the SHA3 function producing a digest of ``length`` bytes.

    :param length: The digest size in bytes, either 32 or 64
    :return: The hash function
    """
    if length == 32:
        return sha3_256
    elif length == 64:
        return sha3_512
    raise BadArgumentError(f"Unsupported SHA3 digest length {length}")


def ripemd160(s: bytes) -> bytes:
    """
    Perform a single RIPEMD160 hash.

    OpenSSL 3 builds may ship without RIPEMD160, in which case pycryptodome computes it.

    :param s: Bytes to hash
    :return: The hash
    """
    try:
        return hashlib.new('ripemd160', s).digest()
    except ValueError:
        return RIPEMD160.new(s).digest()


def hash256(s: bytes) -> bytes:
    """
    Perform a double SHA256 hash.
    A SHA256 is performed on the input, and then a second
    SHA256 is performed on the result of the first SHA256

    :param s: Bytes to hash
    :return: The hash
    """
    return sha256(sha256(s))


def hash160(s: bytes) -> bytes:
    """
    Perform a single SHA3-256 hash followed by a single RIPEMD160 hash on the result of the SHA3-256 hash.
    This is the key identifier hash for ed25519 extended keys.

    :param s: Bytes to hash
    :return: The hash
    """
    return ripemd160(sha3_256(s))
