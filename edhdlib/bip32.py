"""
Child Key Derivation
********************

The CKD functions of BIP 32 adapted to ed25519 keys as proposed by SLIP-10.

Private derivation uses ``IL`` directly as the child private key.
Public derivation adds the public point of ``IL`` to the parent public point, which makes
non-hardened public children derivable from an extended public key.
"""

import logging
import struct

from typing import Tuple

from .common import hmac_sha512
from .curve import Ed25519Curve
from .errors import (
    BadArgumentError,
    DerivationError,
    IndexOverflowError,
    InvalidSeedLengthError,
)


HARDENED_FLAG = 1 << 31
UINT32_MAX = (1 << 32) - 1

MIN_SEED_LENGTH = 16
MAX_SEED_LENGTH = 64

CATAPULT_SEED_KEY = b"Catapult seed"
ED25519_SEED_KEY = b"ed25519 seed"

# Upper bound on identity point retries in ckd_pub
MAX_CKD_ATTEMPTS = 256


def H_(x: int) -> int:
    """
    Shortcut function that "hardens" a number in a BIP44 path.
    """
    return x | HARDENED_FLAG

def is_hardened(i: int) -> bool:
    """
    Returns whether an index is hardened
    """
    return i & HARDENED_FLAG != 0

def ser32(i: int) -> bytes:
    if i < 0 or i > UINT32_MAX:
        raise BadArgumentError(f"Child index {i} is not a 32 bit unsigned integer")
    return struct.pack(">L", i)


def master_key(seed: bytes, seed_key: bytes = CATAPULT_SEED_KEY) -> Tuple[bytes, bytes]:
    """
    Generate the master private key and chain code from a seed.

    :param seed: Seed of 16 to 64 bytes
    :param seed_key: HMAC key identifying the curve
    :return: The private key and the chain code
    """
    if len(seed) < MIN_SEED_LENGTH:
        raise InvalidSeedLengthError("Seed should be at least 128 bits")
    if len(seed) > MAX_SEED_LENGTH:
        raise InvalidSeedLengthError("Seed should be at most 512 bits")

    I = hmac_sha512(seed_key, seed)
    return I[:32], I[32:]


# parent_privkey is the 32 byte ed25519 private key of the parent
# parent_chaincode is the 32 byte chaincode of the parent
# i is the index of the child being derived, hardened or not
def ckd_priv(parent_privkey: bytes, parent_chaincode: bytes, i: int) -> Tuple[bytes, bytes]:
    # 0x00 || privkey || index
    data = b"\x00" + parent_privkey + ser32(i)

    I = hmac_sha512(parent_chaincode, data)

    # Il is the child private key, Ir the child chaincode
    return (I[:32], I[32:])


def ckd_pub(parent_pubkey: bytes, parent_chaincode: bytes, i: int, curve: Ed25519Curve) -> Tuple[bytes, bytes, int]:
    """
    Derive a public child key from a public parent key.

    When the resulting point is the identity the next index is used instead,
    so the index actually used is returned with the key.

    :param parent_pubkey: The 32 byte public key of the parent
    :param parent_chaincode: The 32 byte chaincode of the parent
    :param i: The non-hardened index of the child
    :param curve: The curve engine to add points with
    :return: The child public key, the child chaincode, and the index used
    """
    if is_hardened(i):
        raise IndexOverflowError("Index cannot be larger than 2^31 - 1 for public derivation")

    for _ in range(MAX_CKD_ATTEMPTS):
        # pubkey || index
        data = parent_pubkey + ser32(i)

        I = hmac_sha512(parent_chaincode, data)
        Il = I[:32]
        Ir = I[32:]

        child_pubkey = curve.point_add(parent_pubkey, Il)
        if child_pubkey is not None:
            return (child_pubkey, Ir, i)

        logging.debug(f"Child {i} is the point at infinity, proceeding with the next index")
        i += 1
        if is_hardened(i):
            raise DerivationError("Public derivation ran out of non-hardened indexes")

    raise DerivationError(f"No valid public child found after {MAX_CKD_ATTEMPTS} indexes")
